"""Exercise descriptions, compilation and completion state."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

from . import ui

RUSTC_COLOR_ARGS = ("--color", "always")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


def temp_file() -> str:
    """Return a temporary binary name unique to this process and thread."""
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def clean() -> None:
    """Remove the temporary binary if it exists."""
    try:
        os.remove(temp_file())
    except OSError:
        pass


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished process."""

    stdout: str
    stderr: str


class CompileError(Exception):
    """Compiling an exercise failed."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


class RunError(Exception):
    """Running a compiled exercise failed."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _output(proc: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(stdout=_decode(proc.stdout), stderr=_decode(proc.stderr))


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class CompiledExercise:
    """A successfully compiled exercise; closing it removes the binary."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise
        self._closed = False

    def run(self) -> ExerciseOutput:
        """Run the binary; raise RunError if it exits unsuccessfully."""
        return self.exercise._run()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *args) -> None:
        self.close()


@dataclass
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str = ""

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def __str__(self) -> str:
        return str(self.path)

    def _write_clippy_manifest(self) -> None:
        name = self.name
        cargo_toml = (
            f'[package]\nname = "{name}"\nversion = "0.0.1"\nedition = "2021"\n'
            f'[[bin]]\nname = "{name}"\npath = "{name}.rs"'
        )
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(cargo_toml, encoding="utf-8")
        except OSError as exc:
            message = (
                "Failed to write Clippy Cargo.toml file."
                if ui.no_emoji()
                else "Failed to write 📎 Clippy 📎 Cargo.toml file."
            )
            raise OSError(message) from exc

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompileError with the output on failure."""
        source = str(self.path)
        if self.mode is Mode.COMPILE:
            cmd = ["rustc", source, "-o", temp_file(), *RUSTC_COLOR_ARGS]
        elif self.mode is Mode.TEST:
            cmd = ["rustc", "--test", source, "-o", temp_file(), *RUSTC_COLOR_ARGS]
        else:
            self._write_clippy_manifest()
            # Build a binary too, so that clippy exercises can be run afterwards.
            subprocess.run(
                ["rustc", source, "-o", temp_file(), *RUSTC_COLOR_ARGS],
                capture_output=True,
            )
            # A clean is required so that clippy reports every lint.
            subprocess.run(
                ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
                 *RUSTC_COLOR_ARGS],
                capture_output=True,
            )
            cmd = [
                "cargo", "clippy", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
                *RUSTC_COLOR_ARGS, "--", "-D", "warnings", "-D", "clippy::float_cmp",
            ]
        proc = subprocess.run(cmd, capture_output=True)
        if proc.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompileError(_output(proc))

    def _run(self) -> ExerciseOutput:
        cmd = [temp_file()]
        if self.mode is Mode.TEST:
            cmd.append("--show-output")
        proc = subprocess.run(cmd, capture_output=True)
        output = _output(proc)
        if proc.returncode != 0:
            raise RunError(output)
        return output

    def state(self) -> tuple[ContextLine, ...]:
        """Return the lines around the pending marker; empty when done."""
        source = self.path.read_text(encoding="utf-8", errors="replace")
        if not I_AM_DONE_REGEX.search(source):
            return ()
        lines = _lines(source)
        marker = next(
            (i for i, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)), None
        )
        if marker is None:
            return ()
        first = max(marker - CONTEXT, 0)
        last = marker + CONTEXT
        return tuple(
            ContextLine(line=line, number=i + 1, important=i == marker)
            for i, line in enumerate(lines[first:last + 1], start=first)
        )

    def looks_done(self) -> bool:
        """Whether the pending marker has been removed from the source."""
        return not self.state()


def load_exercises(text: str) -> list[Exercise]:
    """Parse the exercise list from info.toml text."""
    data = tomllib.loads(text)
    try:
        return [
            Exercise(
                name=entry["name"],
                path=Path(entry["path"]),
                mode=Mode(entry["mode"]),
                hint=entry["hint"],
            )
            for entry in data.get("exercises", [])
        ]
    except KeyError as exc:
        raise ValueError(f"exercise entry is missing {exc.args[0]!r}") from exc


def load_exercise_file(path: str | os.PathLike = "info.toml") -> list[Exercise]:
    """Read and parse an info.toml file."""
    return load_exercises(Path(path).read_text(encoding="utf-8"))