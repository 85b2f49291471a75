"""Running or resetting a single exercise."""

from __future__ import annotations

import subprocess

from . import ui
from .exercise import CompileError, Exercise, Mode, RunError
from .verify import ExerciseFailed, test


class RunFailed(Exception):
    """Running or resetting an exercise did not succeed."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(str(exercise))
        self.exercise = exercise


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile the exercise and run it, or run its tests; raise RunFailed on failure."""
    if exercise.mode is Mode.TEST:
        try:
            test(exercise, verbose)
        except ExerciseFailed as exc:
            raise RunFailed(exercise) from exc
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> None:
    """Discard changes to the exercise by stashing them with git."""
    try:
        subprocess.run(["git", "stash", "--", str(exercise.path)])
    except OSError as exc:
        raise RunFailed(exercise) from exc


def _compile_and_run(exercise: Exercise) -> None:
    try:
        compiled = exercise.compile()
    except CompileError as exc:
        ui.warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(exc.output.stderr)
        raise RunFailed(exercise) from exc

    with compiled:
        try:
            output = compiled.run()
        except RunError as exc:
            print(exc.output.stdout)
            print(exc.output.stderr)
            ui.warn(f"Ran {exercise} with errors")
            raise RunFailed(exercise) from exc

    print(output.stdout)
    ui.success(f"Successfully ran {exercise}")