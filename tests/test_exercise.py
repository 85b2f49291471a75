import subprocess
from pathlib import Path
from unittest import mock

import pytest

from exdrill.exercise import (
    CompileError,
    ContextLine,
    Exercise,
    Mode,
    RunError,
    clean,
    load_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"


def _done(code=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess([], code, stdout, stderr)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _exercise(tmp_path, name, text, mode=Mode.COMPILE):
    path = tmp_path / f"{name}.rs"
    path.write_text(text)
    return Exercise(name=name, path=path, mode=mode, hint="")


def test_pending_state(tmp_path):
    exercise = _exercise(tmp_path, "pending_exercise", PENDING)
    expected = (
        ContextLine("// fake_exercise", 1, False),
        ContextLine("", 2, False),
        ContextLine("// I AM NOT DONE", 3, True),
        ContextLine("", 4, False),
        ContextLine("fn main() {", 5, False),
    )
    assert exercise.state() == expected
    assert exercise.looks_done() is False


def test_finished_exercise(tmp_path):
    exercise = _exercise(tmp_path, "finished_exercise", FINISHED)
    assert exercise.state() == ()
    assert exercise.looks_done() is True


def test_context_clipped_at_start_and_crlf(tmp_path):
    text = "// I AM NOT DONE\r\n\r\n#[test]\r\nfn it_works() {}\r\n"
    exercise = _exercise(tmp_path, "pending_test_exercise", text)
    state = exercise.state()
    assert [c.number for c in state] == [1, 2, 3]
    assert state[0] == ContextLine("// I AM NOT DONE", 1, True)
    assert state[2].line == "#[test]"


def test_clean_removes_temp_file(workdir):
    Path(temp_file()).touch()
    clean()
    assert not Path(temp_file()).exists()
    clean()
    assert not Path(temp_file()).exists()


def test_compile_then_close_cleans(workdir):
    Path(temp_file()).touch()
    exercise = _exercise(workdir, "example", PENDING)
    with mock.patch("exdrill.exercise.subprocess.run", return_value=_done()) as run:
        with exercise.compile() as compiled:
            assert compiled.exercise is exercise
    assert run.call_args_list[0].args[0] == [
        "rustc", str(exercise.path), "-o", temp_file(), "--color", "always",
    ]
    assert not Path(temp_file()).exists()


def test_compile_failure_raises(workdir):
    Path(temp_file()).touch()
    exercise = _exercise(workdir, "broken", "fn main() {\n    let\n}\n")
    with mock.patch(
        "exdrill.exercise.subprocess.run",
        return_value=_done(1, b"", b"error: expected pattern"),
    ):
        with pytest.raises(CompileError) as info:
            exercise.compile()
    assert info.value.output.stderr == "error: expected pattern"
    assert not Path(temp_file()).exists()


def test_exercise_with_output(workdir):
    exercise = _exercise(workdir, "exercise_with_output", "", mode=Mode.TEST)
    results = [_done(), _done(0, b"THIS TEST TOO SHALL PASS\n")]
    with mock.patch("exdrill.exercise.subprocess.run", side_effect=results) as run:
        with exercise.compile() as compiled:
            out = compiled.run()
    assert "THIS TEST TOO SHALL PASS" in out.stdout
    assert "--test" in run.call_args_list[0].args[0]
    assert run.call_args_list[1].args[0] == [temp_file(), "--show-output"]


def test_run_failure_raises(workdir):
    exercise = _exercise(workdir, "fails", "")
    results = [_done(), _done(101, b"partial", b"panicked")]
    with mock.patch("exdrill.exercise.subprocess.run", side_effect=results):
        with exercise.compile() as compiled:
            with pytest.raises(RunError) as info:
                compiled.run()
    assert info.value.output.stdout == "partial"
    assert info.value.output.stderr == "panicked"


def test_clippy_writes_manifest(workdir):
    (workdir / "exercises" / "clippy").mkdir(parents=True)
    exercise = _exercise(workdir, "clippy1", "", mode=Mode.CLIPPY)
    with mock.patch("exdrill.exercise.subprocess.run", return_value=_done()) as run:
        exercise.compile().close()
    manifest = (workdir / "exercises" / "clippy" / "Cargo.toml").read_text()
    assert 'name = "clippy1"' in manifest
    assert 'path = "clippy1.rs"' in manifest
    assert run.call_count == 3
    assert run.call_args_list[2].args[0][:2] == ["cargo", "clippy"]


def test_load_exercises():
    text = (
        '[[exercises]]\nname = "intro1"\npath = "exercises/intro/intro1.rs"\n'
        'mode = "compile"\nhint = "No hints this time ;)"\n\n'
        '[[exercises]]\nname = "tests3"\npath = "exercises/tests/tests3.rs"\n'
        'mode = "test"\nhint = "Hello!"\n'
    )
    exercises = load_exercises(text)
    assert [e.name for e in exercises] == ["intro1", "tests3"]
    assert exercises[0].mode is Mode.COMPILE
    assert exercises[1].mode is Mode.TEST
    assert exercises[1].hint == "Hello!"
    assert str(exercises[0]) == str(Path("exercises/intro/intro1.rs"))


def test_load_exercises_rejects_bad_entries():
    with pytest.raises(ValueError):
        load_exercises('[[exercises]]\nname = "x"\npath = "x.rs"\nmode = "run"\nhint = ""\n')
    with pytest.raises(ValueError):
        load_exercises('[[exercises]]\nname = "x"\n')