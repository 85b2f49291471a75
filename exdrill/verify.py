"""Checking exercises one after another until one is not finished."""

from __future__ import annotations

from collections.abc import Iterable

from . import ui
from .exercise import CompiledExercise, CompileError, Exercise, Mode, RunError

_BAR_WIDTH = 60


class ExerciseFailed(Exception):
    """An exercise failed to build, failed to run, or is still pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(str(exercise))
        self.exercise = exercise


def _show_progress(position: int, total: int, message: str = "") -> None:
    filled = _BAR_WIDTH * position // total if total else _BAR_WIDTH
    filled = min(filled, _BAR_WIDTH)
    if filled < _BAR_WIDTH:
        bar = "#" * filled + ">" + "-" * (_BAR_WIDTH - filled - 1)
    else:
        bar = "#" * _BAR_WIDTH
    print(f"Progress: [{bar}] {position}/{total} {message}".rstrip())


def verify(
    exercises: Iterable[Exercise], progress: tuple[int, int], verbose: bool = False
) -> None:
    """Check each exercise in order; raise ExerciseFailed at the first unfinished one."""
    num_done, total = progress
    position = num_done
    _show_progress(position, total)
    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            finished = _compile_and_test(exercise, interactive=True, verbose=verbose)
        elif exercise.mode is Mode.COMPILE:
            finished = _compile_and_run_interactively(exercise)
        else:
            finished = _compile_only(exercise)
        if not finished:
            raise ExerciseFailed(exercise)
        position += 1
        percentage = position / total * 100.0 if total else 100.0
        _show_progress(position, total, f"({percentage:.1f} %)")


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's tests without prompting."""
    _compile_and_test(exercise, interactive=False, verbose=verbose)


def _compile(exercise: Exercise) -> CompiledExercise:
    try:
        return exercise.compile()
    except CompileError as exc:
        ui.warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stderr)
        raise ExerciseFailed(exercise) from exc


def _compile_only(exercise: Exercise) -> bool:
    with _compile(exercise):
        pass
    return prompt_for_completion(exercise, None)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    with _compile(exercise) as compiled:
        try:
            output = compiled.run()
        except RunError as exc:
            ui.warn(f"Ran {exercise} with errors")
            print(exc.output.stdout)
            print(exc.output.stderr)
            raise ExerciseFailed(exercise) from exc
    return prompt_for_completion(exercise, output.stdout)


def _compile_and_test(exercise: Exercise, interactive: bool, verbose: bool) -> bool:
    with _compile(exercise) as compiled:
        try:
            output = compiled.run()
        except RunError as exc:
            ui.warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            print(exc.output.stdout)
            raise ExerciseFailed(exercise) from exc
    if verbose:
        print(output.stdout)
    if interactive:
        return prompt_for_completion(exercise, None)
    return True


def _separator() -> str:
    return ui.bold("====================")


def prompt_for_completion(exercise: Exercise, prompt_output: str | None = None) -> bool:
    """Return True when the exercise is done; otherwise show where the marker is."""
    context = exercise.state()
    if not context:
        return True

    if exercise.mode is Mode.COMPILE:
        ui.success(f"Successfully ran {exercise}!")
    elif exercise.mode is Mode.TEST:
        ui.success(f"Successfully tested {exercise}!")
    else:
        ui.success(f"Successfully compiled {exercise}!")

    no_emoji = ui.no_emoji()
    if exercise.mode is Mode.COMPILE:
        success_msg = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        success_msg = "The code is compiling, and the tests pass!"
    elif no_emoji:
        success_msg = "The code is compiling, and Clippy is happy!"
    else:
        success_msg = "The code is compiling, and 📎 Clippy 📎 is happy!"

    print()
    if no_emoji:
        print(f"~*~ {success_msg} ~*~")
    else:
        print(f"🎉 🎉  {success_msg} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        print(_separator())
        print(prompt_output)
        print(_separator())
        print()

    print("You can keep working on this exercise,")
    print(
        "or jump into the next one by removing the "
        f"{ui.bold('`I AM NOT DONE`')} comment:"
    )
    print()
    for context_line in context:
        text = ui.bold(context_line.line) if context_line.important else context_line.line
        number = ui.blue(ui.bold(f"{context_line.number:>2}"))
        print(f"{number} {ui.blue('|')}  {text}")
    return False