"""Command-line entry point: list, run, verify and watch exercises."""

from __future__ import annotations

import argparse
import enum
import os
import queue
import subprocess
import sys
import threading
import time
from collections.abc import Iterable, Sequence
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import ui
from .exercise import Exercise, load_exercise_file
from .project import RustAnalyzerProject
from .run import RunFailed, reset, run
from .verify import ExerciseFailed, verify

VERSION = "5.2.1"

_POLL_SECONDS = 1.0
_DEBOUNCE_SECONDS = 2.0

DEFAULT_OUT = """Thanks for installing exdrill!

Is this your first time? Don't worry, exdrill was made for beginners! We are
going to teach you a lot of things about Rust, but before we can get
started, here's a couple of notes about how exdrill operates:

1. The central concept behind exdrill is that you solve exercises. These
   exercises usually have some sort of syntax error in them, which will cause
   them to fail compilation or testing. Sometimes there's a logic error instead
   of a syntax error. No matter what error, it's your job to find it and fix it!
   You'll know when you fixed it because then, the exercise will compile and
   exdrill will be able to move on to the next exercise.
2. If you run exdrill in watch mode (which we recommend), it'll automatically
   start with the first exercise. Don't get confused by an error message popping
   up as soon as you run exdrill! This is part of the exercise that you're
   supposed to solve, so open the exercise file in an editor and start your
   detective work!
3. If you're stuck on an exercise, there is a helpful hint you can view by typing
   'hint' (in watch mode), or running `exdrill hint exercise_name`.
4. If an exercise doesn't make sense to you, feel free to report it to the
   maintainers of your exercise collection.
5. If you want to use `rust-analyzer` with exercises, which provides features like
   autocompletion, run the command `exdrill lsp`.

Got all that? Great! To get started, run `exdrill watch` in order to get the first
exercise. Make sure to have your editor open!"""

FINISH_LINE = """+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+----------------------------------------------------+

We hope you enjoyed learning about the various aspects of Rust!
If you noticed any issues, please don't hesitate to report them.
You can also contribute your own exercises to help the greater community!"""

WELCOME = """       welcome to...
                  _       _ _ _
   _____  ____| |_ __(_) | |
  / _ \\ \\/ / _` | '__| | | |
 |  __/>  < (_| | |  | | | |
  \\___/_/\\_\\__,_|_|  |_|_|_|"""

_WATCH_HELP = """Commands available to you in watch mode:
  hint  - prints the current exercise's hint
  clear - clears the screen
  quit  - quits watch mode
  help  - displays this help message

Watch mode automatically re-evaluates the current exercise
when you edit a file's contents."""


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = enum.auto()
    UNFINISHED = enum.auto()


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        prefix = "the following arguments are required:"
        if message.startswith(prefix):
            missing = message[len(prefix):].strip().split(", ")
            message = "Required positional arguments not provided:\n    " + "\n    ".join(
                missing
            )
        self.print_usage(sys.stderr)
        print(message, file=sys.stderr)
        raise SystemExit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="exdrill",
        description="A collection of small exercises to get you used to "
        "writing and reading Rust code",
    )
    parser.add_argument(
        "--nocapture", action="store_true", help="show outputs from the test exercises"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="show the executable version"
    )
    sub = parser.add_subparsers(dest="command", metavar="command")
    sub.add_parser("verify", help="verifies all exercises according to the recommended order")
    sub.add_parser("watch", help="reruns `verify` when files were edited")
    for name, text in (
        ("run", "runs/tests a single exercise"),
        ("reset", 'resets a single exercise using "git stash -- <filename>"'),
        ("hint", "returns a hint for the given exercise"),
    ):
        command = sub.add_parser(name, help=text)
        command.add_argument("name", help="the name of the exercise")
    listing = sub.add_parser("list", help="lists the available exercises")
    listing.add_argument(
        "-p", "--paths", action="store_true", help="show only the paths of the exercises"
    )
    listing.add_argument(
        "-n", "--names", action="store_true", help="show only the names of the exercises"
    )
    listing.add_argument(
        "-f",
        "--filter",
        default=None,
        help="a string to match exercise names; comma separated patterns are acceptable",
    )
    listing.add_argument(
        "-u", "--unsolved", action="store_true", help="display only exercises not yet solved"
    )
    listing.add_argument(
        "-s", "--solved", action="store_true", help="display only exercises that have been solved"
    )
    sub.add_parser("lsp", help="enable rust-analyzer for exercises")
    return parser


def rustc_exists() -> bool:
    """Whether `rustc --version` can be run successfully."""
    try:
        proc = subprocess.run(["rustc", "--version"], stdout=subprocess.DEVNULL)
    except OSError:
        return False
    return proc.returncode == 0


def find_exercise(name: str, exercises: Iterable[Exercise]) -> Exercise:
    """Find an exercise by name, or the first unfinished one for "next"."""
    if name == "next":
        found = next((e for e in exercises if not e.looks_done()), None)
        if found is None:
            raise LookupError(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((e for e in exercises if e.name == name), None)
    if found is None:
        raise LookupError(f"No exercise found for '{name}'!")
    return found


def list_exercises(
    exercises: Iterable[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
) -> list[str]:
    """Return the lines of the exercise listing, ending with a progress line."""
    exercises = list(exercises)
    lines = []
    if not paths and not names:
        lines.append(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}")
    patterns = [p for p in (filter or "").lower().split(",") if p.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        done = exercise.looks_done()
        if done:
            done_count += 1
        status = "Done" if done else "Pending"
        matches = any(p in exercise.name or p in fname for p in patterns)
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter is None):
            if paths:
                lines.append(fname)
            elif names:
                lines.append(exercise.name)
            else:
                lines.append(f"{exercise.name:<17}\t{fname:<46}\t{status:<7}")
    total = len(exercises)
    percentage = f"{done_count / total * 100:.1f}" if total else "NaN"
    lines.append(f"Progress: You completed {done_count} / {total} exercises ({percentage} %).")
    return lines


class _SharedHint:
    def __init__(self, text: str) -> None:
        self._lock = threading.Lock()
        self._text = text

    def get(self) -> str:
        with self._lock:
            return self._text

    def set(self, text: str) -> None:
        with self._lock:
            self._text = text


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, events: queue.Queue) -> None:
        super().__init__()
        self._events = events

    def _push(self, event) -> None:
        if not event.is_directory:
            self._events.put(Path(os.fsdecode(event.src_path)))

    def on_created(self, event) -> None:
        self._push(event)

    def on_modified(self, event) -> None:
        self._push(event)


def _clear_screen() -> None:
    print("\x1bc")


def _watch_shell(hint: _SharedHint, should_quit: threading.Event) -> None:
    try:
        for raw in sys.stdin:
            command = raw.strip()
            if command == "hint":
                print(hint.get())
            elif command == "clear":
                print("\x1b[2J\x1b[1;1H")
            elif command == "quit":
                should_quit.set()
                print("Bye!")
            elif command == "help":
                print(_WATCH_HELP)
            else:
                print(f"unknown command: {command}")
    except (OSError, ValueError) as exc:
        print(f"error reading command: {exc}")


def _spawn_watch_shell(hint: _SharedHint, should_quit: threading.Event) -> None:
    print(
        "Welcome to watch mode! You can type 'help' to get an overview "
        "of the commands you can use here."
    )
    threading.Thread(target=_watch_shell, args=(hint, should_quit), daemon=True).start()


def _ends_with(path: Path, suffix: Path) -> bool:
    tail = Path(suffix).parts
    return bool(tail) and len(tail) <= len(path.parts) and path.parts[-len(tail):] == tail


def _recheck(
    path: Path, exercises: list[Exercise], verbose: bool, hint: _SharedHint
) -> bool:
    """Re-verify after a change; return True when everything is finished."""
    if path.suffix != ".rs" or not path.exists():
        return False
    filepath = path.resolve()
    current = [e for e in exercises if _ends_with(filepath, e.path)][:1]
    others = [
        e for e in exercises if not _ends_with(filepath, e.path) and not e.looks_done()
    ]
    num_done = sum(1 for e in exercises if e.looks_done())
    _clear_screen()
    try:
        verify(current + others, (num_done, len(exercises)), verbose)
    except ExerciseFailed as exc:
        hint.set(exc.exercise.hint)
        return False
    return True


def watch(exercises: Sequence[Exercise], verbose: bool = False) -> WatchStatus:
    """Verify exercises, then re-verify whenever an exercise file changes."""
    exercises = list(exercises)
    events: queue.Queue = queue.Queue()
    should_quit = threading.Event()
    observer = Observer()
    observer.schedule(_ChangeHandler(events), "./exercises", recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, len(exercises)), verbose)
        except ExerciseFailed as exc:
            hint = _SharedHint(exc.exercise.hint)
        else:
            return WatchStatus.FINISHED
        _spawn_watch_shell(hint, should_quit)
        changed: set[Path] = set()
        last_event = 0.0
        while True:
            try:
                changed.add(events.get(timeout=_POLL_SECONDS))
                last_event = time.monotonic()
            except queue.Empty:
                pass
            if changed and time.monotonic() - last_event >= _DEBOUNCE_SECONDS:
                ready, changed = changed, set()
                for path in sorted(ready):
                    if _recheck(path, exercises, verbose, hint):
                        return WatchStatus.FINISHED
            if should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()


def _print_listing(lines: list[str]) -> int:
    try:
        for line in lines:
            print(line)
        sys.stdout.flush()
    except BrokenPipeError:
        return 0
    except OSError:
        return 1
    return 0


def _lsp() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError:
        print("Couldn't find toolchain path, do you have `rustc` installed?")
        return 1
    try:
        project.exercises_to_json("exercises")
    except OSError:
        print("Couldn't parse the exercise files")
        return 1
    if not project.crates:
        print("Failed find any exercises, make sure you're in the exercises folder")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Failed to write rust-project.json to disk for rust-analyzer")
        return 0
    print("Successfully generated rust-project.json")
    print("rust-analyzer will now parse exercises, restart your language server or editor")
    return 0


def _watch_command(exercises: list[Exercise], verbose: bool) -> int:
    try:
        status = watch(exercises, verbose)
    except OSError as exc:
        print(f"Error: Could not watch your progress. Error message was {exc!r}.")
        print(
            "Most likely you've run out of disk space or your 'inotify limit' has been reached."
        )
        return 1
    if status is WatchStatus.FINISHED:
        emoji = "★" if ui.no_emoji() else "🎉"
        print(f"{emoji} All exercises completed! {emoji}")
        print(f"\n{FINISH_LINE}\n")
    else:
        print("We hope you're enjoying learning about Rust!")
        print(
            "If you want to continue working on the exercises at a later point, "
            "you can simply run `exdrill watch` again"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code is None:
            return 0
        return exc.code if isinstance(exc.code, int) else 1

    if args.version:
        print(f"v{VERSION}")
        return 0

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} must be run from the exercises directory")
        print("Try `cd` into the directory that holds info.toml!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    try:
        exercises = load_exercise_file("info.toml")
    except (OSError, ValueError) as exc:
        print(f"Could not read info.toml: {exc}")
        return 1
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    try:
        if args.command == "list":
            return _print_listing(
                list_exercises(
                    exercises,
                    paths=args.paths,
                    names=args.names,
                    filter=args.filter,
                    unsolved=args.unsolved,
                    solved=args.solved,
                )
            )
        if args.command == "run":
            run(find_exercise(args.name, exercises), verbose)
        elif args.command == "reset":
            reset(find_exercise(args.name, exercises))
        elif args.command == "hint":
            print(find_exercise(args.name, exercises).hint)
        elif args.command == "verify":
            verify(exercises, (0, len(exercises)), verbose)
        elif args.command == "lsp":
            return _lsp()
        elif args.command == "watch":
            return _watch_command(exercises, verbose)
    except LookupError as exc:
        print(exc.args[0])
        return 1
    except (RunFailed, ExerciseFailed):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())