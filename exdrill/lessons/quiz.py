"""Small quizzes: pricing, a string transformer and report cards."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

_ACTIONS = ("uppercase", "trim", "append")


def calculate_price_of_apples(apples: int) -> int:
    """Apples cost 2 each, or 1 each when buying more than 40."""
    if apples <= 40:
        return apples * 2
    return apples


@dataclass(frozen=True)
class Command:
    """A transformation: "uppercase", "trim" or "append" (with a repeat count)."""

    action: str
    times: int = 0

    def __post_init__(self) -> None:
        if self.action not in _ACTIONS:
            raise ValueError(f"unknown command: {self.action!r}")
        if self.times < 0:
            raise ValueError("times must not be negative")


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string."""
    output = []
    for text, command in items:
        match command.action:
            case "uppercase":
                output.append(text.upper())
            case "trim":
                output.append(text.strip())
            case "append":
                output.append(text + "bar" * command.times)
    return output


@dataclass
class ReportCard(Generic[T]):
    """A student's report card with a grade of any printable type."""

    grade: T
    student_name: str
    student_age: int

    def render(self) -> str:
        return (
            f"{self.student_name} ({self.student_age}) - "
            f"achieved a grade of {self.grade}"
        )

    def __str__(self) -> str:
        return self.render()