"""Functions, enums, generics, options and conditionals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def is_even(num: int) -> bool:
    return num % 2 == 0


def sale_price(price: int) -> int:
    """Even prices get 10 off, odd prices 3 off."""
    return price - 10 if is_even(price) else price - 3


@dataclass
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Echo:
    text: str


@dataclass(frozen=True)
class Move:
    point: Point


@dataclass(frozen=True)
class ChangeColor:
    color: tuple[int, int, int]


Message = Quit | Echo | Move | ChangeColor


@dataclass
class State:
    """State updated by processing messages."""

    color: tuple[int, int, int]
    position: Point
    should_quit: bool = False

    def change_color(self, color: tuple[int, int, int]) -> None:
        self.color = color

    def quit(self) -> None:
        self.should_quit = True

    def echo(self, text: str) -> None:
        print(text)

    def move_position(self, point: Point) -> None:
        self.position = point

    def process(self, message: Message) -> None:
        match message:
            case Quit():
                self.quit()
            case Echo(text):
                self.echo(text)
            case Move(point):
                self.move_position(Point(point.x, point.y))
            case ChangeColor(color):
                self.change_color(color)
            case _:
                raise TypeError(f"unknown message: {message!r}")


@dataclass
class Wrapper(Generic[T]):
    """Holds a value of any type."""

    value: T


def maybe_icecream(time_of_day: int) -> int | None:
    """Pieces of ice cream left at the given hour, or None past the day's end."""
    if time_of_day < 0:
        raise ValueError("time_of_day must not be negative")
    if time_of_day <= 21:
        return 5
    if time_of_day <= 24:
        return 0
    return None


def bigger(a: int, b: int) -> int:
    return a if a > b else b


def foo_if_fizz(fizzish: str) -> str:
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"