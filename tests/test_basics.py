import pytest

from exdrill.lessons.basics import (
    ChangeColor,
    Echo,
    Move,
    Point,
    Quit,
    State,
    Wrapper,
    bigger,
    foo_if_fizz,
    is_even,
    maybe_icecream,
    sale_price,
)


def test_sale_price():
    assert sale_price(51) == 48
    assert sale_price(50) == 40


def test_is_true_when_even():
    assert is_even(6) is True


def test_is_false_when_odd():
    assert is_even(5) is False


def test_match_message_call(capsys):
    state = State(color=(0, 0, 0), position=Point(0, 0))
    state.process(ChangeColor((255, 0, 255)))
    state.process(Echo("hello world"))
    state.process(Move(Point(10, 15)))
    state.process(Quit())
    assert state.position.x == 10
    assert state.position.y == 15
    assert state.color == (255, 0, 255)
    assert state.should_quit is True
    assert capsys.readouterr().out == "hello world\n"


def test_process_rejects_unknown_message():
    state = State(color=(0, 0, 0), position=Point(0, 0))
    with pytest.raises(TypeError):
        state.process("quit")


def test_store_u32_in_wrapper():
    assert Wrapper(42).value == 42


def test_store_str_in_wrapper():
    assert Wrapper("Foo").value == "Foo"


def test_check_icecream():
    assert maybe_icecream(9) == 5
    assert maybe_icecream(10) == 5
    assert maybe_icecream(23) == 0
    assert maybe_icecream(22) == 0
    assert maybe_icecream(25) is None


def test_raw_value():
    icecreams = maybe_icecream(12)
    assert icecreams == 5


def test_icecream_rejects_negative():
    with pytest.raises(ValueError):
        maybe_icecream(-1)


def test_ten_is_bigger_than_eight():
    assert bigger(10, 8) == 10


def test_fortytwo_is_bigger_than_thirtytwo():
    assert bigger(32, 42) == 42


def test_foo_for_fizz():
    assert foo_if_fizz("fizz") == "foo"


def test_bar_for_fuzz():
    assert foo_if_fizz("fuzz") == "bar"


def test_default_to_baz():
    assert foo_if_fizz("literally anything") == "baz"