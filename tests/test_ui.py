import pytest

from exdrill import ui


@pytest.fixture
def plain(monkeypatch):
    monkeypatch.delenv("CLICOLOR_FORCE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def forced(monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("CLICOLOR_FORCE", "1")


def test_no_emoji_follows_environment(monkeypatch):
    monkeypatch.setenv("NO_EMOJI", "1")
    assert ui.no_emoji() is True
    monkeypatch.delenv("NO_EMOJI")
    assert ui.no_emoji() is False


def test_warn_without_emoji(plain, monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    ui.warn("boom")
    assert capsys.readouterr().out == "! boom\n"


def test_success_without_emoji(plain, monkeypatch, capsys):
    monkeypatch.setenv("NO_EMOJI", "1")
    ui.success("done")
    assert capsys.readouterr().out == "✓ done\n"


def test_warn_with_emoji(plain, monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    ui.warn("careful")
    out = capsys.readouterr().out
    assert out.startswith("⚠️")
    assert out.rstrip("\n").endswith("careful")


def test_success_with_emoji(plain, monkeypatch, capsys):
    monkeypatch.delenv("NO_EMOJI", raising=False)
    ui.success("yay")
    out = capsys.readouterr().out
    assert out.startswith("✅")
    assert out.rstrip("\n").endswith("yay")


def test_plain_styles_leave_text_alone(plain):
    assert ui.bold("hello") == "hello"
    assert ui.blue(12) == "12"


def test_forced_styles_wrap_text(forced):
    styled = ui.bold("hello")
    assert styled.startswith("\x1b[")
    assert "hello" in styled
    assert len(styled) > len("hello")
    assert ui.blue("hello") != styled
    assert "hello" in ui.blue("hello")