import io
from unittest.mock import patch

import pytest

from ghclone.output import FatalError
from ghclone.prompts import get_password_input, input_yes_no, select_from_list


def _stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


@pytest.mark.parametrize("answer", ["y\n", "yes\n", "YES\n", "Y\n"])
def test_input_yes_no_accepts_yes(monkeypatch, answer):
    _stdin(monkeypatch, answer)
    assert input_yes_no("Continue? ", False) is True


@pytest.mark.parametrize("answer", ["n\n", "no\n", "maybe\n"])
def test_input_yes_no_rejects_other(monkeypatch, answer):
    _stdin(monkeypatch, answer)
    assert input_yes_no("Continue? ", True) is False


@pytest.mark.parametrize("default", [True, False])
def test_input_yes_no_empty_gives_default(monkeypatch, default):
    _stdin(monkeypatch, "\n")
    assert input_yes_no("Continue? ", default) is default


def test_input_yes_no_eof_gives_default(monkeypatch):
    _stdin(monkeypatch, "")
    assert input_yes_no("Continue? ", True) is True


def test_input_yes_no_prints_label(monkeypatch, capsys):
    _stdin(monkeypatch, "y\n")
    input_yes_no("Found 3 repositories. Continue (Y/n)? ", True)
    assert "Found 3 repositories. Continue (Y/n)? " in capsys.readouterr().out


def test_select_from_list_parses_line(monkeypatch):
    _stdin(monkeypatch, "2 0 2\n")
    assert select_from_list(3) == [2, 0]


def test_select_from_list_eof_is_fatal(monkeypatch):
    _stdin(monkeypatch, "")
    with pytest.raises(FatalError):
        select_from_list(3)


def test_select_from_list_out_of_range(monkeypatch):
    _stdin(monkeypatch, "7\n")
    with pytest.raises(FatalError, match="out of range"):
        select_from_list(3)


def test_get_password_input_returns_entered_value():
    with patch("getpass.getpass", return_value="password") as fake:
        assert get_password_input("Token: ") == "password"
    fake.assert_called_once_with("Token: ")


def test_get_password_input_error_is_fatal():
    with patch("getpass.getpass", side_effect=EOFError):
        with pytest.raises(FatalError, match="reading password input"):
            get_password_input("Token: ")