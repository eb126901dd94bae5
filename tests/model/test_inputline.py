# tests/model/test_inputline.py
import pytest

from scenarios.model.inputline import Comment, Definition, Header, parse_line
from scenarios.utils.errors import (
    NoClosingBracketError,
    NotAVarDefError,
    TextAfterClosingBracketError,
)


@pytest.mark.parametrize("line", ["", "   ", "\n", "# comment", "   # indented"])
def test_comments(line):
    assert isinstance(parse_line(line), Comment)


def test_header_is_trimmed():
    assert parse_line("[  my name ]\n") == Header("my name")


def test_definition_split_at_first_equals():
    assert parse_line("  KEY  =  a = b  ") == Definition("KEY", "a = b")


def test_definition_with_empty_value():
    assert parse_line("KEY=") == Definition("KEY", "")


@pytest.mark.parametrize(
    "line, error",
    [
        ("[name", NoClosingBracketError),
        ("[name] trailing", TextAfterClosingBracketError),
        ("no equals sign", NotAVarDefError),
    ],
)
def test_syntax_errors(line, error):
    with pytest.raises(error) as exc:
        parse_line(line)
    assert line.strip() in str(exc.value)
