import dataclasses

import pytest

from cassie import InvalidLengthError, TermError, Variable


@pytest.mark.parametrize("text", ["x", "Γ", "ν", "φ", "🙂"])
def test_variable_parse(text: str):
    var = Variable.parse(text)
    assert var.symbol == text
    assert var == Variable(text)
    assert var == Variable.named(text)


def test_variable_parse_empty():
    with pytest.raises(InvalidLengthError) as error:
        Variable.parse("")
    assert "none given" in str(error.value)
    assert error.value.kind == "InvalidLength"
    assert error.value.length == 0


def test_variable_parse_too_long():
    with pytest.raises(InvalidLengthError) as error:
        Variable.parse("xy")
    assert "(2 found)" in str(error.value)
    with pytest.raises(InvalidLengthError) as error:
        Variable("αβγ")
    assert "(3 found)" in str(error.value)


def test_variable_errors_are_value_errors():
    with pytest.raises(ValueError):
        Variable.parse("xy")
    assert issubclass(InvalidLengthError, TermError)


def test_variable_requires_text():
    with pytest.raises(TypeError):
        Variable(1)  # type:ignore


def test_variable_display_is_bare_symbol():
    assert str(Variable("x")) == "x"
    assert repr(Variable("x")) == "x"
    assert f"{Variable('α')!r}" == "α"


def test_variable_equality_and_hash():
    assert Variable("x") == Variable("x")
    assert Variable("x") != Variable("y")
    assert len({Variable("x"), Variable.parse("x"), Variable("y")}) == 2


def test_variable_is_immutable():
    var = Variable("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        var.symbol = "y"  # type:ignore
