import math
from pathlib import Path

import pytest

from cassie import (
    ArcCosineTerm,
    ConstantTerm,
    DifferenceTerm,
    InvalidLengthError,
    ProductTerm,
    QuotientTerm,
    SineTerm,
    SumTerm,
    TangentTerm,
    VariableTerm,
)
from cassie.serialize import (
    bindings_from_dict,
    read_bindings,
    read_term,
    term_from_dict,
    term_to_dict,
    write_bindings,
    write_term,
)


def test_serialize_term_to_dict():
    term = VariableTerm("x") + ConstantTerm(100)
    assert term_to_dict(term) == {
        "type": "sum",
        "terms": [
            {"type": "variable", "symbol": "x"},
            {"type": "constant", "value": 100.0},
        ],
    }
    assert term_to_dict(SineTerm(ConstantTerm(0))) == {
        "type": "sine",
        "term": {"type": "constant", "value": 0.0},
    }


def test_serialize_nested_term_survives_dict_conversion():
    term = QuotientTerm(
        DifferenceTerm(ProductTerm(VariableTerm("a"), ConstantTerm(2.5))),
        TangentTerm(ArcCosineTerm(VariableTerm("ν"))),
        SumTerm(),
    )
    assert term_from_dict(term_to_dict(term)) == term


def test_serialize_write_and_read_term(tmp_path: Path):
    term = SineTerm(VariableTerm("x") + ConstantTerm(1.5))
    path = tmp_path / "term.json"
    write_term(path, term)
    assert read_term(path) == term
    assert read_term(str(path)) == term


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"type": "bogus"},
        {"value": 1.0},
        {"type": "constant"},
        {"type": "constant", "value": "1"},
        {"type": "constant", "value": True},
        {"type": "variable"},
        {"type": "sum", "terms": {"type": "constant", "value": 1.0}},
        {"type": "difference", "terms": []},
        {"type": "quotient", "terms": []},
        {"type": "sine"},
        {"type": "cosine", "term": 4},
    ],
)
def test_serialize_term_from_dict_errors(data):
    with pytest.raises(ValueError):
        term_from_dict(data)


def test_serialize_variable_symbol_length():
    with pytest.raises(InvalidLengthError):
        term_from_dict({"type": "variable", "symbol": "xy"})


def test_serialize_bindings(tmp_path: Path):
    path = tmp_path / "bindings.json"
    write_bindings(path, {"x": 28.0, "φ": 2})
    assert read_bindings(path) == {"x": 28.0, "φ": 2.0}


@pytest.mark.parametrize(
    "data", [[], {"xy": 1.0}, {"": 1.0}, {"x": "1"}, {"x": None}, {"x": False}]
)
def test_serialize_bindings_errors(data):
    with pytest.raises(ValueError):
        bindings_from_dict(data)


@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_serialize_infinite_constants(tmp_path: Path, value: float):
    term = SumTerm(VariableTerm("x"), ConstantTerm(value))
    assert term_to_dict(term)["terms"][1]["value"] == str(value)
    path = tmp_path / "term.json"
    write_term(path, term)
    assert read_term(path) == term


def test_serialize_nan_constant(tmp_path: Path):
    term = SumTerm(VariableTerm("x"), ConstantTerm(math.nan))
    path = tmp_path / "term.json"
    write_term(path, term)
    loaded = read_term(path)
    assert isinstance(loaded, SumTerm)
    assert loaded.terms[0] == VariableTerm("x")
    assert math.isnan(loaded.terms[1].reduce())


def test_serialize_non_finite_bindings(tmp_path: Path):
    path = tmp_path / "bindings.json"
    write_bindings(path, {"x": math.inf, "y": -1.0})
    assert read_bindings(path) == {"x": math.inf, "y": -1.0}
    with pytest.raises(ValueError):
        bindings_from_dict({"x": "infinity"})
