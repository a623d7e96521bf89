"""Term Documents
---

Convert term trees to and from plain JSON-compatible data so they can be
stored on disk and loaded by the command line app.

```json
{"type": "sum", "terms": [{"type": "variable", "symbol": "x"},
                          {"type": "constant", "value": 100.0}]}
```
"""
import math
from pathlib import Path
from typing import Any, Dict, Type, Union

import srsly

from .core.terms import (
    ArcCosineTerm,
    ArcSineTerm,
    ArcTangentTerm,
    ConstantTerm,
    CosineTerm,
    DifferenceTerm,
    FunctionTerm,
    NaryTerm,
    ProductTerm,
    QuotientTerm,
    SineTerm,
    SumTerm,
    TangentTerm,
    Term,
    VariableTerm,
)
from .types import VariableValues

NARY_TYPES: Dict[str, Type[NaryTerm]] = {
    "sum": SumTerm,
    "difference": DifferenceTerm,
    "product": ProductTerm,
    "quotient": QuotientTerm,
}
FUNCTION_TYPES: Dict[str, Type[FunctionTerm]] = {
    "sine": SineTerm,
    "cosine": CosineTerm,
    "tangent": TangentTerm,
    "arc_sine": ArcSineTerm,
    "arc_cosine": ArcCosineTerm,
    "arc_tangent": ArcTangentTerm,
}
# JSON has no literals for these, so they are stored as text
NON_FINITE_VALUES = {"inf": math.inf, "-inf": -math.inf, "nan": math.nan}

TYPE_NAMES: Dict[Type[Term], str] = {
    **{cls: key for key, cls in NARY_TYPES.items()},
    **{cls: key for key, cls in FUNCTION_TYPES.items()},
    ConstantTerm: "constant",
    VariableTerm: "variable",
}


def constant_to_json(value: float) -> Union[float, str]:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def constant_from_json(value: Any) -> float:
    if isinstance(value, str) and value in NON_FINITE_VALUES:
        return NON_FINITE_VALUES[value]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got: {value!r}")
    return float(value)


def term_to_dict(term: Term) -> Dict[str, Any]:
    """Convert a term tree into nested dictionaries."""
    type_name = TYPE_NAMES.get(type(term), None)
    if type_name is None:
        raise ValueError(f"cannot serialize unknown term type: {type(term)}")
    if isinstance(term, ConstantTerm):
        return {"type": type_name, "value": constant_to_json(term.value)}
    if isinstance(term, VariableTerm):
        return {"type": type_name, "symbol": term.symbol}
    if isinstance(term, NaryTerm):
        return {"type": type_name, "terms": [term_to_dict(t) for t in term.terms]}
    assert isinstance(term, FunctionTerm)
    return {"type": type_name, "term": term_to_dict(term.child)}


def term_from_dict(data: Dict[str, Any]) -> Term:
    """Build a term tree from nested dictionaries made by #term_to_dict.

    # Raises
    ValueError: when the data does not describe a valid term
    """
    if not isinstance(data, dict):
        raise ValueError(f"term data must be an object, got: {data!r}")
    type_name = data.get("type", None)
    try:
        if type_name == "constant":
            return ConstantTerm(constant_from_json(data["value"]))
        if type_name == "variable":
            return VariableTerm(data["symbol"])
        if type_name in NARY_TYPES:
            children = data["terms"]
            if not isinstance(children, list):
                raise ValueError(f"'{type_name}' terms must be a list")
            return NARY_TYPES[type_name]([term_from_dict(t) for t in children])
        if type_name in FUNCTION_TYPES:
            return FUNCTION_TYPES[type_name](term_from_dict(data["term"]))
    except KeyError as error:
        raise ValueError(f"'{type_name}' term is missing key: {error}") from error
    except TypeError as error:
        raise ValueError(f"invalid '{type_name}' term: {error}") from error
    raise ValueError(f"unknown term type: {type_name!r}")


def write_term(path: Union[str, Path], term: Term) -> None:
    srsly.write_json(path, term_to_dict(term))


def read_term(path: Union[str, Path]) -> Term:
    """Load a term tree from a JSON file"""
    return term_from_dict(srsly.read_json(path))


def bindings_from_dict(data: Dict[str, Any]) -> Dict[str, float]:
    """Validate a binding table loaded from JSON, e.g. `{"x": 28.0}`"""
    if not isinstance(data, dict):
        raise ValueError(f"bindings must be an object, got: {data!r}")
    bindings: Dict[str, float] = {}
    for symbol, value in data.items():
        if len(symbol) != 1:
            raise ValueError(f"binding names must be one character: {symbol!r}")
        try:
            bindings[symbol] = constant_from_json(value)
        except ValueError as error:
            raise ValueError(f"invalid binding for {symbol}: {error}") from error
    return bindings


def write_bindings(path: Union[str, Path], bindings: VariableValues) -> None:
    data = {symbol: constant_to_json(value) for symbol, value in bindings.items()}
    srsly.write_json(path, data)


def read_bindings(path: Union[str, Path]) -> Dict[str, float]:
    return bindings_from_dict(srsly.read_json(path))
