from .about import __version__  # noqa
from .config import EvaluationConfig  # noqa
from .core.terms import (  # noqa
    STOP,
    ArcCosineTerm,
    ArcSineTerm,
    ArcTangentTerm,
    ConstantTerm,
    CosineTerm,
    DifferenceTerm,
    EvaluationResult,
    FunctionTerm,
    NaryTerm,
    ProductTerm,
    QuotientTerm,
    SineTerm,
    SumTerm,
    TangentTerm,
    Term,
    TermTypeKeys,
    VariableTerm,
    add_terms,
)
from .core.variable import Variable  # noqa
from .errors import (  # noqa
    DivisionByZeroError,
    InvalidLengthError,
    MissingBindingsError,
    TermError,
    UnboundVariableError,
)
from .types import VariableValues  # noqa
