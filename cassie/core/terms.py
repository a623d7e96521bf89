from typing import Any, Callable, Iterable, List, NamedTuple, Optional, Tuple, Type, TypeVar, Union

import numpy as np

from ..config import DEFAULT_CONFIG, EvaluationConfig
from ..errors import (
    DivisionByZeroError,
    MissingBindingsError,
    TermError,
    UnboundVariableError,
)
from ..types import VariableValues
from .variable import Variable

# Return this from a node visit function to abort a tree visit.
STOP = "stop"

OOO_FUNCTION = 4
OOO_MULTDIV = 1
OOO_ADDSUB = 0

TermTypeKeys = {
    "constant": 0,
    "variable": 1,
    "sum": 2,
    "difference": 3,
    "product": 4,
    "quotient": 5,
    "sine": 6,
    "cosine": 7,
    "tangent": 8,
    "arc_sine": 9,
    "arc_cosine": 10,
    "arc_tangent": 11,
}

NodeType = TypeVar("NodeType", bound="Term")
VisitFunction = Callable[["Term", int, Any], Any]


class EvaluationResult(NamedTuple):
    """The outcome of evaluating a term without raising.

    Exactly one of `value` and `error` is set."""

    value: Optional[float] = None
    error: Optional[TermError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Term:
    """Terms are the building blocks that expressions are made of.

    A term is either a leaf (#ConstantTerm, #VariableTerm) or a composite that
    owns its child terms. The set of term types is fixed; every concrete type
    has an entry in `TermTypeKeys`.

    Terms never change after they are constructed, so they can be compared and
    hashed by structure, and combining them always produces new trees:

    ```python
    term = VariableTerm("x") + ConstantTerm(100)
    assert term.evaluate({"x": 28.0}) == 128.0
    ```
    """

    @property
    def type_id(self) -> int:
        raise NotImplementedError("must be implemented in subclass")

    @property
    def name(self) -> str:
        raise NotImplementedError("must be implemented in subclass")

    @property
    def priority(self) -> int:
        """Order of operations priority used to decide when to add parentheses
        around this term in text output."""
        return OOO_FUNCTION

    def evaluate(
        self,
        bindings: Optional[VariableValues],
        config: Optional[EvaluationConfig] = None,
    ) -> float:
        """Evaluate the term, looking up variable values in the given bindings.

        # Arguments
        bindings (Mapping[str, float]): Values for the variables in the term
        config (EvaluationConfig): Optional evaluation settings

        # Raises
        TermError: when a variable is unbound or a division by zero is attempted

        # Returns
        (float): The numeric value of the term
        """
        return self._eval(bindings, config if config is not None else DEFAULT_CONFIG)

    def reduce(self, config: Optional[EvaluationConfig] = None) -> float:
        """Evaluate a term that has no variables in it.

        Any variable in the tree fails with #MissingBindingsError."""
        return self._eval(None, config if config is not None else DEFAULT_CONFIG)

    def try_evaluate(
        self,
        bindings: Optional[VariableValues],
        config: Optional[EvaluationConfig] = None,
    ) -> EvaluationResult:
        """Like #Term.evaluate but returns failures as an #EvaluationResult"""
        try:
            return EvaluationResult(value=self.evaluate(bindings, config))
        except TermError as error:
            return EvaluationResult(error=error)

    def try_reduce(
        self, config: Optional[EvaluationConfig] = None
    ) -> EvaluationResult:
        """Like #Term.reduce but returns failures as an #EvaluationResult"""
        try:
            return EvaluationResult(value=self.reduce(config))
        except TermError as error:
            return EvaluationResult(error=error)

    def _eval(
        self, bindings: Optional[VariableValues], config: EvaluationConfig
    ) -> float:
        raise NotImplementedError("must be implemented in subclass")

    def clone(self) -> "Term":
        """Create an independent copy of this tree"""
        raise NotImplementedError("must be implemented in subclass")

    def get_children(self) -> List["Term"]:
        return []

    def _key(self) -> Any:
        raise NotImplementedError("must be implemented in subclass")

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return False
        return self._key() == other._key()  # type:ignore

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self._key()))

    def __add__(self, other: object) -> "SumTerm":
        if not isinstance(other, Term):
            return NotImplemented
        return add_terms(self, other)

    def visit_preorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Visit the tree preorder, which visits the current node, then each of
        its children from first to last.

        The callback is passed three arguments: the node being visited, the
        current depth in the tree, and a user specified data parameter.

        !!! info

            Traversals may be canceled by returning `STOP` from any visit function.
        """
        if visit_fn and visit_fn(self, depth, data) == STOP:
            return STOP
        for child in self.get_children():
            if child.visit_preorder(visit_fn, depth + 1, data) == STOP:
                return STOP

    def visit_postorder(self, visit_fn: VisitFunction, depth=0, data=None):
        """Visit the tree postorder, which visits each child from first to last,
        and then the current node.

        *Children -> Visit*
        """
        for child in self.get_children():
            if child.visit_postorder(visit_fn, depth + 1, data) == STOP:
                return STOP
        if visit_fn and visit_fn(self, depth, data) == STOP:
            return STOP

    def to_list(self, visit: str = "preorder") -> List["Term"]:
        """Convert this node hierarchy into a list."""
        results: List[Term] = []

        def visit_fn(node, depth, data):
            return results.append(node)

        if visit == "preorder":
            self.visit_preorder(visit_fn)
        elif visit == "postorder":
            self.visit_postorder(visit_fn)
        else:
            raise ValueError(f"invalid visit order: {visit}")
        return results

    def find_type(self, instanceType: Type[NodeType]) -> List[NodeType]:
        """Find terms in this tree by type.

        - instanceType: The type to check for instances of

        Returns the found #Term objects of the given type, in preorder.
        """
        results = []

        def visit_fn(node, depth, data):
            if isinstance(node, instanceType):
                return results.append(node)

        self.visit_preorder(visit_fn)
        return results

    def free_variables(self) -> List[str]:
        """The unique variable symbols in this tree in the order they appear"""
        symbols: List[str] = []
        for node in self.find_type(VariableTerm):
            if node.symbol not in symbols:
                symbols.append(node.symbol)
        return symbols

    def to_math_ml_fragment(self) -> str:
        """Convert this single node into MathML."""
        return ""

    def to_math_ml(self) -> str:
        """Convert this term into a MathML container."""
        return "\n".join(
            [
                "<math xmlns='http:#www.w3.org/1998/Math/MathML'>",
                self.to_math_ml_fragment(),
                "</math>",
            ]
        )

    def make_ml_tag(self, tag: str, content: str) -> str:
        return f"<{tag}>{content}</{tag}>"


class ConstantTerm(Term):
    """A fixed numeric value, accessible as `node.value`"""

    value: float

    def __init__(self, value: Union[float, int]):
        if isinstance(value, str):
            raise TypeError(f"constant values must be numbers, not text: {value}")
        self.value = float(value)

    @property
    def type_id(self) -> int:
        return TermTypeKeys["constant"]

    @property
    def name(self) -> str:
        if abs(self.value) >= 1e16:
            return np.format_float_scientific(self.value, trim="-")
        if self.value % 1 == 0 and not np.signbit(self.value):
            return f"{int(self.value)}"
        return np.format_float_positional(self.value, trim="-")

    def _eval(self, bindings, config) -> float:
        return self.value

    def clone(self) -> "ConstantTerm":
        return ConstantTerm(self.value)

    def _key(self) -> Any:
        return self.value

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ConstantTerm({self.value!r})"

    def to_math_ml_fragment(self) -> str:
        return self.make_ml_tag("mn", self.name)


class VariableTerm(Term):
    """A term whose value is looked up in the binding table at evaluation time.

    ```python
    phi = VariableTerm(Variable("φ"))
    assert phi.evaluate({"φ": 68.0}) == 68.0
    ```
    """

    variable: Variable

    def __init__(self, variable: Union[Variable, str]):
        if isinstance(variable, str):
            variable = Variable.parse(variable)
        if not isinstance(variable, Variable):
            raise TypeError(f"expected a Variable or str, got: {type(variable)}")
        self.variable = variable

    @property
    def symbol(self) -> str:
        return self.variable.symbol

    @property
    def type_id(self) -> int:
        return TermTypeKeys["variable"]

    @property
    def name(self) -> str:
        return self.symbol

    def _eval(self, bindings, config) -> float:
        if bindings is None:
            raise MissingBindingsError(self.symbol)
        if self.symbol not in bindings:
            raise UnboundVariableError(self.symbol)
        return float(bindings[self.symbol])

    def clone(self) -> "VariableTerm":
        return VariableTerm(self.variable)

    def _key(self) -> Any:
        return self.variable

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"VariableTerm({self.variable!r})"

    def to_math_ml_fragment(self) -> str:
        return self.make_ml_tag("mi", self.symbol)


# ## N-ary Terms


class NaryTerm(Term):
    """A term that combines an ordered sequence of child terms.

    Children are given as positional arguments, or as a single iterable:

    ```python
    SumTerm(ConstantTerm(1), ConstantTerm(2))
    SumTerm([ConstantTerm(1), ConstantTerm(2)])
    ```
    """

    # Subclasses that cannot be evaluated without a first term set this
    requires_terms: bool = False
    # Text output for a term with no children
    empty_text: str = ""

    def __init__(self, *terms: Union[Term, Iterable[Term]]):
        if len(terms) == 1 and not isinstance(terms[0], Term):
            terms = tuple(terms[0])  # type:ignore
        for term in terms:
            if not isinstance(term, Term):
                raise TypeError(
                    f"{self.__class__.__name__} children must be terms, got: {term!r}"
                )
        if self.requires_terms and len(terms) == 0:
            raise ValueError(f"{self.__class__.__name__} requires at least one term")
        self._terms: Tuple[Term, ...] = tuple(terms)  # type:ignore

    @property
    def terms(self) -> Tuple[Term, ...]:
        return self._terms

    def get_children(self) -> List[Term]:
        return list(self._terms)

    def get_ml_name(self) -> str:
        return self.name

    def clone(self) -> "NaryTerm":
        return self.__class__([term.clone() for term in self._terms])

    def _key(self) -> Any:
        return self._terms

    def child_parens(self, index: int, child: Term) -> bool:
        """Return True if the child at the given index needs enclosing parentheses
        to keep the order of operations when rendered as text."""
        if child.priority < self.priority:
            return True
        return index > 0 and child.priority == self.priority

    def __str__(self) -> str:
        if len(self._terms) == 0:
            return self.empty_text
        parts = []
        for index, child in enumerate(self._terms):
            text = str(child)
            parts.append(f"({text})" if self.child_parens(index, child) else text)
        return f" {self.name} ".join(parts)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._terms)!r})"

    def to_math_ml_fragment(self) -> str:
        if len(self._terms) == 0:
            return self.make_ml_tag("mn", self.empty_text)
        op_ml = self.make_ml_tag("mo", self.get_ml_name())
        parts = []
        for index, child in enumerate(self._terms):
            child_ml = child.to_math_ml_fragment()
            if self.child_parens(index, child):
                child_ml = f"<mo>(</mo>{child_ml}<mo>)</mo>"
            parts.append(child_ml)
        return self.make_ml_tag("mrow", op_ml.join(parts))


class SumTerm(NaryTerm):
    """Add all terms together from first to last"""

    empty_text = "0"

    @property
    def type_id(self) -> int:
        return TermTypeKeys["sum"]

    @property
    def name(self) -> str:
        return "+"

    @property
    def priority(self) -> int:
        return OOO_ADDSUB

    def _eval(self, bindings, config) -> float:
        total = 0.0
        for term in self._terms:
            total += term._eval(bindings, config)
        return total


class DifferenceTerm(NaryTerm):
    """Subtract every following term from the first one, in order"""

    requires_terms = True

    @property
    def type_id(self) -> int:
        return TermTypeKeys["difference"]

    @property
    def name(self) -> str:
        return "-"

    @property
    def priority(self) -> int:
        return OOO_ADDSUB

    def _eval(self, bindings, config) -> float:
        first, *rest = self._terms
        difference = first._eval(bindings, config)
        for term in rest:
            difference -= term._eval(bindings, config)
        return difference


class ProductTerm(NaryTerm):
    """Multiply all terms together from first to last"""

    empty_text = "1"

    @property
    def type_id(self) -> int:
        return TermTypeKeys["product"]

    @property
    def name(self) -> str:
        return "*"

    @property
    def priority(self) -> int:
        return OOO_MULTDIV

    def get_ml_name(self) -> str:
        return "&#183;"

    def _eval(self, bindings, config) -> float:
        product = 1.0
        for term in self._terms:
            product *= term._eval(bindings, config)
        return product


class QuotientTerm(NaryTerm):
    """Divide the first term by each of the terms in order.

    !!! warning

        By default the first term is also used as the first divisor, so
        `QuotientTerm(a, b, c)` evaluates as `a / a / b / c`. Pass an
        #EvaluationConfig with `repeat_first_divisor=False` to evaluate it
        as `a / b / c`. Prefer #ProductTerm where possible.

    Divisors with a magnitude below `config.zero_threshold` fail with
    #DivisionByZeroError rather than producing an infinity.
    """

    requires_terms = True

    @property
    def type_id(self) -> int:
        return TermTypeKeys["quotient"]

    @property
    def name(self) -> str:
        return "/"

    @property
    def priority(self) -> int:
        return OOO_MULTDIV

    def get_ml_name(self) -> str:
        return "&#247;"

    def _eval(self, bindings, config) -> float:
        quotient = self._terms[0]._eval(bindings, config)
        divisors = self._terms if config.repeat_first_divisor else self._terms[1:]
        for term in divisors:
            divisor = term._eval(bindings, config)
            if abs(divisor) < config.zero_threshold:
                raise DivisionByZeroError()
            quotient /= divisor
        return quotient


# ## Trigonometric Functions


class FunctionTerm(Term):
    """A term that applies a function to the value of one child term.

    All trigonometric functions work in radians. Inputs outside of a function's
    domain (e.g. `asin(2)`) produce NaN rather than an error."""

    child: Term

    def __init__(self, child: Term):
        if not isinstance(child, Term):
            raise TypeError(
                f"{self.__class__.__name__} child must be a term, got: {child!r}"
            )
        self.child = child

    def operate(self, value: float) -> float:
        raise NotImplementedError("Must be implemented in subclass")

    def _eval(self, bindings, config) -> float:
        value = self.child._eval(bindings, config)
        with np.errstate(invalid="ignore"):
            return float(self.operate(value))

    def get_children(self) -> List[Term]:
        return [self.child]

    def clone(self) -> "FunctionTerm":
        return self.__class__(self.child.clone())

    def _key(self) -> Any:
        return self.child

    def __str__(self) -> str:
        return f"{self.name}({self.child})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.child!r})"

    def to_math_ml_fragment(self) -> str:
        child_ml = self.child.to_math_ml_fragment()
        return self.make_ml_tag(
            "mrow", f"<mi>{self.name}</mi><mo>(</mo>{child_ml}<mo>)</mo>"
        )


class SineTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["sine"]

    @property
    def name(self) -> str:
        return "sin"

    def operate(self, value: float) -> float:
        return np.sin(value)


class CosineTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["cosine"]

    @property
    def name(self) -> str:
        return "cos"

    def operate(self, value: float) -> float:
        return np.cos(value)


class TangentTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["tangent"]

    @property
    def name(self) -> str:
        return "tan"

    def operate(self, value: float) -> float:
        return np.tan(value)


class ArcSineTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["arc_sine"]

    @property
    def name(self) -> str:
        return "asin"

    def operate(self, value: float) -> float:
        return np.arcsin(value)


class ArcCosineTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["arc_cosine"]

    @property
    def name(self) -> str:
        return "acos"

    def operate(self, value: float) -> float:
        return np.arccos(value)


class ArcTangentTerm(FunctionTerm):
    @property
    def type_id(self) -> int:
        return TermTypeKeys["arc_tangent"]

    @property
    def name(self) -> str:
        return "atan"

    def operate(self, value: float) -> float:
        return np.arctan(value)


def add_terms(left: Term, right: Term) -> SumTerm:
    """Combine two terms into a single flat #SumTerm.

    Sums on either side are spliced in rather than nested, so adding
    `a + b` to `c + d` gives one sum of `[a, b, c, d]`. Neither input is
    modified; the result is built from clones of them.

    # Arguments
    left (Term): The term that comes first in the result
    right (Term): The term that comes second in the result

    # Returns
    (SumTerm): A new sum holding the children of both sides in order
    """
    if isinstance(left, SumTerm):
        terms = [term.clone() for term in left.terms]
    else:
        terms = [left.clone()]
    if isinstance(right, SumTerm):
        terms.extend(term.clone() for term in right.terms)
    else:
        terms.append(right.clone())
    return SumTerm(terms)
