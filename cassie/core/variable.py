from dataclasses import dataclass

from ..errors import InvalidLengthError


@dataclass(frozen=True)
class Variable:
    """A variable represents a value which is arbitrary or unknown.

    Variables are named by exactly one character, which is used as the key
    when looking up values in a binding table:

    ```python
    x = Variable("x")
    assert x.symbol == "x"
    assert str(Variable.parse("ν")) == "ν"
    ```
    """

    symbol: str

    def __post_init__(self):
        if not isinstance(self.symbol, str):
            raise TypeError(f"variable symbols must be str, not {type(self.symbol)}")
        if len(self.symbol) != 1:
            raise InvalidLengthError(len(self.symbol))

    @classmethod
    def named(cls, symbol: str) -> "Variable":
        """Alias for the constructor that reads better at call sites."""
        return cls(symbol)

    @classmethod
    def parse(cls, text: str) -> "Variable":
        """Create a variable from text that must be exactly one character long.

        # Raises
        InvalidLengthError: when the text is empty or has more than one character
        """
        return cls(text)

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return self.symbol
