"""Evaluation Errors
---

Every failure the engine reports is a recoverable #TermError. The `kind`
attribute names the failure so callers can branch on it without matching
message text.
"""


class TermError(ValueError):
    """Base class for all term construction and evaluation failures."""

    kind: str = "TermError"


class MissingBindingsError(TermError):
    """A variable was found while evaluating without any binding table."""

    kind = "MissingBindings"

    def __init__(self, symbol: str):
        super().__init__(f"No variable values provided (looking for {symbol})")
        self.symbol = symbol


class UnboundVariableError(TermError):
    """The binding table has no value for a variable in the term."""

    kind = "UnboundVariable"

    def __init__(self, symbol: str):
        super().__init__(f"No value provided for variable {symbol}")
        self.symbol = symbol


class DivisionByZeroError(TermError):
    kind = "DivisionByZero"

    def __init__(self):
        super().__init__("Attempted division by zero.")


class InvalidLengthError(TermError):
    """Variable text was empty or longer than one character."""

    kind = "InvalidLength"

    def __init__(self, length: int):
        if length == 0:
            message = "Variables must be one character long (none given)."
        else:
            message = f"Variables cannot be longer than one character ({length} found)."
        super().__init__(message)
        self.length = length
