from pydantic import BaseModel, Field


class EvaluationConfig(BaseModel):
    """Knobs that change how term trees are evaluated. Instances are frozen."""

    class Config:
        frozen = True

    # Divisors with a magnitude below this value fail with DivisionByZeroError
    zero_threshold: float = Field(
        1e-17, gt=0.0, description="smallest divisor magnitude allowed"
    )
    # Quotients divide by their first term twice: first / first / second / ...
    # Set this to False for the conventional first / second / ...
    repeat_first_divisor: bool = True


DEFAULT_CONFIG = EvaluationConfig()
