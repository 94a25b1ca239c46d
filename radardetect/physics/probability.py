"""
Probability Values

Boundary-checked wrapper for probabilities of false alarm and detection.
Every Pfa or Pd that enters or leaves the detection engine is carried as a
Probability.
"""

import math
from dataclasses import dataclass

from .constants import PROBABILITY_ROUNDOFF
from .exceptions import DomainError, ProbabilityComputationError


@dataclass(frozen=True)
class Probability:
    """
    A probability value between zero and one inclusive.

    Attributes:
        value: Probability in [0, 1]

    Raises:
        DomainError: If value is below 0, above 1, or NaN
    """

    value: float

    def __post_init__(self) -> None:
        value = float(self.value)
        if not 0.0 <= value <= 1.0:
            raise DomainError(
                f"Probability must be between 0 and 1 (inclusive). Value is {self.value}"
            )
        object.__setattr__(self, "value", value)

    @classmethod
    def create(cls, value: float) -> "Probability":
        """Build a Probability, raising DomainError when out of range."""
        return cls(value)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return repr(self.value)


def computed_probability(value: float, quantity: str = "probability") -> Probability:
    """
    Wrap an internally derived probability.

    Summation round-off can push a result that is mathematically inside
    [0, 1] a few ulps past a bound; such values are clipped. Anything further
    out means the computation itself is broken for these inputs.

    Args:
        value: Computed probability
        quantity: Name used in the error message (e.g. "Pd", "Pfa")

    Returns:
        Probability instance

    Raises:
        ProbabilityComputationError: If value is NaN or outside
            [-PROBABILITY_ROUNDOFF, 1 + PROBABILITY_ROUNDOFF]
    """
    value = float(value)
    if math.isnan(value) or not (
        -PROBABILITY_ROUNDOFF <= value <= 1.0 + PROBABILITY_ROUNDOFF
    ):
        raise ProbabilityComputationError(
            f"Computed {quantity} = {value} is not a valid probability"
        )
    return Probability(min(max(value, 0.0), 1.0))
