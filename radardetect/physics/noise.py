"""
Gaussian Receiver Noise Model

Relates detection threshold and probability of false alarm for a square-law
receiver that non-coherently integrates n pulses of Gaussian noise.

The integrated noise is chi-square distributed with 2n degrees of freedom,
so (with the threshold normalised to the noise power)

    Pfa = Q(n, thr)

where Q is the regularized upper incomplete gamma function.

References:
    - Marcum, J.I., "A Statistical Theory of Target Detection by Pulsed
      Radar", RAND RM-754, 1947
    - Richards, "Fundamentals of Radar Signal Processing", Ch. 6
"""

import logging
import math

from scipy import special

from .probability import Probability, computed_probability
from .solver import solve

logger = logging.getLogger(__name__)


def validate_pulse_count(n: int) -> int:
    """Return n as an int, raising ValueError unless it is a positive integer."""
    if isinstance(n, bool) or int(n) != n or n < 1:
        raise ValueError(f"Number of integrated pulses must be a positive integer, got {n}")
    return int(n)


def calculate_pfa(n: int, thr: float) -> Probability:
    """
    Probability of false alarm for a detection threshold.

    Args:
        n: Number of non-coherently integrated pulses
        thr: Detection threshold (normalised to noise power)

    Returns:
        Probability of false alarm

    Raises:
        ValueError: If n is not a positive integer or thr is negative
        ProbabilityComputationError: If the incomplete gamma evaluation
            leaves [0, 1]
    """
    n = validate_pulse_count(n)
    if not thr >= 0:
        raise ValueError(f"Detection threshold must be non-negative, got {thr}")

    return computed_probability(special.gammaincc(n, thr), "Pfa")


def calculate_threshold(n: int, pfa: Probability) -> float:
    """
    Detection threshold yielding the given probability of false alarm.

    Inverts Pfa = Q(n, thr) with the monotonic solver, starting from
    -ln(Pfa), the single pulse threshold.

    Args:
        n: Number of non-coherently integrated pulses
        pfa: Desired probability of false alarm

    Returns:
        Detection threshold (normalised to noise power)

    Raises:
        ValueError: If n is not a positive integer
    """
    n = validate_pulse_count(n)

    if pfa.value == 0.0:
        # -ln(0) is an infinite threshold, which the bracket search
        # returns as-is
        initial_guess = math.inf
    else:
        initial_guess = math.log(1.0 / pfa.value)

    thr = solve(lambda value: special.gammaincc(n, value), pfa.value, initial_guess)
    logger.debug("threshold for n=%d, Pfa=%s: %.10g", n, pfa, thr)
    return thr
