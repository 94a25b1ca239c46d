"""
Monotonic Equation Solver

Inverts forward functions such as Pfa(threshold) and Pd(SNR). The forward
function must be monotonic over the searched range; it may be increasing or
decreasing, the direction is found empirically.

Approach:
    1. Bracket the solution by dividing and multiplying the initial guess by
       2, 3, 4, ... so the bounds move apart at a factorial rate.
    2. Bisect the bracket until its width is below SOLVER_TOLERANCE.
"""

import logging
from typing import Callable

from .constants import SOLVER_TOLERANCE
from .exceptions import BracketError

logger = logging.getLogger(__name__)

MonotonicEquation = Callable[[float], float]
"""Forward function float -> float, assumed monotonic"""


def solve(f: MonotonicEquation, target: float, initial_guess: float) -> float:
    """
    Find x such that f(x) == target for a monotonic function f.

    The initial guess only affects speed, not the answer, since the bracket
    search widens quickly from any positive starting point.

    Args:
        f: Monotonic forward function
        target: Desired value of f
        initial_guess: Starting point for the bracket search

    Returns:
        x with f(x) approximately equal to target, to within SOLVER_TOLERANCE
        on x

    Raises:
        BracketError: If neither bound can move any further and the target is
            still not bracketed
    """
    value = f(initial_guess)

    bound_a = initial_guess
    bound_b = initial_guess
    result_a = value
    result_b = value

    # Neither bound is declared upper or lower; one ends above the target and
    # the other below it.
    i = 1
    while True:
        i += 1
        previous_a, previous_b = bound_a, bound_b
        bound_a /= i
        bound_b *= i
        result_a = f(bound_a)
        result_b = f(bound_b)
        if min(result_a, result_b) <= target <= max(result_a, result_b):
            break
        if bound_a == previous_a and bound_b == previous_b:
            raise BracketError(
                f"Cannot bracket target {target} from initial guess {initial_guess}: "
                f"bounds stuck at ({bound_a}, {bound_b}) with values "
                f"({result_a}, {result_b})"
            )

    increasing = result_a < result_b

    iterations = 0
    while abs(bound_a - bound_b) > SOLVER_TOLERANCE:
        updated_guess = 0.5 * (bound_a + bound_b)
        if updated_guess in (bound_a, bound_b):
            # bracket is already at floating point resolution
            break
        updated_result = f(updated_guess)

        if increasing:
            if updated_result > target:
                bound_b = updated_guess
            else:
                bound_a = updated_guess
        else:
            if updated_result < target:
                bound_b = updated_guess
            else:
                bound_a = updated_guess
        iterations += 1

    solution = 0.5 * (bound_a + bound_b)
    logger.debug(
        "solve: target=%g guess=%g -> %.12g (%d expansions, %d bisections)",
        target,
        initial_guess,
        solution,
        i - 1,
        iterations,
    )
    return solution
