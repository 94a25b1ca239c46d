"""
Numerical Constants for Detection Statistics

Tolerances and defaults shared by the solver, the noise model and the
chi-square detection engine.

References:
    - Mitchell, R.L. and Walker, J.F., "Recursive Methods for Computing
      Detection Probabilities", IEEE Trans. AES, Vol. AES-7, No. 4, 1971
    - IEEE Std 686-2008, "IEEE Standard Radar Definitions"
"""

from typing import Final

# =============================================================================
# SOLVER TOLERANCES
# =============================================================================

SOLVER_TOLERANCE: Final[float] = 1e-12
"""Absolute bracket width at which the monotonic solver stops bisecting"""

SERIES_TOLERANCE: Final[float] = 1e-16
"""Relative size of the last Mitchell-Walker term at which summation stops"""

PROBABILITY_ROUNDOFF: Final[float] = 1e-12
"""Overshoot beyond [0, 1] accepted (and clipped) for computed probabilities"""

# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_PFA: Final[float] = 1e-6
"""Default probability of false alarm used by metrics and the CLI"""

DEFAULT_PULSES: Final[int] = 1
"""Default number of non-coherently integrated pulses"""

DB_TO_LINEAR_FACTOR: Final[float] = 10.0
"""Factor for dB to linear power conversion: P_linear = 10^(P_dB/10)"""
