"""
Chi-Square Detection Model with Numba JIT Optimization

Probability of detection for a square-law receiver that non-coherently
integrates n pulses, with the target return following a chi-square
fluctuation model of K degrees of freedom (or no fluctuation at all).

Pd is evaluated with the recursive method of Mitchell and Walker: each term
of the Poisson / negative-binomial mixture is built from the previous one, so
no incomplete gamma or Bessel function is evaluated inside the sum. The
series is summed until the last term is below SERIES_TOLERANCE relative to
the total; the number of terms grows with the integrated SNR x_bar = snr * n.
For K = 1 (Swerling 1) the negative binomial tail shrinks only by about
1 - 1/x_bar per term, so a Pd within 1e-6 of one (x_bar near 1e7) costs
tens of millions of terms and minutes of run time.

References:
    - Mitchell, R.L. and Walker, J.F., "Recursive Methods for Computing
      Detection Probabilities", IEEE Trans. AES, Vol. AES-7, No. 4,
      July 1971, pp. 671-676
    - Swerling, P., "Probability of Detection for Fluctuating Targets",
      RAND RM-1217, 1954
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

import numba
import numpy as np

from .constants import DB_TO_LINEAR_FACTOR, SERIES_TOLERANCE
from .noise import calculate_pfa, calculate_threshold, validate_pulse_count
from .probability import Probability, computed_probability
from .solver import solve

logger = logging.getLogger(__name__)

# Below this log-amplitude exp() underflows; terms are carried as logs instead
_LOG_UNDERFLOW = -700.0


# =============================================================================
# DEGREES OF FREEDOM
# =============================================================================


@dataclass(frozen=True)
class DegreesOfFreedom:
    """
    Chi-square degrees of freedom of the target fluctuation model.

    Either a finite K >= 1 or non-fluctuating (deterministic target return,
    the limit K -> infinity). Build with ``DegreesOfFreedom.finite(k)`` or use
    ``NON_FLUCTUATING``.

    Attributes:
        k: Degrees of freedom, None for a non-fluctuating target
    """

    k: Optional[int] = None

    def __post_init__(self) -> None:
        if self.k is None:
            return
        if isinstance(self.k, bool) or int(self.k) != self.k or self.k < 1:
            raise ValueError(f"Degrees of freedom must be a positive integer, got {self.k}")
        object.__setattr__(self, "k", int(self.k))

    @classmethod
    def finite(cls, k: int) -> "DegreesOfFreedom":
        return cls(k)

    @classmethod
    def non_fluctuating(cls) -> "DegreesOfFreedom":
        return cls(None)

    @property
    def is_fluctuating(self) -> bool:
        return self.k is not None

    def __str__(self) -> str:
        return "non-fluctuating" if self.k is None else str(self.k)


NON_FLUCTUATING = DegreesOfFreedom.non_fluctuating()


def as_degrees_of_freedom(dof: Union[int, DegreesOfFreedom, None]) -> DegreesOfFreedom:
    """Accept a DegreesOfFreedom, a plain K, or None (non-fluctuating)."""
    if isinstance(dof, DegreesOfFreedom):
        return dof
    if dof is None:
        return NON_FLUCTUATING
    return DegreesOfFreedom.finite(dof)


# =============================================================================
# NUMBA JIT-COMPILED SERIES
# =============================================================================


@numba.jit(nopython=True, cache=True)
def _mitchell_walker_jit(
    snr: float,
    thr: float,
    n: int,
    k: float,
    non_fluctuating: bool,
    err: float,
) -> Tuple[float, int]:
    """
    JIT-compiled Mitchell-Walker recursion.

    Pd = sum_j a(j, x_bar) * g(n + j, thr)

    with g the Poisson lower-tail sum of the threshold and a(j, x_bar) the
    Poisson (non-fluctuating) or negative binomial (K degrees of freedom)
    weights of the integrated SNR x_bar = snr * n.

    Amplitudes too small for a float (very large threshold or SNR) are
    carried as logarithms until they become representable, then the plain
    recursion takes over.

    Args:
        snr: Average signal-to-noise ratio per pulse [linear]
        thr: Detection threshold
        n: Number of integrated pulses
        k: Chi-square degrees of freedom (ignored when non_fluctuating)
        non_fluctuating: True for a deterministic target return
        err: Relative size of the last term at which summation stops

    Returns:
        (Probability of detection (unclipped), number of series terms)
    """
    x_bar = snr * n

    # g(n, thr)
    log_h = -thr
    h_in_log = log_h < _LOG_UNDERFLOW
    h = 0.0 if h_in_log else np.exp(-thr)
    g = h
    for i in range(1, n):
        if h_in_log:
            log_h += np.log(thr / i)
            if log_h >= _LOG_UNDERFLOW:
                h_in_log = False
                h = np.exp(log_h)
        else:
            h *= thr / i
        g += h

    # a(0, x_bar)
    if non_fluctuating:
        log_a = -x_bar
    else:
        log_a = -k * np.log1p(x_bar / k)
    a_in_log = log_a < _LOG_UNDERFLOW
    if a_in_log:
        a = 0.0
    elif non_fluctuating:
        a = np.exp(-x_bar)
    else:
        a = (1.0 + x_bar / k) ** (-k)

    # j = 0 term a(0, x_bar) * g(n, thr)
    result = a * g

    # while everything still underflows, keep going until past both peaks
    limit = x_bar + thr
    last = np.inf
    j = 0
    while abs(last) > err * abs(result) or (result == 0.0 and j <= limit):
        if h_in_log:
            log_h += np.log(thr / (n + j))
            if log_h >= _LOG_UNDERFLOW:
                h_in_log = False
                h = np.exp(log_h)
        else:
            h *= thr / (n + j)
        g += h

        if non_fluctuating:
            ratio = x_bar / (1.0 + j)
        else:
            ratio = x_bar * (1.0 + j / k) / (1.0 + x_bar / k) / (1.0 + j)
        if a_in_log:
            log_a += np.log(ratio)
            if log_a >= _LOG_UNDERFLOW:
                a_in_log = False
                a = np.exp(log_a)
        else:
            a *= ratio

        last = a * g
        result += last
        j += 1

    return result, j + 1


def mitchell_walker_pd(
    snr: float, thr: float, n: int, dof: Union[int, DegreesOfFreedom, None] = NON_FLUCTUATING
) -> float:
    """
    Raw probability of detection from the Mitchell-Walker series.

    This is the forward function the solver inverts; it returns a float so
    bisection can probe it freely. Use ``calculate_pd`` for a checked
    Probability.

    Args:
        snr: Average signal-to-noise ratio per pulse [linear]
        thr: Detection threshold
        n: Number of non-coherently integrated pulses
        dof: Chi-square degrees of freedom

    Returns:
        Probability of detection as a float

    Note:
        Cost is one series term per step of j, logged at DEBUG. Slowly
        fluctuating targets at extreme Pd need very many terms; see the
        module docstring.
    """
    dof = as_degrees_of_freedom(dof)
    if math.isinf(thr):
        return 0.0
    if math.isinf(snr):
        return 1.0
    k = float(dof.k) if dof.is_fluctuating else 0.0
    pd, terms = _mitchell_walker_jit(
        float(snr), float(thr), int(n), k, not dof.is_fluctuating, SERIES_TOLERANCE
    )
    logger.debug(
        "Mitchell-Walker series: snr=%.6g thr=%.6g n=%d K=%s, %d terms", snr, thr, n, dof, terms
    )
    return pd


def calculate_pd(
    snr: float, thr: float, n: int, dof: Union[int, DegreesOfFreedom, None] = NON_FLUCTUATING
) -> Probability:
    """
    Probability of detection for a given SNR and threshold.

    Args:
        snr: Average signal-to-noise ratio per pulse [linear]
        thr: Detection threshold
        n: Number of non-coherently integrated pulses
        dof: Chi-square degrees of freedom

    Returns:
        Probability of detection

    Raises:
        ValueError: For a non-positive pulse count or negative SNR/threshold
        ProbabilityComputationError: If the series leaves [0, 1]
    """
    n = validate_pulse_count(n)
    if not snr >= 0:
        raise ValueError(f"Signal-to-noise ratio must be non-negative, got {snr}")
    if not thr >= 0:
        raise ValueError(f"Detection threshold must be non-negative, got {thr}")

    return computed_probability(mitchell_walker_pd(snr, thr, n, dof), "Pd")


def calculate_required_snr(
    pd: Probability,
    thr: float,
    n: int,
    dof: Union[int, DegreesOfFreedom, None] = NON_FLUCTUATING,
) -> float:
    """
    Average per-pulse SNR needed to reach a probability of detection.

    Inverts the Mitchell-Walker series with the monotonic solver, starting
    from thr / n.

    Args:
        pd: Desired probability of detection
        thr: Detection threshold
        n: Number of non-coherently integrated pulses
        dof: Chi-square degrees of freedom

    Returns:
        Signal-to-noise ratio [linear]; 0 when pd equals the false alarm
        probability and infinity when pd is 1

    Raises:
        ValueError: If pd is below the false alarm probability of thr, which
            would take a negative SNR
    """
    n = validate_pulse_count(n)
    if not thr >= 0:
        raise ValueError(f"Detection threshold must be non-negative, got {thr}")
    dof = as_degrees_of_freedom(dof)

    # Pd at zero SNR is the false alarm probability
    floor = mitchell_walker_pd(0.0, thr, n, dof)
    if pd.value <= floor:
        if floor - pd.value > 1e-9 * floor:
            raise ValueError(
                f"Pd = {pd} is below the false alarm probability {floor:.6g} of "
                f"threshold {thr}; no non-negative SNR reaches it"
            )
        return 0.0
    if pd.value == 1.0 or math.isinf(thr):
        return math.inf

    return solve(lambda snr: mitchell_walker_pd(snr, thr, n, dof), pd.value, thr / n)


# =============================================================================
# DETECTION MODEL
# =============================================================================


class DetectionModel:
    """
    Chi-square detection model relating threshold, Pfa, SNR and Pd.

    Constructed from one signal quantity and one noise reference quantity;
    the partner of each is derived immediately, so every field is populated
    and consistent with n and the degrees of freedom. Immutable.

    Args:
        signal: SNR per pulse [linear] as a float, or Pd as a Probability
        reference: Detection threshold as a float, or Pfa as a Probability
        n: Number of non-coherently integrated pulses
        dof: Chi-square degrees of freedom (int, DegreesOfFreedom, or None
            for a non-fluctuating target)

    Usage:
        model = DetectionModel.from_snr_and_pfa(10.0, Probability(1e-6), n=1)
        model.pd.value   # -> ~0.248
    """

    def __init__(
        self,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
        dof: Union[int, DegreesOfFreedom, None] = NON_FLUCTUATING,
    ):
        n = validate_pulse_count(n)
        dof = as_degrees_of_freedom(dof)

        if isinstance(reference, Probability):
            pfa = reference
            thr = calculate_threshold(n, pfa)
        else:
            thr = float(reference)
            pfa = calculate_pfa(n, thr)

        if isinstance(signal, Probability):
            pd = signal
            snr = calculate_required_snr(pd, thr, n, dof)
        else:
            snr = float(signal)
            pd = calculate_pd(snr, thr, n, dof)

        self._n = n
        self._dof = dof
        self._thr = thr
        self._pfa = pfa
        self._snr = snr
        self._pd = pd

        logger.debug("Built %r", self)

    # -------------------------------------------------------------------------
    # Named constructors
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
        dof: Union[int, DegreesOfFreedom, None] = NON_FLUCTUATING,
    ) -> "DetectionModel":
        return cls(signal, reference, n, dof)

    @classmethod
    def from_snr_and_threshold(cls, snr: float, thr: float, n: int, dof=NON_FLUCTUATING):
        return cls(float(snr), float(thr), n, dof)

    @classmethod
    def from_snr_and_pfa(cls, snr: float, pfa: Probability, n: int, dof=NON_FLUCTUATING):
        return cls(float(snr), pfa, n, dof)

    @classmethod
    def from_pd_and_threshold(cls, pd: Probability, thr: float, n: int, dof=NON_FLUCTUATING):
        return cls(pd, float(thr), n, dof)

    @classmethod
    def from_pd_and_pfa(cls, pd: Probability, pfa: Probability, n: int, dof=NON_FLUCTUATING):
        return cls(pd, pfa, n, dof)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def n(self) -> int:
        """Number of non-coherently integrated pulses"""
        return self._n

    @property
    def dof(self) -> DegreesOfFreedom:
        """Chi-square degrees of freedom"""
        return self._dof

    @property
    def k(self) -> Optional[int]:
        """Degrees of freedom as an int, None when non-fluctuating"""
        return self._dof.k

    @property
    def thr(self) -> float:
        """Detection threshold"""
        return self._thr

    @property
    def pfa(self) -> Probability:
        """Probability of false alarm"""
        return self._pfa

    @property
    def snr(self) -> float:
        """Average signal-to-noise ratio per pulse [linear]"""
        return self._snr

    @property
    def snr_db(self) -> float:
        """Average signal-to-noise ratio per pulse [dB]"""
        if self._snr == 0.0:
            return -math.inf
        return DB_TO_LINEAR_FACTOR * math.log10(self._snr)

    @property
    def pd(self) -> Probability:
        """Probability of detection"""
        return self._pd

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for logging/serialization."""
        return {
            "n_pulses": self._n,
            "degrees_of_freedom": self._dof.k,
            "pfa": self._pfa.value,
            "threshold": self._thr,
            "snr": self._snr,
            "snr_db": self.snr_db,
            "pd": self._pd.value,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n={self._n}, dof={self._dof}, thr={self._thr:.6g}, "
            f"pfa={self._pfa}, snr={self._snr:.6g}, pd={self._pd})"
        )

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}\n"
            f"N = {self._n}\n"
            f"DoF = {self._dof}\n"
            f"Pfa = {self._pfa}\n"
            f"Thr = {self._thr}\n"
            f"SNR = {self._snr}\n"
            f"Pd = {self._pd}\n"
        )
