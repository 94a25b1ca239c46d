"""
Radar Detection Performance Metrics

Statistical calculations for detection performance analysis built on the
exact chi-square engine.

Includes:
    - dB / linear conversions
    - Exact Pd for Marcum and Swerling targets
    - Required SNR and fluctuation loss
    - Albersheim's closed-form approximation (for comparison)
    - ROC curve generation
    - Validation against published Marcum values

References:
    - Albersheim, W.J., "A Closed-Form Approximation to Robertson's
      Detection Characteristics", Proc. IEEE, 1981
    - Mitchell, R.L. and Walker, J.F., IEEE Trans. AES, 1971
    - Skolnik, "Radar Handbook", 3rd Ed., Chapter 2
"""

from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from .chi_square import calculate_pd
from .chi_square import calculate_required_snr
from .constants import DB_TO_LINEAR_FACTOR, DEFAULT_PFA
from .noise import calculate_threshold
from .probability import Probability
from .swerling import SwerlingModel, create_target_model

ProbabilityLike = Union[float, Probability]


def _as_probability(value: ProbabilityLike) -> Probability:
    return value if isinstance(value, Probability) else Probability(value)


def db_to_linear(value_db):
    """Convert power ratio from dB to linear (works on scalars and arrays)."""
    result = 10.0 ** (np.asarray(value_db, dtype=np.float64) / DB_TO_LINEAR_FACTOR)
    return result if np.ndim(result) else float(result)


def linear_to_db(value):
    """Convert power ratio from linear to dB (0 maps to -inf)."""
    with np.errstate(divide="ignore"):
        result = DB_TO_LINEAR_FACTOR * np.log10(np.asarray(value, dtype=np.float64))
    return result if np.ndim(result) else float(result)


def albersheim_snr(pd: float, pfa: float, n_pulses: int = 1) -> float:
    """
    Albersheim's equation: SNR required for given Pd and Pfa.

    Closed-form estimate for a non-fluctuating target and a linear detector,
    accurate to about 0.2 dB within:
        - 0.1 < Pd < 0.9
        - 1e-7 < Pfa < 1e-3
        - 1 <= n_pulses <= 8096

    Args:
        pd: Probability of detection (0-1)
        pfa: Probability of false alarm (0-1)
        n_pulses: Number of pulses integrated

    Returns:
        Required SNR per pulse [dB]

    Reference: Albersheim, Proc. IEEE, 1981
    """
    A = np.log(0.62 / pfa)
    B = np.log(pd / (1 - pd))

    Z = A + 0.12 * A * B + 1.7 * B

    snr_db = -5.0 * np.log10(n_pulses) + (6.2 + 4.54 / np.sqrt(n_pulses + 0.44)) * np.log10(Z)

    return float(snr_db)


def calculate_pd_db(
    snr_db: float,
    pfa: ProbabilityLike = DEFAULT_PFA,
    swerling_model: Union[int, SwerlingModel] = SwerlingModel.SWERLING_0,
    n_pulses: int = 1,
) -> float:
    """
    Exact probability of detection for Marcum and Swerling targets.

    Args:
        snr_db: Average signal-to-noise ratio per pulse [dB]
        pfa: Probability of false alarm
        swerling_model: Swerling case (0-4)
        n_pulses: Number of pulses integrated

    Returns:
        Probability of detection (0-1)
    """
    model = create_target_model(
        db_to_linear(snr_db), _as_probability(pfa), n_pulses, swerling_model
    )
    return model.pd.value


def calculate_pd_curve(
    snr_values_db: Sequence[float],
    pfa: ProbabilityLike = DEFAULT_PFA,
    swerling_model: Union[int, SwerlingModel] = SwerlingModel.SWERLING_0,
    n_pulses: int = 1,
) -> np.ndarray:
    """
    Pd versus SNR curve.

    The threshold is solved once and reused for every SNR point.

    Args:
        snr_values_db: SNR values per pulse [dB]
        pfa: Probability of false alarm
        swerling_model: Swerling case (0-4)
        n_pulses: Number of pulses integrated

    Returns:
        Array of Pd values, same length as snr_values_db
    """
    case = SwerlingModel.parse(swerling_model)
    dof = case.degrees_of_freedom(n_pulses)
    thr = calculate_threshold(n_pulses, _as_probability(pfa))

    snr_linear = db_to_linear(np.asarray(snr_values_db, dtype=np.float64))
    return np.array(
        [calculate_pd(snr, thr, n_pulses, dof).value for snr in snr_linear]
    )


def required_snr_db(
    pd: ProbabilityLike,
    pfa: ProbabilityLike = DEFAULT_PFA,
    n_pulses: int = 1,
    swerling_model: Union[int, SwerlingModel] = SwerlingModel.SWERLING_0,
) -> float:
    """
    Exact SNR per pulse needed for a Pd / Pfa pair.

    Args:
        pd: Desired probability of detection
        pfa: Probability of false alarm
        n_pulses: Number of pulses integrated
        swerling_model: Swerling case (0-4)

    Returns:
        Required SNR per pulse [dB]
    """
    model = create_target_model(
        _as_probability(pd), _as_probability(pfa), n_pulses, swerling_model
    )
    return model.snr_db


def fluctuation_loss_db(
    swerling_model: Union[int, SwerlingModel],
    pd: ProbabilityLike = 0.9,
    pfa: ProbabilityLike = DEFAULT_PFA,
    n_pulses: int = 1,
) -> float:
    """
    Fluctuation loss compared to a non-fluctuating (Marcum) target.

    Args:
        swerling_model: Swerling case (0-4)
        pd: Probability of detection
        pfa: Probability of false alarm
        n_pulses: Number of pulses integrated

    Returns:
        Additional SNR per pulse required [dB]

    Reference: Skolnik, "Radar Handbook", 3rd Ed., Fig. 2.8
    """
    pd = _as_probability(pd)
    pfa = _as_probability(pfa)
    thr = calculate_threshold(n_pulses, pfa)

    case = SwerlingModel.parse(swerling_model)
    fluctuating = calculate_required_snr(pd, thr, n_pulses, case.degrees_of_freedom(n_pulses))
    marcum = calculate_required_snr(
        pd, thr, n_pulses, SwerlingModel.SWERLING_0.degrees_of_freedom(n_pulses)
    )
    return float(linear_to_db(fluctuating) - linear_to_db(marcum))


def generate_roc_curves(
    snr_values_db: Sequence[float] = (5, 10, 13, 15, 20),
    pfa_range: Tuple[float, float] = (1e-10, 1e-2),
    n_points: int = 100,
    swerling_model: Union[int, SwerlingModel] = SwerlingModel.SWERLING_0,
    n_pulses: int = 1,
) -> dict:
    """
    Generate ROC curves for multiple SNR values.

    Args:
        snr_values_db: List of SNR values per pulse [dB]
        pfa_range: (min, max) Pfa range
        n_points: Number of points per curve
        swerling_model: Swerling fluctuation model
        n_pulses: Number of pulses integrated

    Returns:
        Dict with 'pfa' array and 'pd' dict (keyed by SNR)
    """
    pfa_values = np.logspace(np.log10(pfa_range[0]), np.log10(pfa_range[1]), n_points)
    case = SwerlingModel.parse(swerling_model)
    dof = case.degrees_of_freedom(n_pulses)

    thresholds = [calculate_threshold(n_pulses, Probability(pfa)) for pfa in pfa_values]

    result = {"pfa": pfa_values, "pd": {}}

    for snr in snr_values_db:
        snr_linear = db_to_linear(snr)
        result["pd"][snr] = np.array(
            [calculate_pd(snr_linear, thr, n_pulses, dof).value for thr in thresholds]
        )

    return result


# Published Marcum Pd values at Pfa = 1e-6: (n_pulses, SNR per pulse [linear], Pd)
MARCUM_REFERENCE_PD: List[Tuple[int, float, float]] = [
    (1, 3.162278, 0.0045853516),
    (1, 10.0, 0.24804931),
    (1, 31.62278, 0.9972254),
    (3, 3.162278, 0.088813157),
    (3, 10.0, 0.97272573),
    (10, 3.162278, 0.85331678),
    (30, 3.162278, 0.99999943),
]

# Thresholds at Pfa = 1e-6: (n_pulses, threshold)
NOISE_REFERENCE_THRESHOLD: List[Tuple[int, float]] = [
    (1, 13.81551055),
    (3, 19.12916818),
    (10, 32.71034051),
    (30, 63.54818012),
    (100, 154.9190459),
]


def validate_marcum_reference(tolerance: float = 1e-3) -> Dict:
    """
    Validate thresholds and Marcum Pd against published values at Pfa = 1e-6.

    Args:
        tolerance: Allowed absolute error on both thresholds and Pd

    Returns:
        Dictionary with inputs, computed values, expected values and the
        validation verdict
    """
    pfa = Probability(1e-6)

    thresholds = [calculate_threshold(n, pfa) for n, _ in NOISE_REFERENCE_THRESHOLD]
    pd_values = [
        create_target_model(snr, pfa, n, SwerlingModel.SWERLING_0).pd.value
        for n, snr, _ in MARCUM_REFERENCE_PD
    ]

    threshold_errors = [
        abs(computed - expected)
        for computed, (_, expected) in zip(thresholds, NOISE_REFERENCE_THRESHOLD)
    ]
    pd_errors = [
        abs(computed - expected) for computed, (_, _, expected) in zip(pd_values, MARCUM_REFERENCE_PD)
    ]

    is_valid = max(threshold_errors) <= tolerance and max(pd_errors) <= tolerance

    return {
        "parameters": {
            "pfa": pfa.value,
            "threshold_pulses": [n for n, _ in NOISE_REFERENCE_THRESHOLD],
            "pd_cases": [(n, snr) for n, snr, _ in MARCUM_REFERENCE_PD],
        },
        "computed_values": {
            "thresholds": thresholds,
            "pd": pd_values,
        },
        "expected_values": {
            "thresholds": [thr for _, thr in NOISE_REFERENCE_THRESHOLD],
            "pd": [pd for _, _, pd in MARCUM_REFERENCE_PD],
            "tolerance": tolerance,
        },
        "validation": {
            "is_valid": is_valid,
            "max_threshold_error": max(threshold_errors),
            "max_pd_error": max(pd_errors),
            "reference": "Marcum, RAND RM-754; Mitchell & Walker, IEEE Trans. AES, 1971",
        },
    }


if __name__ == "__main__":
    # Quick test
    print("Radar Detection Metrics")
    print("=" * 50)

    snr = albersheim_snr(pd=0.9, pfa=1e-6)
    print(f"Albersheim SNR for Pd=0.9, Pfa=1e-6: {snr:.2f} dB")

    exact = required_snr_db(pd=0.9, pfa=1e-6)
    print(f"Exact Marcum SNR for Pd=0.9, Pfa=1e-6: {exact:.2f} dB")

    for case in SwerlingModel:
        print(f"Fluctuation loss {case.name}: {fluctuation_loss_db(case):.2f} dB")

    report = validate_marcum_reference()
    print(f"\nMarcum reference validation: {report['validation']['is_valid']}")
