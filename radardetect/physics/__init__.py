"""
RadarDetect Physics Package

Detection statistics for non-coherently integrating radar receivers.

Modules:
    - constants: Solver and series tolerances, defaults
    - exceptions: DomainError and friends
    - probability: Boundary-checked probability values
    - solver: Monotonic equation solver (bracketing + bisection)
    - noise: Threshold <-> Pfa via the regularized incomplete gamma function
    - chi_square: Mitchell-Walker Pd series and the DetectionModel
    - swerling: Marcum and Swerling target fluctuation models
    - metrics: Curves, ROC, required SNR, fluctuation loss, validation
"""

from .chi_square import (
    NON_FLUCTUATING,
    DegreesOfFreedom,
    DetectionModel,
    calculate_pd,
    calculate_required_snr,
    mitchell_walker_pd,
)
from .constants import DEFAULT_PFA, SERIES_TOLERANCE, SOLVER_TOLERANCE
from .exceptions import BracketError, DomainError, ProbabilityComputationError
from .noise import calculate_pfa, calculate_threshold
from .probability import Probability, computed_probability
from .solver import MonotonicEquation, solve
from .swerling import Marcum, Swerling, SwerlingModel, TargetModel, create_target_model

__all__ = [
    # Constants
    "DEFAULT_PFA",
    "SERIES_TOLERANCE",
    "SOLVER_TOLERANCE",
    # Errors
    "DomainError",
    "ProbabilityComputationError",
    "BracketError",
    # Probability
    "Probability",
    "computed_probability",
    # Solver
    "MonotonicEquation",
    "solve",
    # Noise
    "calculate_pfa",
    "calculate_threshold",
    # Chi-square
    "DegreesOfFreedom",
    "NON_FLUCTUATING",
    "DetectionModel",
    "calculate_pd",
    "calculate_required_snr",
    "mitchell_walker_pd",
    # Target models
    "SwerlingModel",
    "TargetModel",
    "Marcum",
    "Swerling",
    "create_target_model",
]
