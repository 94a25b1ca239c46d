"""
RadarDetect Package

Radar detection statistics for non-coherent pulse integration:
- Threshold <-> probability of false alarm (Gaussian noise)
- SNR <-> probability of detection (Mitchell-Walker chi-square series)
- Marcum and Swerling 1-4 target fluctuation models
- YAML study files, YAML/CSV export and a command line front end
"""

# Re-export from subpackages
from radardetect.physics import (
    DEFAULT_PFA,
    NON_FLUCTUATING,
    BracketError,
    DegreesOfFreedom,
    DetectionModel,
    DomainError,
    Marcum,
    Probability,
    ProbabilityComputationError,
    Swerling,
    SwerlingModel,
    calculate_pfa,
    calculate_threshold,
    create_target_model,
    solve,
)

__version__ = "1.0.0"
__author__ = "RadarDetect Contributors"

__all__ = [
    # Core
    "Probability",
    "DomainError",
    "ProbabilityComputationError",
    "BracketError",
    "solve",
    "calculate_pfa",
    "calculate_threshold",
    "DegreesOfFreedom",
    "NON_FLUCTUATING",
    "DetectionModel",
    # Target models
    "SwerlingModel",
    "Marcum",
    "Swerling",
    "create_target_model",
    "DEFAULT_PFA",
]
