"""
Marcum and Swerling Target Fluctuation Models

Each model only fixes the chi-square degrees of freedom as a function of the
number of integrated pulses and delegates all computation to
``DetectionModel``.

Case | Degrees of freedom | Scatterers                 | Pulse-to-pulse
-----|--------------------|----------------------------|----------------
0    | non-fluctuating    | constant RCS (Marcum)      | n/a
1    | 1                  | many independent           | fully correlated
2    | n                  | many independent           | fully decorrelated
3    | 2                  | one dominant + many small  | fully correlated
4    | 2n                 | one dominant + many small  | fully decorrelated

References:
    - Marcum, J.I., "A Statistical Theory of Target Detection by Pulsed
      Radar", RAND RM-754, 1947, reissued 1952
    - Swerling, P., "Probability of Detection for Fluctuating Targets",
      RAND RM-1217, 1954
"""

from enum import Enum
from typing import Any, Dict, Union

from .chi_square import NON_FLUCTUATING, DegreesOfFreedom, DetectionModel
from .noise import validate_pulse_count
from .probability import Probability


class SwerlingModel(Enum):
    """
    Swerling RCS Fluctuation Models

    Model 0 (Marcum): Non-fluctuating target (deterministic RCS)
    Model 1: Scan-to-scan fluctuation, Rayleigh distribution (many small scatterers)
    Model 2: Pulse-to-pulse fluctuation, Rayleigh distribution
    Model 3: Scan-to-scan fluctuation, Chi-squared 4 DoF (one dominant + small)
    Model 4: Pulse-to-pulse fluctuation, Chi-squared 4 DoF
    """

    SWERLING_0 = 0  # Non-fluctuating (Marcum)
    SWERLING_1 = 1  # Slow fluctuation, Rayleigh
    SWERLING_2 = 2  # Fast fluctuation, Rayleigh
    SWERLING_3 = 3  # Slow fluctuation, Chi-squared
    SWERLING_4 = 4  # Fast fluctuation, Chi-squared

    def degrees_of_freedom(self, n: int) -> DegreesOfFreedom:
        """
        Chi-square degrees of freedom of this case for n integrated pulses.

        Args:
            n: Number of non-coherently integrated pulses

        Returns:
            DegreesOfFreedom (NON_FLUCTUATING for SWERLING_0)
        """
        n = validate_pulse_count(n)
        if self is SwerlingModel.SWERLING_0:
            return NON_FLUCTUATING
        k = {
            SwerlingModel.SWERLING_1: 1,
            SwerlingModel.SWERLING_2: n,
            SwerlingModel.SWERLING_3: 2,
            SwerlingModel.SWERLING_4: 2 * n,
        }[self]
        return DegreesOfFreedom.finite(k)

    @classmethod
    def parse(cls, value: Union[int, str, "SwerlingModel"]) -> "SwerlingModel":
        """Accept a SwerlingModel, its number (0-4) or name ("SWERLING_1", "marcum")."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in ("MARCUM", "NONFLUCTUATING", "NON_FLUCTUATING"):
                return cls.SWERLING_0
            if key.isdigit():
                return cls(int(key))
            if key not in cls.__members__:
                raise ValueError(f"Unknown Swerling model: {value!r}")
            return cls[key]
        return cls(int(value))


class TargetModel:
    """
    Detection model for a target with a given Swerling fluctuation case.

    Offers the same constructor shapes and accessors as DetectionModel plus
    the case tag. ``Marcum`` and ``Swerling`` fix or restrict the case.

    Args:
        signal: SNR per pulse [linear] as a float, or Pd as a Probability
        reference: Detection threshold as a float, or Pfa as a Probability
        n: Number of non-coherently integrated pulses
        swerling_case: Fluctuation case
    """

    def __init__(
        self,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
        swerling_case: SwerlingModel,
    ):
        self._case = SwerlingModel.parse(swerling_case)
        self._model = DetectionModel(signal, reference, n, self._case.degrees_of_freedom(n))

    @classmethod
    def create(
        cls,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
        swerling_case: Union[int, str, SwerlingModel],
    ) -> "TargetModel":
        """Build a Marcum model for SWERLING_0 and a Swerling model for any other case."""
        return create_target_model(signal, reference, n, swerling_case)

    @property
    def detection_model(self) -> DetectionModel:
        return self._model

    @property
    def swerling_case(self) -> SwerlingModel:
        return self._case

    @property
    def snr(self) -> float:
        return self._model.snr

    @property
    def snr_db(self) -> float:
        return self._model.snr_db

    @property
    def pd(self) -> Probability:
        return self._model.pd

    @property
    def thr(self) -> float:
        return self._model.thr

    @property
    def pfa(self) -> Probability:
        return self._model.pfa

    @property
    def n(self) -> int:
        return self._model.n

    @property
    def dof(self) -> DegreesOfFreedom:
        return self._model.dof

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for logging/serialization."""
        data = {"swerling_model": self._case.value}
        data.update(self._model.to_dict())
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._case.name}, {self._model!r})"

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}\n"
            f"N = {self.n}\n"
            f"Swerling Case = {self._case.name}\n"
            f"Pfa = {self.pfa}\n"
            f"Thr = {self.thr}\n"
            f"SNR = {self.snr}\n"
            f"Pd = {self.pd}\n"
        )


class Marcum(TargetModel):
    """
    Non-fluctuating (Marcum) target.

    Usage:
        model = Marcum(3.162278, Probability(1e-6), n=3)
        model.pd.value   # -> ~0.0888
    """

    def __init__(
        self,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
    ):
        super().__init__(signal, reference, n, SwerlingModel.SWERLING_0)

    @classmethod
    def from_snr_and_threshold(cls, snr: float, thr: float, n: int) -> "Marcum":
        return cls(float(snr), float(thr), n)

    @classmethod
    def from_snr_and_pfa(cls, snr: float, pfa: Probability, n: int) -> "Marcum":
        return cls(float(snr), pfa, n)

    @classmethod
    def from_pd_and_threshold(cls, pd: Probability, thr: float, n: int) -> "Marcum":
        return cls(pd, float(thr), n)

    @classmethod
    def from_pd_and_pfa(cls, pd: Probability, pfa: Probability, n: int) -> "Marcum":
        return cls(pd, pfa, n)


class Swerling(TargetModel):
    """
    Fluctuating target, Swerling case 1 to 4.

    Usage:
        model = Swerling(Probability(0.9), Probability(1e-6), 10, SwerlingModel.SWERLING_1)
        model.snr_db
    """

    def __init__(
        self,
        signal: Union[float, Probability],
        reference: Union[float, Probability],
        n: int,
        swerling_case: SwerlingModel,
    ):
        if SwerlingModel.parse(swerling_case) is SwerlingModel.SWERLING_0:
            raise ValueError("SWERLING_0 is non-fluctuating; use Marcum")
        super().__init__(signal, reference, n, swerling_case)

    @classmethod
    def from_snr_and_threshold(
        cls, snr: float, thr: float, n: int, swerling_case: SwerlingModel
    ) -> "Swerling":
        return cls(float(snr), float(thr), n, swerling_case)

    @classmethod
    def from_snr_and_pfa(
        cls, snr: float, pfa: Probability, n: int, swerling_case: SwerlingModel
    ) -> "Swerling":
        return cls(float(snr), pfa, n, swerling_case)

    @classmethod
    def from_pd_and_threshold(
        cls, pd: Probability, thr: float, n: int, swerling_case: SwerlingModel
    ) -> "Swerling":
        return cls(pd, float(thr), n, swerling_case)

    @classmethod
    def from_pd_and_pfa(
        cls, pd: Probability, pfa: Probability, n: int, swerling_case: SwerlingModel
    ) -> "Swerling":
        return cls(pd, pfa, n, swerling_case)


def create_target_model(
    signal: Union[float, Probability],
    reference: Union[float, Probability],
    n: int,
    swerling_case: Union[int, str, SwerlingModel],
) -> TargetModel:
    """
    Build a Marcum or Swerling model depending on the case.

    Args:
        signal: SNR per pulse [linear] as a float, or Pd as a Probability
        reference: Detection threshold as a float, or Pfa as a Probability
        n: Number of non-coherently integrated pulses
        swerling_case: Fluctuation case (enum, number 0-4, or name)

    Returns:
        Marcum for SWERLING_0, Swerling otherwise
    """
    case = SwerlingModel.parse(swerling_case)
    if case is SwerlingModel.SWERLING_0:
        return Marcum(signal, reference, n)
    return Swerling(signal, reference, n, case)
