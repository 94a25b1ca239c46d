"""
Study Loader

YAML-based detection study configuration parser for RadarDetect.

Loads a study (a list of detection cases) from a YAML file and builds the
corresponding Marcum / Swerling models.

Supported study elements:
    - Study metadata (name, description)
    - Defaults shared by all cases (pfa or threshold, n_pulses, swerling_model)
    - Cases, each with exactly one signal quantity (snr, snr_db, pd or an
      snr_sweep) and at most one reference quantity (pfa or threshold)

Usage:
    loader = ScenarioLoader('studies/surveillance.yaml')
    results = loader.create_models()
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml

from radardetect.physics.constants import DEFAULT_PFA, DEFAULT_PULSES
from radardetect.physics.metrics import db_to_linear
from radardetect.physics.probability import Probability
from radardetect.physics.swerling import SwerlingModel, TargetModel, create_target_model

logger = logging.getLogger(__name__)

_SIGNAL_KEYS = ("snr", "snr_db", "pd", "snr_sweep")


@dataclass
class SnrSweep:
    """SNR sweep in dB, inclusive of both ends."""

    start_db: float
    stop_db: float
    step_db: float

    def __post_init__(self) -> None:
        if self.step_db <= 0:
            raise ValueError(f"SNR sweep step must be positive, got {self.step_db}")
        if self.stop_db < self.start_db:
            raise ValueError(
                f"SNR sweep stop ({self.stop_db} dB) is below start ({self.start_db} dB)"
            )

    def values_db(self) -> np.ndarray:
        count = int(np.floor((self.stop_db - self.start_db) / self.step_db + 1e-9)) + 1
        return self.start_db + self.step_db * np.arange(count)


@dataclass
class CaseConfig:
    """One detection case from the study file."""

    name: str
    swerling_model: SwerlingModel
    n_pulses: int
    snr: Optional[float] = None  # linear, per pulse
    pd: Optional[float] = None
    pfa: Optional[float] = None
    threshold: Optional[float] = None
    snr_sweep: Optional[SnrSweep] = None

    def signals(self) -> List[Union[float, Probability]]:
        """Signal quantities to evaluate: one SNR, one Pd, or the sweep."""
        if self.snr_sweep is not None:
            return [float(v) for v in db_to_linear(self.snr_sweep.values_db())]
        if self.pd is not None:
            return [Probability(self.pd)]
        return [float(self.snr)]

    def reference(self) -> Union[float, Probability]:
        """Threshold as a float, or Pfa as a Probability."""
        if self.threshold is not None:
            return float(self.threshold)
        return Probability(self.pfa)


@dataclass
class StudyConfig:
    """Complete study configuration."""

    name: str
    description: str
    cases: List[CaseConfig] = field(default_factory=list)


@dataclass
class CaseResult:
    """A solved model together with the case it came from."""

    case_name: str
    model: TargetModel

    def to_dict(self) -> Dict[str, Any]:
        data = {"case": self.case_name}
        data.update(self.model.to_dict())
        return data


class ScenarioLoader:
    """
    Loads detection studies from YAML files.

    Usage:
        loader = ScenarioLoader('studies/surveillance.yaml')
        config = loader.get_config()
        results = loader.create_models()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize study loader.

        Args:
            filepath: Path to YAML study file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[StudyConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> StudyConfig:
        """
        Load study from YAML file.

        Args:
            filepath: Path to YAML study file

        Returns:
            Parsed StudyConfig

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If a case is malformed
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Study file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> StudyConfig:
        """Parse already-loaded YAML data into a StudyConfig."""
        if not isinstance(data, dict):
            raise ValueError("Study file must contain a mapping at the top level")
        self.data = data
        self._config = self._parse_config()
        logger.info(
            "Loaded study '%s' with %d case(s)", self._config.name, len(self._config.cases)
        )
        return self._config

    def _parse_config(self) -> StudyConfig:
        """Parse loaded YAML data into StudyConfig."""
        study = self.data.get("study", {}) or {}
        defaults = self.data.get("defaults", {}) or {}

        cases = [
            self._parse_case(idx, case, defaults)
            for idx, case in enumerate(self.data.get("cases", []) or [])
        ]

        return StudyConfig(
            name=study.get("name", "Unnamed Study"),
            description=study.get("description", ""),
            cases=cases,
        )

    def _parse_case(
        self, idx: int, case: Dict[str, Any], defaults: Dict[str, Any]
    ) -> CaseConfig:
        """Parse one case, filling gaps from the defaults."""
        name = case.get("name", f"Case_{idx}")

        signal_keys = [key for key in _SIGNAL_KEYS if case.get(key) is not None]
        if len(signal_keys) != 1:
            raise ValueError(
                f"Case '{name}' must give exactly one of {', '.join(_SIGNAL_KEYS)}; "
                f"got {signal_keys or 'none'}"
            )

        if case.get("pfa") is not None and case.get("threshold") is not None:
            raise ValueError(f"Case '{name}' gives both pfa and threshold")

        # case-level reference wins over defaults
        if case.get("pfa") is not None or case.get("threshold") is not None:
            pfa, threshold = case.get("pfa"), case.get("threshold")
        elif defaults.get("threshold") is not None:
            pfa, threshold = None, defaults["threshold"]
        else:
            pfa, threshold = defaults.get("pfa", DEFAULT_PFA), None

        snr = case.get("snr")
        if case.get("snr_db") is not None:
            snr = db_to_linear(float(case["snr_db"]))

        sweep = None
        if case.get("snr_sweep") is not None:
            s = case["snr_sweep"]
            sweep = SnrSweep(
                start_db=float(s.get("start_db", 0.0)),
                stop_db=float(s.get("stop_db", 20.0)),
                step_db=float(s.get("step_db", 1.0)),
            )

        return CaseConfig(
            name=name,
            swerling_model=SwerlingModel.parse(
                case.get("swerling_model", defaults.get("swerling_model", 0))
            ),
            n_pulses=int(case.get("n_pulses", defaults.get("n_pulses", DEFAULT_PULSES))),
            snr=None if snr is None else float(snr),
            pd=None if case.get("pd") is None else float(case["pd"]),
            pfa=None if pfa is None else float(pfa),
            threshold=None if threshold is None else float(threshold),
            snr_sweep=sweep,
        )

    def get_config(self) -> Optional[StudyConfig]:
        """
        Get parsed study configuration.

        Returns:
            StudyConfig or None if not loaded
        """
        return self._config

    def get_study_name(self) -> str:
        """Get study name."""
        if self._config:
            return self._config.name
        return "Unknown"

    def create_models(self) -> List[CaseResult]:
        """
        Solve every case of the loaded study.

        Returns:
            One CaseResult per evaluated point (sweeps give several)

        Raises:
            ValueError: If no study is loaded
        """
        if not self._config:
            raise ValueError("No study loaded. Call load() first.")

        results = []
        for case in self._config.cases:
            reference = case.reference()
            for signal in case.signals():
                model = create_target_model(signal, reference, case.n_pulses, case.swerling_model)
                results.append(CaseResult(case_name=case.name, model=model))
            logger.debug("Solved case '%s'", case.name)

        return results
