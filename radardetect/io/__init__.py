"""
RadarDetect I/O Package

YAML study loading and result export.
"""

from .exporter import export_results, export_results_to_csv, export_results_to_yaml
from .scenario_loader import CaseConfig, CaseResult, ScenarioLoader, SnrSweep, StudyConfig

__all__ = [
    "ScenarioLoader",
    "StudyConfig",
    "CaseConfig",
    "CaseResult",
    "SnrSweep",
    "export_results",
    "export_results_to_yaml",
    "export_results_to_csv",
]
