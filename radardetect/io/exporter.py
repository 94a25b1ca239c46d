"""
Results Exporter

Serializes solved detection models to YAML or CSV so studies can be saved,
shared and post-processed.
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import yaml

from .scenario_loader import CaseResult

logger = logging.getLogger(__name__)


def _rows(results: Sequence[CaseResult]) -> List[Dict[str, Any]]:
    rows = []
    for result in results:
        row = result.to_dict()
        # yaml.safe_dump rejects numpy scalars
        rows.append({key: _plain(value) for key, value in row.items()})
    return rows


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int)):
        return value
    return float(value)


def export_results_to_yaml(
    results: Sequence[CaseResult],
    filepath: Union[str, Path],
    study_name: str = "Custom Study",
    description: str = "",
) -> Path:
    """
    Export solved models to a YAML file.

    Args:
        results: Solved cases
        filepath: Output file path
        study_name: Human-readable study name
        description: Study description

    Returns:
        Path of the written file
    """
    filepath = Path(filepath)
    data = {
        "study": {
            "name": study_name,
            "description": description
            or f"Exported on {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            "version": "1.0",
        },
        "results": _rows(results),
    }

    with open(filepath, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    logger.info("Exported %d result(s) to %s", len(results), filepath)
    return filepath


def export_results_to_csv(results: Sequence[CaseResult], filepath: Union[str, Path]) -> Path:
    """
    Export solved models to a CSV file, one row per model.

    Args:
        results: Solved cases
        filepath: Output file path

    Returns:
        Path of the written file
    """
    filepath = Path(filepath)
    rows = _rows(results)
    fieldnames = list(rows[0].keys()) if rows else ["case"]

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

    logger.info("Exported %d result(s) to %s", len(rows), filepath)
    return filepath


def export_results(
    results: Sequence[CaseResult], filepath: Union[str, Path], **kwargs: Any
) -> Path:
    """Export by file extension: .csv writes CSV, anything else YAML."""
    if Path(filepath).suffix.lower() == ".csv":
        return export_results_to_csv(results, filepath)
    return export_results_to_yaml(results, filepath, **kwargs)


def get_default_filename(extension: str = "yaml") -> str:
    """Generate default filename with timestamp."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"detection_{timestamp}.{extension}"
