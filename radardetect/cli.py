"""
Detection Statistics CLI

Solve a single detection case, or a whole YAML study, from the command line.

Usage:
    radardetect --snr-db 10 --pfa 1e-6                  # Pd for a Marcum target
    radardetect --pd 0.9 --pfa 1e-6 --pulses 10 --swerling 1
    radardetect --config study.yaml --output results.csv
    radardetect --pd 0.9 --output                       # detection_<timestamp>.yaml

Examples:
    # Threshold instead of Pfa
    radardetect --snr 3.162278 --threshold 19.13 --pulses 3

    # Required SNR for a fast-fluctuating target
    radardetect --pd 0.9 --pfa 1e-8 --pulses 30 --swerling 2
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from radardetect.io.exporter import export_results, get_default_filename
from radardetect.io.scenario_loader import CaseResult, ScenarioLoader
from radardetect.physics.constants import DEFAULT_PFA, DEFAULT_PULSES
from radardetect.physics.exceptions import BracketError
from radardetect.physics.metrics import db_to_linear
from radardetect.physics.probability import Probability
from radardetect.physics.swerling import create_target_model

logger = logging.getLogger("radardetect")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radardetect", description="Radar detection statistics (Pd, Pfa, SNR, threshold)"
    )

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML study file")

    # Signal quantity
    signal = parser.add_mutually_exclusive_group()
    signal.add_argument("--snr", type=float, help="SNR per pulse, linear")
    signal.add_argument("--snr-db", type=float, help="SNR per pulse in dB")
    signal.add_argument("--pd", type=float, help="Desired probability of detection")

    # Noise reference
    reference = parser.add_mutually_exclusive_group()
    reference.add_argument(
        "--pfa", type=float, default=None, help=f"Probability of false alarm (default: {DEFAULT_PFA})"
    )
    reference.add_argument("--threshold", type=float, default=None, help="Detection threshold")

    # Model
    parser.add_argument(
        "--pulses",
        type=int,
        default=DEFAULT_PULSES,
        help=f"Number of non-coherently integrated pulses (default: {DEFAULT_PULSES})",
    )
    parser.add_argument(
        "--swerling",
        type=int,
        choices=range(5),
        default=0,
        help="Swerling case, 0 = non-fluctuating Marcum target (default: 0)",
    )

    # Options
    parser.add_argument(
        "--output",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Write results (.yaml or .csv); without a name, a timestamped YAML file",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    return parser


def _single_case(args: argparse.Namespace) -> List[CaseResult]:
    if args.pd is not None:
        signal = Probability(args.pd)
    elif args.snr_db is not None:
        signal = db_to_linear(args.snr_db)
    elif args.snr is not None:
        signal = args.snr
    else:
        raise ValueError("Give one of --snr, --snr-db or --pd (or --config)")

    if args.threshold is not None:
        reference = args.threshold
    else:
        reference = Probability(DEFAULT_PFA if args.pfa is None else args.pfa)

    model = create_target_model(signal, reference, args.pulses, args.swerling)
    return [CaseResult(case_name="cli", model=model)]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    study_name = "Command Line"
    try:
        if args.config:
            loader = ScenarioLoader(args.config)
            study_name = loader.get_study_name()
            results = loader.create_models()
        else:
            results = _single_case(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, BracketError, yaml.YAMLError) as e:
        logger.debug("Failed to solve", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("=" * 60)
        print(f"RadarDetect - {study_name}")
        print("=" * 60)
        for result in results:
            if len(results) > 1:
                print(f"[{result.case_name}]")
            print(result.model)

    if args.output is not None:
        path = export_results(
            results, args.output or get_default_filename("yaml"), study_name=study_name
        )
        if not args.quiet:
            print(f"Results saved to: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
