"""
RadarDetect Detection Metrics Test Suite

Test ID | Description                      | Reference                  | Tolerance
--------|----------------------------------|----------------------------|-----------
1       | dB conversions                   | 10*log10                   | 1e-12
2       | Albersheim vs exact Marcum       | Albersheim (1981)          | ±0.5 dB
3       | Fluctuation loss, Swerling 1     | Skolnik Fig. 2.8           | 7-9 dB
4       | ROC curves                       | Pd >= Pfa, monotonic       | n/a
5       | Pd curve                         | Matches single-point Pd    | 1e-12
6       | Marcum reference validation      | RAND RM-754                | ±0.001
"""

import math
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from radardetect.physics.metrics import (
    albersheim_snr,
    calculate_pd_db,
    calculate_pd_curve,
    db_to_linear,
    fluctuation_loss_db,
    generate_roc_curves,
    linear_to_db,
    required_snr_db,
    validate_marcum_reference,
)
from radardetect.physics.probability import Probability
from radardetect.physics.swerling import SwerlingModel

# =============================================================================
# TEST 1: Conversions
# =============================================================================


class TestConversions:
    def test_scalar(self):
        assert db_to_linear(10.0) == pytest.approx(10.0)
        assert db_to_linear(5.0) == pytest.approx(3.16227766)
        assert isinstance(db_to_linear(3.0), float)

    def test_array(self):
        result = db_to_linear([0.0, 10.0, 20.0])
        np.testing.assert_allclose(result, [1.0, 10.0, 100.0])

    def test_inverse(self):
        assert linear_to_db(db_to_linear(13.0)) == pytest.approx(13.0, abs=1e-12)

    def test_zero_is_minus_infinity(self):
        assert linear_to_db(0.0) == -math.inf


# =============================================================================
# TEST 2-3: Required SNR
# =============================================================================


class TestRequiredSnr:
    def test_albersheim_close_to_exact(self):
        approx = albersheim_snr(pd=0.9, pfa=1e-6)
        exact = required_snr_db(0.9, 1e-6)
        assert approx == pytest.approx(13.1, abs=0.1)
        assert abs(approx - exact) < 0.5

    def test_albersheim_integration_gain(self):
        assert albersheim_snr(0.9, 1e-6, n_pulses=10) < albersheim_snr(0.9, 1e-6, n_pulses=1)

    def test_exact_integration_gain(self):
        single = required_snr_db(0.9, 1e-6, n_pulses=1)
        ten = required_snr_db(0.9, 1e-6, n_pulses=10)
        assert 5.0 < single - ten < 10.0

    def test_required_snr_gives_requested_pd(self):
        snr_db = required_snr_db(Probability(0.8), Probability(1e-8), 5, SwerlingModel.SWERLING_4)
        pd = calculate_pd_db(snr_db, 1e-8, SwerlingModel.SWERLING_4, 5)
        assert pd == pytest.approx(0.8, abs=1e-9)

    def test_fluctuation_loss_swerling_1(self):
        loss = fluctuation_loss_db(SwerlingModel.SWERLING_1)
        assert 7.0 < loss < 9.0

    def test_fluctuation_loss_marcum_is_zero(self):
        assert fluctuation_loss_db(0) == 0.0

    def test_fluctuation_loss_decreases_with_diversity(self):
        """Pulse-to-pulse decorrelation recovers most of the loss."""
        slow = fluctuation_loss_db(SwerlingModel.SWERLING_1, n_pulses=10)
        fast = fluctuation_loss_db(SwerlingModel.SWERLING_2, n_pulses=10)
        assert fast < slow


# =============================================================================
# TEST 4-5: Curves
# =============================================================================


class TestCurves:
    def test_roc_shape(self):
        roc = generate_roc_curves(n_points=20)
        assert len(roc["pfa"]) == 20
        assert set(roc["pd"]) == {5, 10, 13, 15, 20}
        for pd in roc["pd"].values():
            assert len(pd) == 20

    @pytest.mark.parametrize("swerling_model", [0, 1, 4])
    def test_roc_pd_at_least_pfa(self, swerling_model):
        roc = generate_roc_curves(
            snr_values_db=(0, 10), n_points=15, swerling_model=swerling_model, n_pulses=3
        )
        for pd in roc["pd"].values():
            assert np.all(pd >= roc["pfa"] * (1.0 - 1e-9))
            assert np.all(np.diff(pd) >= -1e-12)

    def test_roc_higher_snr_dominates(self):
        roc = generate_roc_curves(snr_values_db=(5, 15), n_points=10)
        assert np.all(roc["pd"][15] >= roc["pd"][5])

    def test_pd_curve_matches_points(self):
        snr_db = [0.0, 5.0, 10.0, 15.0]
        curve = calculate_pd_curve(snr_db, 1e-6, SwerlingModel.SWERLING_2, 4)
        for value, point in zip(curve, snr_db):
            assert value == pytest.approx(
                calculate_pd_db(point, 1e-6, SwerlingModel.SWERLING_2, 4), rel=1e-12
            )
        assert np.all(np.diff(curve) > 0)


# =============================================================================
# TEST 6: Reference validation
# =============================================================================


class TestReferenceValidation:
    def test_marcum_reference(self):
        report = validate_marcum_reference()
        assert report["validation"]["is_valid"]
        assert report["validation"]["max_pd_error"] <= 1e-3
        assert report["validation"]["max_threshold_error"] <= 1e-3

    def test_report_layout(self):
        report = validate_marcum_reference()
        assert set(report) == {
            "parameters",
            "computed_values",
            "expected_values",
            "validation",
        }
        assert len(report["computed_values"]["pd"]) == len(report["expected_values"]["pd"])


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
