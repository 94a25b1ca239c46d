"""
RadarDetect Target Fluctuation Model Test Suite

Test ID | Description                      | Expectation
--------|----------------------------------|-----------------------------------
1       | Degrees of freedom per case      | NF, 1, n, 2, 2n
2       | Case parsing                     | enum / int / name / "marcum"
3       | Marcum wrapper                   | matches DetectionModel
4       | Swerling wrapper                 | rejects SWERLING_0
5       | Fluctuation ordering             | slow fluctuation needs most SNR
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from radardetect.physics.chi_square import NON_FLUCTUATING, DegreesOfFreedom, DetectionModel
from radardetect.physics.probability import Probability
from radardetect.physics.swerling import (
    Marcum,
    Swerling,
    SwerlingModel,
    TargetModel,
    create_target_model,
)

PFA = Probability(1e-6)

# =============================================================================
# TEST 1: Degrees of freedom
# =============================================================================


class TestDegreesOfFreedomTable:
    @pytest.mark.parametrize("n", [1, 3, 10, 30])
    def test_table(self, n):
        assert SwerlingModel.SWERLING_0.degrees_of_freedom(n) == NON_FLUCTUATING
        assert SwerlingModel.SWERLING_1.degrees_of_freedom(n) == DegreesOfFreedom(1)
        assert SwerlingModel.SWERLING_2.degrees_of_freedom(n) == DegreesOfFreedom(n)
        assert SwerlingModel.SWERLING_3.degrees_of_freedom(n) == DegreesOfFreedom(2)
        assert SwerlingModel.SWERLING_4.degrees_of_freedom(n) == DegreesOfFreedom(2 * n)

    def test_invalid_pulse_count(self):
        with pytest.raises(ValueError):
            SwerlingModel.SWERLING_2.degrees_of_freedom(0)


# =============================================================================
# TEST 2: Parsing
# =============================================================================


class TestSwerlingModelParse:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (SwerlingModel.SWERLING_3, SwerlingModel.SWERLING_3),
            (2, SwerlingModel.SWERLING_2),
            ("4", SwerlingModel.SWERLING_4),
            ("swerling_1", SwerlingModel.SWERLING_1),
            ("Marcum", SwerlingModel.SWERLING_0),
            ("non_fluctuating", SwerlingModel.SWERLING_0),
        ],
    )
    def test_parse(self, value, expected):
        assert SwerlingModel.parse(value) is expected

    @pytest.mark.parametrize("value", [5, "SWERLING_9", "rayleigh"])
    def test_unknown(self, value):
        with pytest.raises(ValueError):
            SwerlingModel.parse(value)


# =============================================================================
# TEST 3-4: Wrappers
# =============================================================================


class TestMarcum:
    def test_reference_value(self):
        model = Marcum.from_snr_and_pfa(3.162278, PFA, 3)
        assert model.pd.value == pytest.approx(0.088813157, abs=0.001)
        assert model.swerling_case is SwerlingModel.SWERLING_0
        assert model.dof == NON_FLUCTUATING

    def test_matches_detection_model(self):
        marcum = Marcum.from_pd_and_pfa(Probability(0.9), PFA, 10)
        direct = DetectionModel.from_pd_and_pfa(Probability(0.9), PFA, 10)
        assert marcum.snr == direct.snr
        assert marcum.thr == direct.thr

    def test_threshold_constructors(self):
        forward = Marcum.from_snr_and_threshold(5.0, 20.0, 2)
        inverse = Marcum.from_pd_and_threshold(forward.pd, 20.0, 2)
        assert inverse.snr == pytest.approx(5.0, rel=1e-6)
        assert forward.pfa == inverse.pfa


class TestSwerling:
    @pytest.mark.parametrize(
        "case",
        [
            SwerlingModel.SWERLING_1,
            SwerlingModel.SWERLING_2,
            SwerlingModel.SWERLING_3,
            SwerlingModel.SWERLING_4,
        ],
    )
    def test_accessors(self, case):
        model = Swerling.from_snr_and_pfa(10.0, PFA, 10, case)
        assert model.swerling_case is case
        assert model.n == 10
        assert model.dof == case.degrees_of_freedom(10)
        assert model.pfa == PFA
        assert model.snr == 10.0
        assert 0.0 < model.pd.value < 1.0
        assert model.detection_model.pd == model.pd

    def test_rejects_swerling_0(self):
        with pytest.raises(ValueError, match="Marcum"):
            Swerling(10.0, PFA, 1, SwerlingModel.SWERLING_0)

    def test_pd_and_threshold(self):
        model = Swerling.from_pd_and_threshold(Probability(0.5), 30.0, 5, SwerlingModel.SWERLING_2)
        check = Swerling.from_snr_and_threshold(model.snr, 30.0, 5, SwerlingModel.SWERLING_2)
        assert check.pd.value == pytest.approx(0.5, abs=1e-9)

    def test_to_dict_carries_case(self):
        data = Swerling.from_pd_and_pfa(Probability(0.9), PFA, 4, 3).to_dict()
        assert data["swerling_model"] == 3
        assert data["degrees_of_freedom"] == 2
        assert data["n_pulses"] == 4

    def test_str_report(self):
        text = str(Swerling.from_snr_and_pfa(10.0, PFA, 1, 1))
        assert "Swerling Case = SWERLING_1" in text
        assert "Pd =" in text


class TestCreateTargetModel:
    def test_marcum_for_case_0(self):
        model = create_target_model(10.0, PFA, 1, 0)
        assert isinstance(model, Marcum)

    def test_swerling_for_other_cases(self):
        model = create_target_model(Probability(0.9), PFA, 3, "SWERLING_4")
        assert isinstance(model, Swerling)
        assert isinstance(model, TargetModel)
        assert model.dof == DegreesOfFreedom(6)

    @pytest.mark.parametrize("case", list(SwerlingModel))
    def test_target_model_create_accepts_any_case(self, case):
        model = TargetModel.create(10.0, PFA, 3, case)
        expected_type = Marcum if case is SwerlingModel.SWERLING_0 else Swerling
        assert type(model) is expected_type
        assert model.swerling_case is case
        assert model.pd == create_target_model(10.0, PFA, 3, case).pd

    def test_target_model_create_parses_case(self):
        model = TargetModel.create(Probability(0.5), 25.0, 2, "marcum")
        assert isinstance(model, Marcum)
        assert model.thr == 25.0


# =============================================================================
# TEST 5: Fluctuation ordering
# =============================================================================


class TestFluctuationOrdering:
    """At high Pd a slowly fluctuating target needs more SNR than a steady one."""

    def test_required_snr_order(self):
        pd = Probability(0.9)
        n = 10
        snr = {
            case: create_target_model(pd, PFA, n, case).snr
            for case in SwerlingModel
        }
        assert snr[SwerlingModel.SWERLING_0] < snr[SwerlingModel.SWERLING_4]
        assert snr[SwerlingModel.SWERLING_4] < snr[SwerlingModel.SWERLING_3]
        assert snr[SwerlingModel.SWERLING_2] < snr[SwerlingModel.SWERLING_1]
        assert snr[SwerlingModel.SWERLING_3] < snr[SwerlingModel.SWERLING_1]


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
