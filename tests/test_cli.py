"""
RadarDetect Command Line Test Suite

Test ID | Description                      | Expectation
--------|----------------------------------|-----------------------------------
1       | Single case from flags           | exit 0, report printed
2       | Study file                       | exit 0, one report per model
3       | Export                           | CSV / YAML written
4       | Bad input                        | exit 1, message on stderr
"""

import csv
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from radardetect.cli import build_parser, main


class TestSingleCase:
    def test_marcum_pd(self, capsys):
        assert main(["--snr", "10", "--pfa", "1e-6"]) == 0
        out = capsys.readouterr().out
        assert "Marcum" in out
        assert "Pd = 0.248" in out

    def test_snr_db_equals_linear(self, capsys):
        main(["--snr-db", "10", "--pulses", "3"])
        db_out = capsys.readouterr().out
        main(["--snr", "10", "--pulses", "3"])
        linear_out = capsys.readouterr().out
        pd_line = [line for line in db_out.splitlines() if line.startswith("Pd =")]
        assert pd_line
        assert pd_line[0] in linear_out

    def test_required_snr_swerling(self, capsys):
        assert main(["--pd", "0.9", "--pfa", "1e-6", "--swerling", "1"]) == 0
        out = capsys.readouterr().out
        assert "Swerling Case = SWERLING_1" in out
        assert "SNR = " in out

    def test_threshold_reference(self, capsys):
        assert main(["--snr", "3.162278", "--threshold", "19.13", "--pulses", "3"]) == 0
        assert "Thr = 19.13" in capsys.readouterr().out

    def test_quiet(self, capsys):
        assert main(["--snr", "10", "--quiet"]) == 0
        assert capsys.readouterr().out == ""


class TestStudyAndExport:
    def test_config_and_csv_output(self, tmp_path, capsys):
        study = tmp_path / "study.yaml"
        study.write_text(
            "study:\n"
            "  name: CLI study\n"
            "cases:\n"
            "  - name: a\n"
            "    snr_db: 13.0\n"
            "  - name: b\n"
            "    pd: 0.5\n"
            "    swerling_model: 3\n"
            "    n_pulses: 4\n",
            encoding="utf-8",
        )
        output = tmp_path / "results.csv"

        assert main(["--config", str(study), "--output", str(output)]) == 0
        out = capsys.readouterr().out
        assert "CLI study" in out
        assert "[a]" in out and "[b]" in out
        assert "Results saved to" in out

        with open(output, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [row["case"] for row in rows] == ["a", "b"]

    def test_yaml_output(self, tmp_path):
        output = tmp_path / "results.yaml"
        assert main(["--pd", "0.9", "--output", str(output), "--quiet"]) == 0
        assert output.read_text(encoding="utf-8").startswith("study:")

    def test_output_without_name_uses_timestamped_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["--snr", "10", "--output", "--quiet"]) == 0
        written = list(tmp_path.glob("detection_*.yaml"))
        assert len(written) == 1
        assert written[0].read_text(encoding="utf-8").startswith("study:")

    def test_output_flag_absent_writes_nothing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["--snr", "10", "--quiet"]) == 0
        assert list(tmp_path.iterdir()) == []


class TestErrors:
    def test_no_signal(self, capsys):
        assert main([]) == 1
        assert "--snr" in capsys.readouterr().err

    def test_missing_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "nope.yaml")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_probability(self, capsys):
        assert main(["--pd", "1.5"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_pd_below_pfa(self, capsys):
        assert main(["--pd", "1e-9", "--pfa", "1e-6"]) == 1
        assert "false alarm" in capsys.readouterr().err

    def test_mutually_exclusive_flags(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--pfa", "1e-6", "--threshold", "13.8"])


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
