"""Tests for the command-line entry point."""

import pandas as pd
import pytest

from edsim.__main__ import main


class TestCli:
    """Test python -m edsim."""

    def test_single_run(self, capsys):
        assert main(["--run-length", "240", "--seed", "1"]) == 0

        out = capsys.readouterr().out
        assert "=== Hospital Simulation Results ===" in out
        assert "Average Wait Time (minutes):" in out
        assert "Doctor Utilization:" in out

    def test_same_seed_same_output(self, capsys):
        main(["--run-length", "240", "--seed", "5"])
        first = capsys.readouterr().out
        main(["--run-length", "240", "--seed", "5", "--jump"])
        second = capsys.readouterr().out

        assert first == second

    def test_replications(self, capsys):
        assert main(["--run-length", "120", "--reps", "3"]) == 0

        out = capsys.readouterr().out
        assert "3 replications" in out
        assert "mean_wait:" in out

    def test_patients_csv(self, tmp_path, capsys):
        path = tmp_path / "patients.csv"
        main(["--run-length", "240", "--seed", "2", "--patients-csv", str(path)])

        df = pd.read_csv(path)
        assert "arrival_time" in df.columns
        assert "Total Patients Arrived: %d" % len(df) in capsys.readouterr().out

    def test_invalid_rate_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--arrival-rate", "0"])

        assert exc.value.code == 2
        assert "arrival_rate" in capsys.readouterr().err

    def test_infinite_rate_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--arrival-rate", "inf"])

        assert exc.value.code == 2
        assert "finite" in capsys.readouterr().err

    def test_fractional_doctors_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["--doctors", "2.5"])

        assert exc.value.code == 2

    def test_invalid_reps_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(["--reps", "0"])

        assert exc.value.code == 2
