"""Tests for the command-line entry point."""

import numpy as np
import pytest

from random_chain_correlations.__main__ import main, parse_args


@pytest.fixture
def parameter_file(tmp_path):
    path = tmp_path / "params.txt"
    path.write_text("N = 8\nJ_min = 0.0\nOmega = 1.0\nsamples = 3\nDomain = 3\nseed = 1\n")
    return path


def test_parse_args_defaults(parameter_file):
    """Parser defaults leave every override unset."""
    args = parse_args([str(parameter_file)])

    assert args.parameters == parameter_file
    assert args.samples is None
    assert args.max_workers is None
    assert not args.progress


def test_main_prints_summary(parameter_file, capsys):
    """A run prints the parameters and the statistics table."""
    assert main([str(parameter_file)]) == 0

    out = capsys.readouterr().out
    assert "Chain length N: 8" in out
    assert "Samples: 3" in out
    assert "zz_mean" in out


def test_main_overrides_and_outputs(parameter_file, tmp_path, capsys):
    """Command-line overrides reach the run and all outputs are written."""
    data = tmp_path / "run.npz"
    table = tmp_path / "run.csv"
    plot = tmp_path / "run.png"

    code = main([
        str(parameter_file), "--samples", "2", "--seed", "4",
        "--save-data", str(data), "--save-table", str(table), "--save-plot", str(plot),
    ])

    assert code == 0
    assert "Samples: 2" in capsys.readouterr().out
    with np.load(data) as archive:
        assert int(archive['samples']) == 2
        assert int(archive['seed']) == 4
    assert table.exists()
    assert plot.exists()


def test_main_reports_configuration_error(tmp_path, capsys):
    """An invalid parameter file exits with status 2."""
    path = tmp_path / "bad.txt"
    path.write_text("N = 7\nJ_min = 0.0\nDomain = 2\n")

    assert main([str(path)]) == 2
    assert "error:" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    """A missing parameter file exits with status 2."""
    assert main([str(tmp_path / "missing.txt")]) == 2
