from __future__ import annotations

import logging

import pytest

from lif_neuron.logging_config import setup_logging
from scripts.demo_lif import build_parser, main, params_from_args


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("lif_neuron")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_parser_defaults_match_reference(default_params):
    args = build_parser().parse_args([])
    assert params_from_args(args) == default_params


def test_main_writes_csv_and_plot(tmp_path, capsys):
    csv_path = tmp_path / "trace.csv"
    png_path = tmp_path / "trace.png"

    code = main(["--duration", "20", "--csv", str(csv_path), "--plot", str(png_path), "--log-level", "WARNING"])

    assert code == 0
    assert csv_path.exists()
    assert png_path.exists()
    assert "spike_count" in capsys.readouterr().out


def test_main_reports_configuration_error(capsys):
    code = main(["--dt", "0", "--log-level", "WARNING"])

    assert code == 2
    assert "dt must be" in capsys.readouterr().out


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.DEBUG, log_file=str(log_file))
    logging.getLogger("lif_neuron").handlers[-1].flush()

    assert "Logging initialized at DEBUG." in log_file.read_text(encoding="utf-8")


def test_setup_logging_accepts_level_names():
    logger = setup_logging("warning")
    assert logger.level == logging.WARNING

    with pytest.raises(ValueError):
        setup_logging("chatty")
