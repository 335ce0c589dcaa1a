"""Tests for the command-line entry point and logging setup."""

import logging

from glider_polar.cli import build_parser, main
from glider_polar.logging_config import setup_logging


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["planes/ASK21"])
        assert args.aircraft_dir == "planes/ASK21"
        assert args.mass is None
        assert args.wind == 0.0
        assert args.units == "metric"
        assert args.steps == 1000

    def test_multiple_masses(self):
        args = build_parser().parse_args(["ASK21", "--mass", "440", "600", "--mc", "1", "2"])
        assert args.mass == [440.0, 600.0]
        assert args.mc == [1.0, 2.0]


class TestMain:
    """Tests for running the report."""

    def test_report(self, aircraft_dir, capsys):
        code = main([str(aircraft_dir), "--mass", "440", "600", "--mc", "0", "1", "--steps", "200"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Alexander Schleicher ASK21" in out
        assert "Reference mass: 440 kg" in out
        assert "Speed to fly" in out

    def test_writes_plot_and_winpilot(self, aircraft_dir, tmp_path, capsys):
        plot = tmp_path / "ask21.png"
        plr = tmp_path / "ask21.plr"
        code = main([
            str(aircraft_dir), "--mc", "0", "--steps", "200",
            "--plot", str(plot), "--winpilot", str(plr), "--units", "imperial",
        ])
        assert code == 0
        assert plot.stat().st_size > 0
        assert plr.read_text(encoding="utf-8").splitlines()[2].startswith("440, 0, ")

    def test_missing_directory(self, tmp_path, capsys):
        code = main([str(tmp_path / "NOPE")])
        assert code == 1
        assert "Error: " in capsys.readouterr().out


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging(logging.DEBUG)
        logger = logging.getLogger("glider_polar")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(logging.DEBUG, log_file=str(log_file))
        logging.getLogger("glider_polar.test").debug("hello")
        for h in logging.getLogger("glider_polar").handlers:
            h.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
        setup_logging()
