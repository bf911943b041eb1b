"""Tests for printer settings."""

import pytest

from thermalprinter.config import PrinterSettings


class TestPrinterSettings:
    """Test defaults and validation."""

    def test_vendor_defaults(self):
        s = PrinterSettings()
        assert (s.heat_dots, s.heat_time, s.heat_interval) == (7, 80, 2)
        assert s.chunk_size == 384

    def test_density_byte(self):
        assert PrinterSettings(print_density=14, print_break_time=4).density_byte == 0x8E

    @pytest.mark.parametrize("kwargs", [
        {"heat_dots": 256},
        {"heat_time": -1},
        {"print_density": 32},
        {"print_break_time": 8},
        {"chunk_size": 0},
    ])
    def test_out_of_range_rejected(self, kwargs):
        with pytest.raises(ValueError):
            PrinterSettings(**kwargs)


class TestFromEnv:
    """Test environment overrides."""

    def test_empty_environment_gives_defaults(self):
        assert PrinterSettings.from_env(environ={}) == PrinterSettings()

    def test_overrides(self):
        env = {
            "THERMAL_HEAT_TIME": "120",
            "THERMAL_RESET_DELAY": "0.25",
            "THERMAL_ENCODING": "cp437",
            "THERMAL_HEAT_DOTS": "  ",
        }
        s = PrinterSettings.from_env(environ=env)
        assert s.heat_time == 120
        assert s.reset_delay == 0.25
        assert s.encoding == "cp437"
        assert s.heat_dots == 7

    def test_custom_prefix(self):
        s = PrinterSettings.from_env(prefix="RECEIPT_", environ={"RECEIPT_CHUNK_SIZE": "128"})
        assert s.chunk_size == 128

    def test_invalid_integer(self):
        with pytest.raises(ValueError):
            PrinterSettings.from_env(environ={"THERMAL_HEAT_TIME": "hot"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("THERMAL_PRINT_DENSITY", "10")
        assert PrinterSettings.from_env().print_density == 10
