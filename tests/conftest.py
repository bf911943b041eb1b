"""
Pytest configuration for thermal printer tests.

Provides a recording fake transport, plus a command-line option for
hardware tests.
"""

import pytest

from thermalprinter import PrinterSettings, ThermalPrinter


class FakeConnection:
    """Transport double that records every write and flush."""

    def __init__(self):
        self.baudrate = None
        self.writes: list[bytes] = []
        self.flushes = 0
        self.closed = False

    def configure(self, baudrate: int):
        self.baudrate = baudrate

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def flush(self):
        self.flushes += 1

    def close(self):
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)

    def clear(self):
        self.writes.clear()
        self.flushes = 0


class FakeSource:
    """Chunk source double that records requests."""

    def __init__(self):
        self.requests: list[int] = []
        self.completions = 0

    def request_chunk(self, size: int):
        self.requests.append(size)

    def transfer_complete(self):
        self.completions += 1


def pytest_addoption(parser):
    """Add command-line options for hardware tests."""
    parser.addoption(
        "--port",
        action="store",
        default=None,
        help="Serial port of the printer for hardware tests",
    )


@pytest.fixture
def settings():
    """Default calibration with no real-time pauses."""
    return PrinterSettings(reset_delay=0, settle_delay=0)


@pytest.fixture
def connection():
    return FakeConnection()


@pytest.fixture
def printer(connection, settings):
    """A session on the fake transport, with the construction reset cleared."""
    p = ThermalPrinter(connection, settings=settings)
    connection.clear()
    return p


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def printer_port(request):
    """Get the printer port from command line."""
    port = request.config.getoption("--port")
    if port is None:
        pytest.skip("No printer port provided (use --port=/dev/ttyUSB0)")
    return port


@pytest.fixture
def hardware_printer(printer_port):
    """Provide a session on a real printer."""
    p = ThermalPrinter.open(printer_port)
    p.set_debug(True)
    yield p
    p.close()
