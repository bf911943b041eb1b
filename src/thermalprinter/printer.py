"""
High-Level Thermal Printer Interface.

Provides a simple API for printing text and formatting on a serial
thermal receipt printer. The session owns the transport: all output,
including image rows, goes through it.
"""

import logging
import time
from typing import Optional, Union

from .commands import DEFAULT_LINE_SPACING, Commands, Justify
from .config import PrinterSettings
from .connection import SerialConnection
from .errors import ConnectionError, PrinterError, SettingError, TransferError
from .mode import ModeState, PrinterConfig
from .transfer import ImageTransferState

logger = logging.getLogger(__name__)

__all__ = [
    "ThermalPrinter",
    "PrinterError",
    "ConnectionError",
    "SettingError",
    "TransferError",
]


class ThermalPrinter:
    """
    High-level interface to a serial thermal printer.

    Construction configures the transport and resets the printer.
    Formatting setters write their command immediately; nothing is
    cached or batched.
    """

    DEFAULT_BAUDRATE = SerialConnection.DEFAULT_BAUDRATE

    def __init__(self, connection, baudrate: int = DEFAULT_BAUDRATE,
                 settings: Optional[PrinterSettings] = None):
        """
        Initialize the session and reset the printer.

        Args:
            connection: Transport with configure(baudrate), write(bytes) and flush()
            baudrate: Serial speed (default 19200)
            settings: Calibration and timing (default PrinterSettings())
        """
        self.connection = connection
        self.baudrate = baudrate
        self.settings = settings if settings is not None else PrinterSettings()
        self.mode = ModeState()
        self.transfer = ImageTransferState()
        self._debug = False
        self._initialized = False

        self.connection.configure(baudrate)
        self.reset()

    @classmethod
    def open(cls, port: str, baudrate: int = DEFAULT_BAUDRATE,
             settings: Optional[PrinterSettings] = None) -> "ThermalPrinter":
        """Open a serial port by name and start a session on it."""
        connection = SerialConnection(port)
        try:
            return cls(connection, baudrate, settings)
        except Exception:
            connection.close()
            raise

    def set_debug(self, enabled: bool):
        """Enable/disable debug output."""
        self._debug = enabled

    def _log(self, message: str):
        """Log a debug message if enabled."""
        if self._debug:
            logger.debug("[thermal] %s", message)

    @property
    def config(self) -> PrinterConfig:
        """Formatting state as last sent to the printer."""
        return self.mode.config

    @property
    def is_ready(self) -> bool:
        """True once a reset has completed."""
        return self._initialized

    # ---- Transport ----

    def _write(self, data: bytes):
        self.connection.write(data)

    def load(self, buffer: Union[str, bytes]):
        """Write raw bytes with no terminator or form feed."""
        self._write(self._encode(buffer))

    def flush(self):
        """Block until everything written has left the transport."""
        self.connection.flush()

    def _encode(self, text: Union[str, bytes]) -> bytes:
        if isinstance(text, str):
            return text.encode(self.settings.encoding, errors="replace")
        return bytes(text)

    # ---- Device control ----

    def reset(self):
        """
        Return the printer and the session to power-on state.

        Restores formatting defaults, drops any image transfer, then sends
        reset, heating and density commands and waits for the printer.
        """
        self._initialized = False
        self.mode.reset()
        self.transfer.clear()

        s = self.settings
        self._log(
            f"Reset (heat {s.heat_dots}/{s.heat_time}/{s.heat_interval}, "
            f"density 0x{s.density_byte:02x})"
        )
        self._write(Commands.reset())
        self._write(Commands.heat_config(s.heat_dots, s.heat_time, s.heat_interval))
        self._write(Commands.density(s.print_break_time, s.print_density))
        self.flush()

        time.sleep(s.reset_delay)
        self._initialized = True

    # ---- Output ----

    def print(self, text: Union[str, bytes] = b""):
        """Print text: writes it, a line terminator and a form feed."""
        self._write(Commands.print_text(self._encode(text)))

    def feed(self, lines: int = 1):
        """Feed lines by printing one newline per line."""
        while lines > 0:
            self.print(b"\n")
            lines -= 1

    # ---- Formatting ----

    def _send(self, command: bytes):
        self._log(f"TX: {command.hex()}")
        self._write(command)

    def set_justify(self, value: Union[Justify, str]):
        """Set justification: "left", "center" or "right"."""
        self._send(self.mode.set_justify(value))

    def set_bold(self, enabled: bool = True):
        self._send(self.mode.set_bold(enabled))

    def set_underline(self, enabled: bool = True):
        self._send(self.mode.set_underline(enabled))

    def set_line_spacing(self, dots: int = DEFAULT_LINE_SPACING):
        """Set line spacing in dots (1-255, 32 is the printer default)."""
        self._send(self.mode.set_line_spacing(dots))

    def set_reverse(self, enabled: bool = True):
        self._send(self.mode.set_reverse(enabled))

    def set_updown(self, enabled: bool = True):
        self._send(self.mode.set_updown(enabled))

    def set_emphasized(self, enabled: bool = True):
        self._send(self.mode.set_emphasized(enabled))

    def set_double_height(self, enabled: bool = True):
        self._send(self.mode.set_double_height(enabled))

    def set_double_width(self, enabled: bool = True):
        self._send(self.mode.set_double_width(enabled))

    def set_delete_line(self, enabled: bool = True):
        self._send(self.mode.set_delete_line(enabled))

    def apply_config(self, config: PrinterConfig):
        """Bring the printer to config, sending only the settings that differ."""
        command = self.mode.transition_to(config)
        if command:
            self._send(command)

    def set_default(self):
        """Restore default formatting without a hardware reset."""
        self.apply_config(PrinterConfig())

    # ---- Lifecycle ----

    def close(self):
        """Close the underlying transport if it supports it."""
        close = getattr(self.connection, "close", None)
        if close is not None:
            close()
        self._initialized = False

    def __enter__(self) -> "ThermalPrinter":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
