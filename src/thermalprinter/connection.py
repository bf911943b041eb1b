"""
Serial Connection Handler for the thermal printer.

Handles the write-only TTL serial link using the pyserial library.
The printer never answers, so the connection only exposes write/flush.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import serial
from serial.tools import list_ports as serial_list_ports

from .errors import ConnectionError

logger = logging.getLogger(__name__)


@dataclass
class PortInfo:
    """Information about a discovered serial port.

    Attributes:
        device: Port path (e.g., "/dev/ttyUSB0", "COM3")
        description: Human readable description from the OS
        hwid: Hardware id string (USB VID:PID etc.)
    """
    device: str
    description: str = ""
    hwid: str = ""

    def __str__(self) -> str:
        return f"{self.device} - {self.description} [{self.hwid}]"


def list_ports() -> list[PortInfo]:
    """List serial ports available on this machine."""
    ports = []
    for port in serial_list_ports.comports():
        ports.append(PortInfo(
            device=port.device,
            description=port.description or "",
            hwid=port.hwid or "",
        ))
    return sorted(ports, key=lambda p: p.device)


class SerialConnection:
    """Manages the serial link to the printer (8N1, no flow control)."""

    DEFAULT_BAUDRATE = 19200

    def __init__(self, port: Union[str, serial.Serial, None] = None):
        """
        Args:
            port: Device path to open on configure(), or an existing
                serial.Serial instance to take over
        """
        if isinstance(port, serial.Serial):
            self.serial: Optional[serial.Serial] = port
            self.port = port.port
        else:
            self.serial = None
            self.port = port

    def configure(self, baudrate: int = DEFAULT_BAUDRATE):
        """Apply line settings and open the port if needed."""
        try:
            if self.serial is None:
                self.serial = serial.Serial()
                self.serial.port = self.port
            self.serial.baudrate = baudrate
            self.serial.bytesize = serial.EIGHTBITS
            self.serial.parity = serial.PARITY_NONE
            self.serial.stopbits = serial.STOPBITS_ONE
            self.serial.xonxoff = False
            self.serial.rtscts = False
            self.serial.dsrdtr = False
            if not self.serial.is_open:
                self.serial.open()
        except (serial.SerialException, ValueError) as e:
            raise ConnectionError(f"Failed to open {self.port}: {e}") from e
        logger.debug("Serial port %s configured at %d baud (8N1)", self.port, baudrate)

    def write(self, data: bytes) -> int:
        """Blocking write of data to the printer."""
        if not self.is_open:
            raise ConnectionError("Serial port is not open")
        try:
            return self.serial.write(data)
        except serial.SerialException as e:
            raise ConnectionError(f"Write failed: {e}") from e

    def flush(self):
        """Block until all written data has been transmitted."""
        if not self.is_open:
            raise ConnectionError("Serial port is not open")
        try:
            self.serial.flush()
        except serial.SerialException as e:
            raise ConnectionError(f"Flush failed: {e}") from e

    def close(self):
        """Close the port."""
        if self.serial is not None and self.serial.is_open:
            self.serial.close()

    @property
    def is_open(self) -> bool:
        """Check if the port is currently open."""
        return self.serial is not None and self.serial.is_open
