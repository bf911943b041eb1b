"""Serial Thermal Receipt Printer Driver."""

__version__ = "0.1.0"

from .commands import Commands, Justify, ModeBit
from .config import PrinterSettings
from .connection import PortInfo, SerialConnection, list_ports
from .errors import ConnectionError, PrinterError, SettingError, TransferError
from .mode import ModeState, PrinterConfig
from .printer import ThermalPrinter
from .transfer import ChunkSource, ImageTransferController, ImageTransferState

__all__ = [
    "ThermalPrinter",
    "PrinterError",
    "ConnectionError",
    "SettingError",
    "TransferError",
    "Commands",
    "Justify",
    "ModeBit",
    "PrinterSettings",
    "PortInfo",
    "SerialConnection",
    "list_ports",
    "ModeState",
    "PrinterConfig",
    "ChunkSource",
    "ImageTransferController",
    "ImageTransferState",
]
