"""Exception hierarchy for the thermal printer driver."""


class PrinterError(Exception):
    """Base exception for all printer errors."""

    pass


class ConnectionError(PrinterError):
    """Error opening, configuring or writing to the serial transport."""

    pass


class SettingError(PrinterError, ValueError):
    """Invalid formatting input (justification, line spacing)."""

    pass


class TransferError(PrinterError):
    """Image transfer rejected (already active, bad dimensions)."""

    pass
