"""
Thermal Printer Command Definitions.

Byte-exact command builders for the serial thermal receipt printer.
Every command is an escape-prefixed, fixed-length sequence; text and
bitmap row payloads are passed through untouched.

Builders never validate their arguments. Callers (ModeState, the session)
check ranges before calling in.
"""

from enum import IntEnum, IntFlag


# ASCII control characters used as command prefixes
ASCII_LF = 0x0A
ASCII_FF = 0x0C
ASCII_DC2 = 0x12
ASCII_ESC = 0x1B

DEFAULT_LINE_SPACING = 32

# Bitmap limits (384 dot print head)
MAX_ROW_BYTES = 48
MAX_CHUNK_ROWS = 255

# Underline weight: the printer supports 0-2, only off/max are used
UNDERLINE_OFF = 0
UNDERLINE_MAX = 2


class Justify(IntEnum):
    """Justification parameter for ESC a."""
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class ModeBit(IntFlag):
    """Bits of the packed print mode byte written with ESC !."""
    REVERSE = 1 << 1
    UPDOWN = 1 << 2
    EMPHASIZED = 1 << 3
    DOUBLE_HEIGHT = 1 << 4
    DOUBLE_WIDTH = 1 << 5
    DELETE_LINE = 1 << 6


class Commands:
    """Command builders for the thermal printer."""

    @staticmethod
    def reset() -> bytes:
        """Reinitialize the printer (ESC @)."""
        return bytes([ASCII_ESC, ord("@")])

    @staticmethod
    def heat_config(max_dots: int, heat_time: int, heat_interval: int) -> bytes:
        """
        Set heating parameters (ESC 7 n1 n2 n3).

        Args:
            max_dots: Max heating dots, unit 8 dots
            heat_time: Heating time, unit 10us
            heat_interval: Heating interval, unit 10us
        """
        return bytes([ASCII_ESC, ord("7"), max_dots, heat_time, heat_interval])

    @staticmethod
    def density(break_time: int, density: int) -> bytes:
        """Set print density (DC2 # n), n = break_time in D7..D5, density in D4..D0."""
        return bytes([ASCII_DC2, 0x23, (break_time << 5) | density])

    @staticmethod
    def line_spacing_default() -> bytes:
        """Select the default line spacing (ESC 2)."""
        return bytes([ASCII_ESC, ord("2")])

    @staticmethod
    def line_spacing(dots: int) -> bytes:
        """Select a custom line spacing in dots (ESC 3 n)."""
        return bytes([ASCII_ESC, ord("3"), dots])

    @staticmethod
    def justify(value: Justify) -> bytes:
        """Select justification (ESC a n)."""
        return bytes([ASCII_ESC, ord("a"), int(value)])

    @staticmethod
    def mode(mode_byte: int) -> bytes:
        """Write the full print mode byte (ESC ! n)."""
        return bytes([ASCII_ESC, ord("!"), mode_byte])

    @staticmethod
    def bold(enabled: bool) -> bytes:
        """Turn bold on or off (ESC SP n)."""
        return bytes([ASCII_ESC, 0x20, 1 if enabled else 0])

    @staticmethod
    def underline(enabled: bool) -> bytes:
        """Turn underline on (max weight) or off (ESC - n)."""
        return bytes([ASCII_ESC, 0x2D, UNDERLINE_MAX if enabled else UNDERLINE_OFF])

    @staticmethod
    def bitmap_header(rows: int, bytes_per_row: int) -> bytes:
        """
        Start a bitmap block (DC2 * r n).

        Must be followed by exactly rows * bytes_per_row bytes of
        1 bit per pixel data, MSB first.
        """
        return bytes([ASCII_DC2, 0x2A, rows, bytes_per_row])

    @staticmethod
    def print_text(text: bytes) -> bytes:
        """Text followed by a line terminator and a form feed to flush it."""
        return bytes(text) + bytes([ASCII_LF, ASCII_FF])
