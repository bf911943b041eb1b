"""
Printer Mode State.

Mirrors the printer's formatting configuration and produces the command
bytes needed to move the printer from its current state to a new one.

Six print effects share one packed mode byte (ESC !) with no way to set a
single bit, so every change to one of them resends the whole byte.
Justification, bold, underline and line spacing each have their own
single-shot command and never touch the mode byte.
"""

import logging
from dataclasses import dataclass, fields
from typing import Optional, Union

from .commands import DEFAULT_LINE_SPACING, Commands, Justify, ModeBit
from .errors import SettingError

logger = logging.getLogger(__name__)


# Mode byte bit -> PrinterConfig attribute
MODE_FLAGS = {
    ModeBit.REVERSE: "reverse",
    ModeBit.UPDOWN: "updown",
    ModeBit.EMPHASIZED: "emphasized",
    ModeBit.DOUBLE_HEIGHT: "double_height",
    ModeBit.DOUBLE_WIDTH: "double_width",
    ModeBit.DELETE_LINE: "delete_line",
}

JUSTIFY_NAMES = {
    "left": Justify.LEFT,
    "center": Justify.CENTER,
    "right": Justify.RIGHT,
}


@dataclass
class PrinterConfig:
    """Printer formatting state as last transmitted."""
    line_spacing: int = DEFAULT_LINE_SPACING
    justify: Justify = Justify.LEFT
    bold: bool = False
    underline: bool = False
    reverse: bool = False
    updown: bool = False
    emphasized: bool = False
    double_height: bool = False
    double_width: bool = False
    delete_line: bool = False

    @property
    def mode_byte(self) -> int:
        """Packed ESC ! parameter, derived from the flags so the two never disagree."""
        value = 0
        for bit, name in MODE_FLAGS.items():
            if getattr(self, name):
                value |= bit
        return int(value)

    def restore_defaults(self):
        """Reset every field in place to its default."""
        defaults = PrinterConfig()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))


def parse_justify(value: Union[Justify, str]) -> Justify:
    """
    Convert "left", "center", "right" or a Justify member.

    Raises:
        SettingError: For anything else
    """
    if isinstance(value, Justify):
        return value
    if isinstance(value, str) and value in JUSTIFY_NAMES:
        return JUSTIFY_NAMES[value]
    logger.warning("Invalid justification %r", value)
    raise SettingError(f"Invalid justification: {value!r} (use left, center or right)")


def check_line_spacing(dots) -> None:
    """Raise SettingError unless dots is an integer in 1-255."""
    if isinstance(dots, bool) or not isinstance(dots, int) or not 1 <= dots <= 255:
        logger.warning("Invalid line spacing %r", dots)
        raise SettingError(f"Line spacing must be 1-255 dots, got {dots!r}")


class ModeState:
    """
    Owns a PrinterConfig and returns command bytes for every change.

    Each setter updates the config only once its input is known to be valid,
    and returns the bytes the caller must transmit. Nothing is de-duplicated:
    setting a flag to its current value still produces the command.
    """

    def __init__(self, config: Optional[PrinterConfig] = None):
        self.config = config if config is not None else PrinterConfig()

    @property
    def mode_byte(self) -> int:
        return self.config.mode_byte

    def reset(self):
        """Return the mirror to power-on defaults (no bytes, the device reset covers it)."""
        self.config.restore_defaults()

    # ---- Single-shot commands ----

    def set_justify(self, value: Union[Justify, str]) -> bytes:
        justify = parse_justify(value)
        self.config.justify = justify
        return Commands.justify(justify)

    def set_bold(self, enabled: bool = True) -> bytes:
        self.config.bold = bool(enabled)
        return Commands.bold(self.config.bold)

    def set_underline(self, enabled: bool = True) -> bytes:
        self.config.underline = bool(enabled)
        return Commands.underline(self.config.underline)

    def set_line_spacing(self, dots: int = DEFAULT_LINE_SPACING) -> bytes:
        """
        Select line spacing in dots.

        32 uses the dedicated default command, 1-255 otherwise use ESC 3 n.

        Raises:
            SettingError: If dots is not an integer in 1-255
        """
        check_line_spacing(dots)
        self.config.line_spacing = dots
        if dots == DEFAULT_LINE_SPACING:
            return Commands.line_spacing_default()
        return Commands.line_spacing(dots)

    # ---- Mode byte commands ----

    def set_mode(self, bit: ModeBit, enabled: bool = True) -> bytes:
        """Set or clear one mode flag and return the full mode byte write."""
        setattr(self.config, MODE_FLAGS[bit], bool(enabled))
        return Commands.mode(self.config.mode_byte)

    def set_reverse(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.REVERSE, enabled)

    def set_updown(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.UPDOWN, enabled)

    def set_emphasized(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.EMPHASIZED, enabled)

    def set_double_height(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.DOUBLE_HEIGHT, enabled)

    def set_double_width(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.DOUBLE_WIDTH, enabled)

    def set_delete_line(self, enabled: bool = True) -> bytes:
        return self.set_mode(ModeBit.DELETE_LINE, enabled)

    # ---- Bulk transition ----

    def transition_to(self, target: PrinterConfig) -> bytes:
        """
        Move to target, emitting only what differs.

        Mode flags are folded into a single mode byte write. The target is
        validated before anything is changed.

        Raises:
            SettingError: If target holds an invalid justification or spacing
        """
        justify = parse_justify(target.justify)
        spacing = target.line_spacing
        check_line_spacing(spacing)

        current = self.config
        out = bytearray()
        if justify != current.justify:
            out += self.set_justify(justify)
        if bool(target.bold) != current.bold:
            out += self.set_bold(target.bold)
        if bool(target.underline) != current.underline:
            out += self.set_underline(target.underline)
        if spacing != current.line_spacing:
            out += self.set_line_spacing(spacing)

        changed = False
        for name in MODE_FLAGS.values():
            wanted = bool(getattr(target, name))
            if wanted != getattr(current, name):
                setattr(current, name, wanted)
                changed = True
        if changed:
            out += Commands.mode(current.mode_byte)

        return bytes(out)
