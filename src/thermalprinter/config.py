"""
Printer calibration and timing settings.

Defaults match the vendor's documented calibration. Any field can be
overridden from the environment, e.g. THERMAL_HEAT_TIME=120.
"""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional


@dataclass
class PrinterSettings:
    """Fixed configuration applied on every reset.

    Attributes:
        heat_dots: Max heating dots, unit 8 dots (default 7 = 64 dots)
        heat_time: Heating time, unit 10us (default 80 = 800us)
        heat_interval: Heating interval, unit 10us (default 2 = 20us)
        print_density: Density, 50% + 5% * n (0-31)
        print_break_time: Break time, n * 250us (0-7)
        reset_delay: Seconds to wait after a reset before the printer is ready
        settle_delay: Seconds to wait after an image transfer completes
        encoding: Codec used when text is given as str
        chunk_size: Bytes requested from the chunk source per pull
    """
    heat_dots: int = 7
    heat_time: int = 80
    heat_interval: int = 2
    print_density: int = 14
    print_break_time: int = 4
    reset_delay: float = 0.5
    settle_delay: float = 0.1
    encoding: str = "ascii"
    chunk_size: int = 384

    def __post_init__(self):
        for name in ("heat_dots", "heat_time", "heat_interval"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be 0-255, got {value}")
        if not 0 <= self.print_density <= 31:
            raise ValueError(f"print_density must be 0-31, got {self.print_density}")
        if not 0 <= self.print_break_time <= 7:
            raise ValueError(
                f"print_break_time must be 0-7, got {self.print_break_time}"
            )
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @property
    def density_byte(self) -> int:
        """Packed DC2 # parameter."""
        return (self.print_break_time << 5) | self.print_density

    @classmethod
    def from_env(
        cls, prefix: str = "THERMAL_", environ: Optional[Mapping[str, str]] = None
    ) -> "PrinterSettings":
        """Build settings, overriding defaults with PREFIX_FIELD variables."""
        env = os.environ if environ is None else environ
        overrides = {}
        for field in fields(cls):
            raw = env.get(prefix + field.name.upper())
            if raw is None or raw.strip() == "":
                continue
            raw = raw.strip()
            if field.type in (int, "int"):
                overrides[field.name] = int(raw)
            elif field.type in (float, "float"):
                overrides[field.name] = float(raw)
            else:
                overrides[field.name] = raw
        return cls(**overrides)
