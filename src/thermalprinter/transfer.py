"""
Image Transfer Controller.

Paces a 1 bit per pixel bitmap from a remote, pull-based chunk source
down to the printer. The source is told how much to send with
request_chunk(); the data comes back later through on_chunk_arrived().

States:
    Idle: received_bytes == total_bytes (including the zero state)
    Transferring: received_bytes < total_bytes

Once everything has arrived, the next pull() prints the image, tells the
source to rewind, waits for the printer to settle and resets the session.
"""

import logging
import time
from dataclasses import dataclass, field
from io import BytesIO
from typing import TYPE_CHECKING, BinaryIO, Optional, Protocol, Union

from .commands import MAX_CHUNK_ROWS, MAX_ROW_BYTES, Commands
from .errors import TransferError

if TYPE_CHECKING:
    from .printer import ThermalPrinter

logger = logging.getLogger(__name__)


class ChunkSource(Protocol):
    """Remote side that owns the image data."""

    def request_chunk(self, size: int) -> None:
        """Ask for the next size bytes. Must not block."""
        ...

    def transfer_complete(self) -> None:
        """The whole image was received; rewind read pointers."""
        ...


@dataclass
class ImageTransferState:
    """Progress of the active transfer (all zero when idle)."""
    total_bytes: int = 0
    received_bytes: int = 0
    width: int = 0
    height: int = 0
    trailing_text: Optional[Union[str, bytes]] = None
    data: bytearray = field(default_factory=bytearray)

    @property
    def is_active(self) -> bool:
        return self.received_bytes < self.total_bytes

    def clear(self):
        """Zero the transfer pointers and drop buffered rows."""
        self.total_bytes = 0
        self.received_bytes = 0
        self.width = 0
        self.height = 0
        self.trailing_text = None
        self.data = bytearray()


def row_bytes_for(width: int) -> int:
    """Bytes needed for one row of width pixels."""
    return (width + 7) // 8


class ImageTransferController:
    """Drives an image transfer for a ThermalPrinter session."""

    def __init__(self, printer: "ThermalPrinter", source: ChunkSource,
                 chunk_size: Optional[int] = None):
        """
        Args:
            printer: Session that owns the transport and the transfer state
            source: Remote chunk source
            chunk_size: Bytes per request (default: printer.settings.chunk_size)
        """
        self.printer = printer
        self.source = source
        self.chunk_size = chunk_size or printer.settings.chunk_size

    @property
    def state(self) -> ImageTransferState:
        return self.printer.transfer

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def progress(self) -> float:
        """Fraction of the image received (1.0 when idle)."""
        state = self.state
        if state.total_bytes == 0:
            return 1.0
        return state.received_bytes / state.total_bytes

    def begin(self, width: int, height: int, total_bytes: Optional[int] = None,
              trailing_text: Optional[Union[str, bytes]] = None):
        """
        Start a new transfer.

        Args:
            width, height: Image size in pixels
            total_bytes: Payload size (default: full rows of width pixels * height)
            trailing_text: Printed under the image once it is complete

        Raises:
            TransferError: If a transfer is in progress or complete but not yet
                finished with pull(), or the size is invalid
        """
        state = self.state
        if state.is_active:
            raise TransferError(
                f"Transfer in progress ({state.received_bytes}/{state.total_bytes} bytes)"
            )
        if state.total_bytes > 0:
            raise TransferError(
                "Previous transfer complete but not finished, call pull() to print and reset"
            )
        if width < 0 or height < 0:
            raise TransferError(f"Invalid image size {width}x{height}")
        if total_bytes is None:
            total_bytes = row_bytes_for(width) * height
        if total_bytes < 0:
            raise TransferError(f"Invalid payload size {total_bytes}")

        state.clear()
        state.width = width
        state.height = height
        state.total_bytes = total_bytes
        state.trailing_text = trailing_text
        logger.info("Image transfer started: %dx%d, %d bytes", width, height, total_bytes)

    def pull(self):
        """
        Advance the transfer; call whenever the device can take more data.

        Requests the next chunk while data is outstanding. Otherwise prints
        whatever was assembled and runs the completion path.
        """
        state = self.state
        if state.received_bytes < state.total_bytes:
            logger.debug("Requesting %d bytes (%d/%d)", self.chunk_size,
                         state.received_bytes, state.total_bytes)
            self.source.request_chunk(self.chunk_size)
            return

        width, height = state.width, state.height
        data, trailing_text = bytes(state.data), state.trailing_text
        if data:
            self.print_image(width, height, data, trailing_text)

        state.clear()
        self.source.transfer_complete()
        logger.info("Image transfer complete, resetting printer")
        time.sleep(self.printer.settings.settle_delay)
        self.printer.reset()

    def on_chunk_arrived(self, data: bytes) -> int:
        """
        Accept a chunk from the source.

        Bytes beyond the expected total are discarded.

        Returns:
            Number of bytes accepted
        """
        state = self.state
        remaining = state.total_bytes - state.received_bytes
        if remaining <= 0:
            logger.warning("Dropping %d bytes received with no active transfer", len(data))
            return 0
        if len(data) > remaining:
            logger.warning("Chunk overruns image by %d bytes, truncating",
                           len(data) - remaining)
            data = data[:remaining]

        state.data += data
        state.received_bytes += len(data)
        return len(data)

    def print_image(self, width: int, height: int,
                    row_data: Union[bytes, bytearray, BinaryIO],
                    trailing_text: Optional[Union[str, bytes]] = None):
        """
        Print a bitmap as row blocks.

        Rows wider than 48 bytes (384 dots) are truncated, and rows are sent
        in blocks of at most 255 with one header each. Every row is flushed
        before the next is written.

        Args:
            width, height: Image size in pixels
            row_data: Rows of ceil(width / 8) bytes, as bytes or a binary stream
            trailing_text: Optional text printed after the image
        """
        if width < 0 or height < 0:
            raise TransferError(f"Invalid image size {width}x{height}")

        source_row_bytes = row_bytes_for(width)
        row_bytes = min(source_row_bytes, MAX_ROW_BYTES)
        stream = row_data if hasattr(row_data, "read") else BytesIO(bytes(row_data))

        remaining = height
        while remaining > 0:
            chunk_height = min(remaining, MAX_CHUNK_ROWS)
            self.printer.load(Commands.bitmap_header(chunk_height, row_bytes))
            for _ in range(chunk_height):
                row = stream.read(source_row_bytes) or b""
                self.printer.load(row[:row_bytes].ljust(row_bytes, b"\x00"))
                self.printer.flush()
            remaining -= chunk_height

        if trailing_text:
            self.printer.print(trailing_text)
        self.printer.feed(1)
