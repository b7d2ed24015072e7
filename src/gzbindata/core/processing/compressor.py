from __future__ import annotations

"""
Gzip Compression Encoder.

Streams file content through gzip and writes the compressed stream as a
parenthesised sequence of Python bytes literals. The literal text is pure
ASCII: quote and backslash delimiters are escaped, and every byte outside
the printable ASCII range (including the UTF-8 byte-order mark EF BB BF)
is written as a \\xNN numeric escape.

Compression uses a fixed level and a zero gzip timestamp so the same
input always produces the same literal for a given zlib build.
"""

import gzip
import logging
import shutil
from typing import BinaryIO, List, TextIO

from gzbindata.domain.errors import AssetIOError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENCODING CONSTANTS
# -----------------------------------------------------------------------------

COMPRESSION_LEVEL = 9

# Raw bytes encoded per literal line
LINE_WIDTH = 32

_LINE_INDENT = "    "


def _build_escape_table() -> List[str]:
    table: List[str] = []
    for byte in range(256):
        if byte == 0x22:
            table.append('\\"')
        elif byte == 0x5C:
            table.append("\\\\")
        elif 0x20 <= byte < 0x7F:
            table.append(chr(byte))
        else:
            table.append(f"\\x{byte:02x}")
    return table


_ESCAPES: List[str] = _build_escape_table()

# -----------------------------------------------------------------------------
# LITERAL ENCODING
# -----------------------------------------------------------------------------

def sanitize(chunk: bytes) -> str:
    """
    Encode raw bytes as the body of a double-quoted bytes literal.

    Args:
        chunk: Bytes to encode.

    Returns:
        str: ASCII text safe to place between b" and ".
    """
    return "".join(_ESCAPES[b] for b in chunk)


class BytesLiteralWriter:
    """
    File-like sink that turns written bytes into bytes-literal lines.

    Incoming bytes are buffered until a full line is available, so escape
    sequences are never split across lines.

    Attributes:
        written: Total number of raw bytes received.
    """

    def __init__(self, dest: TextIO, width: int = LINE_WIDTH):
        self._dest = dest
        self._width = width
        self._pending = bytearray()
        self.written = 0

    def write(self, data: bytes) -> int:
        self._pending.extend(data)
        self.written += len(data)
        while len(self._pending) >= self._width:
            self._emit(bytes(self._pending[:self._width]))
            del self._pending[:self._width]
        return len(data)

    def flush(self) -> None:
        pass

    def finish(self) -> None:
        """Emit the last, possibly short, literal line."""
        if self._pending:
            self._emit(bytes(self._pending))
            self._pending.clear()

    def _emit(self, chunk: bytes) -> None:
        self._dest.write(f'{_LINE_INDENT}b"{sanitize(chunk)}"\n')

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compress(dest: TextIO, source: BinaryIO, func: str) -> int:
    """
    Write `_<func> = (...)` holding the gzip-compressed source content.

    Args:
        dest: Text stream receiving generated source.
        source: Binary stream of the original file content.
        func: Identifier of the asset; the binding is named `_<func>`.

    Returns:
        int: Number of compressed bytes embedded.

    Raises:
        AssetIOError: If reading the source or writing the destination fails.
    """
    try:
        dest.write(f"_{func} = (\n")
        literal = BytesLiteralWriter(dest)

        with gzip.GzipFile(
                filename="",
                mode="wb",
                fileobj=literal,  # type: ignore[arg-type]
                compresslevel=COMPRESSION_LEVEL,
                mtime=0,
        ) as gz:
            shutil.copyfileobj(source, gz)

        literal.finish()
        dest.write(")\n")
    except OSError as e:
        raise AssetIOError(f"Failed to compress asset '{func}': {e}") from e

    logger.debug(f"Compressed '{func}' into {literal.written} bytes.")
    return literal.written


def compress_file(dest: TextIO, path: str, func: str) -> int:
    """
    Open a file from disk and compress it into `dest`.

    Raises:
        AssetIOError: If the file cannot be opened or read.
    """
    try:
        with open(path, "rb") as source:
            return compress(dest, source, func)
    except AssetIOError:
        raise
    except OSError as e:
        raise AssetIOError(f"Failed to read asset '{path}': {e}") from e
