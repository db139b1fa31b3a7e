# filename: huffman_container.py
"""
Binary container for Huffman-compressed data.

Layout, all integers little-endian:

    magic                 uint32   0x4655482E (".HUF" on disk)
    symbol_count          uint16   0..256, 0 only for empty input
    last_byte_bit_length  uint16   0..7, bits used in the last body byte (0 = full)
    symbol_count entries:
        symbol            uint8
        code_length       uint8    1..255
        code_bits         ceil(code_length / 8) bytes, MSB first, zero padded
    body                  packed code bits up to the end of the buffer
"""

import logging
import struct
from collections import namedtuple

from huffman_bits import code_byte_width, code_from_bytes, code_to_bytes
from huffman_core import CodeTableEntry
from huffman_config import MAX_CODE_LENGTH
from huffman_errors import EncodingLimitError, FormatError

logger = logging.getLogger(__name__)

MAGIC = 0x4655482E
MAX_SYMBOLS = 256

HEADER = struct.Struct("<IHH")
ENTRY_PREFIX = struct.Struct("<BB")

Header = namedtuple("Header", ["magic", "symbol_count", "last_byte_bit_length"])
Container = namedtuple("Container", ["header", "table", "body"])


class ContainerCodec:
    def pack(self, table, body, last_byte_bit_length):
        """Serialize header, code table and body into one buffer."""
        if len(table) > MAX_SYMBOLS:
            raise ValueError(f"code table has {len(table)} entries, at most {MAX_SYMBOLS} allowed")
        if not 0 <= last_byte_bit_length <= 7:
            raise ValueError(f"last_byte_bit_length must be 0..7, got {last_byte_bit_length}")
        if not table and (body or last_byte_bit_length):
            raise ValueError("an empty code table cannot carry a body")

        out = bytearray(HEADER.pack(MAGIC, len(table), last_byte_bit_length))
        for symbol, code in table:
            if len(code) > MAX_CODE_LENGTH:
                raise EncodingLimitError(symbol, len(code), MAX_CODE_LENGTH)
            if not code:
                raise ValueError(f"byte 0x{symbol:02x} has an empty code")
            out += ENTRY_PREFIX.pack(symbol, len(code))
            out += code_to_bytes(code)
        table_size = len(out) - HEADER.size
        out += body

        logger.debug(
            "packed container: %d entries, %d table bytes, %d body bytes",
            len(table), table_size, len(body),
        )
        return bytes(out)

    def read_header(self, buf):
        if len(buf) < HEADER.size:
            raise FormatError(f"truncated header: {len(buf)} of {HEADER.size} bytes")
        header = Header(*HEADER.unpack_from(buf, 0))
        if header.magic != MAGIC:
            raise FormatError("not a recognized container (bad magic)")
        if header.symbol_count > MAX_SYMBOLS:
            raise FormatError(f"symbol count {header.symbol_count} exceeds {MAX_SYMBOLS}")
        if header.last_byte_bit_length > 7:
            raise FormatError(
                f"last byte bit length {header.last_byte_bit_length} is out of range"
            )
        return header

    def unpack(self, buf):
        """Split a container into its header, code table and body."""
        buf = bytes(buf)
        header = self.read_header(buf)

        table = []
        offset = HEADER.size
        for index in range(header.symbol_count):
            if offset + ENTRY_PREFIX.size > len(buf):
                raise FormatError(f"truncated code table at entry {index}")
            symbol, length = ENTRY_PREFIX.unpack_from(buf, offset)
            offset += ENTRY_PREFIX.size
            if length == 0:
                raise FormatError(f"byte 0x{symbol:02x} has a zero-length code")
            width = code_byte_width(length)
            if offset + width > len(buf):
                raise FormatError(f"truncated code bits at entry {index}")
            table.append(CodeTableEntry(symbol, code_from_bytes(buf[offset:offset + width], length)))
            offset += width

        body = buf[offset:]
        if header.symbol_count == 0:
            if body or header.last_byte_bit_length:
                raise FormatError("empty container carries body data")
        elif not body:
            raise FormatError("container body is missing")

        return Container(header, table, body)
