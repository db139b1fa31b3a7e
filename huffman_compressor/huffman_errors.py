# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the compressor core."""


class FormatError(HuffmanError, ValueError):
    """The buffer is not a valid container (bad magic, truncation, corrupt table)."""


class EncodingLimitError(HuffmanError):
    """A code is too long for the container's code-length field."""

    def __init__(self, symbol, length, limit):
        super().__init__(
            f"code for byte 0x{symbol:02x} is {length} bits long, limit is {limit}"
        )
        self.symbol = symbol
        self.length = length
        self.limit = limit
