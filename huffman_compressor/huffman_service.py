# // filename: huffman_service.py

import logging

from huffman_bits import pack_codes, unpack_bits
from huffman_config import CompressorConfig
from huffman_container import ContainerCodec
from huffman_core import HuffmanLogic

logger = logging.getLogger(__name__)


class HuffmanService:
    def __init__(self, config=None):
        self.config = config or CompressorConfig()
        self.logic = HuffmanLogic(self.config)
        self.codec = ContainerCodec()

    def compress(self, data):
        data = bytes(data)
        if not data:
            # Empty input: header only, no tree
            return self.codec.pack([], b"", 0)

        tree = self.logic.build_tree(data)
        codes = self.logic.generate_codes(tree)
        body, last_byte_bit_length = pack_codes(codes, data)
        table = tree.code_table(codes)
        container = self.codec.pack(table, body, last_byte_bit_length)

        logger.debug(
            "compressed %d bytes into %d (%d symbols, ratio %.2f%%)",
            len(data), len(container), len(table), 100.0 * len(container) / len(data),
        )
        return container

    def decompress(self, data):
        container, tree = self.inspect(data)
        if tree is None:
            return b""
        bits = unpack_bits(container.body, container.header.last_byte_bit_length)
        out = tree.decode(bits)
        logger.debug("decompressed %d body bits into %d bytes", len(bits), len(out))
        return out

    def inspect(self, data):
        """Parse a container and rebuild its decode tree without decoding the body.

        Returns ``(container, tree)``; ``tree`` is None for the empty container.
        """
        container = self.codec.unpack(data)
        if not container.table:
            return container, None
        return container, self.logic.rebuild_tree(container.table)
