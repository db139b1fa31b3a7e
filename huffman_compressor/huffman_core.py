# filename: huffman_core.py

import heapq
import logging
from collections import Counter, namedtuple

from huffman_config import CompressorConfig
from huffman_errors import EncodingLimitError, FormatError

logger = logging.getLogger(__name__)

CodeTableEntry = namedtuple("CodeTableEntry", ["symbol", "code"])


def count_frequencies(data):
    # Frequency analysis of the input byte data
    return Counter(data)


class HuffmanNode:
    def __init__(self, symbol, freq, left=None, right=None, order=0):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        # creation rank, breaks frequency ties in the priority queue
        self.order = order

    @property
    def is_leaf(self):
        return self.symbol is not None

    def child(self, bit):
        return self.right if bit else self.left

    def set_child(self, bit, node):
        if bit:
            self.right = node
        else:
            self.left = node

    def __lt__(self, other):
        return (self.freq, self.order) < (other.freq, other.order)

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq})"


class HuffmanTree:
    """Binary prefix tree shared by the encoder and the decoder.

    Build it with ``from_frequencies`` when encoding, or with
    ``from_code_table`` when all that is left is a serialized code table.
    Both produce trees that ``decode`` can walk.
    """

    def __init__(self, root):
        self.root = root

    @classmethod
    def from_frequencies(cls, freqs):
        """Build a Huffman tree from a non-empty ``{symbol: count}`` mapping.

        Leaves are ranked by ascending symbol and internal nodes by creation
        time, so equal frequencies always merge in the same order and the
        first node popped becomes the left child.
        """
        if not freqs:
            raise ValueError("cannot build a Huffman tree from an empty frequency table")

        priority_queue = [
            HuffmanNode(symbol, freq, order=order)
            for order, (symbol, freq) in enumerate(sorted(freqs.items()))
        ]
        heapq.heapify(priority_queue)
        order = len(priority_queue)

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.freq + right.freq, left, right, order)
            order += 1
            heapq.heappush(priority_queue, merged)

        return cls(priority_queue[0])

    @classmethod
    def from_code_table(cls, table):
        """Rebuild a decode tree from ``(symbol, code)`` pairs in any order."""
        root = HuffmanNode(None, 0)
        seen = set()
        for symbol, code in table:
            if symbol in seen:
                raise FormatError(f"byte 0x{symbol:02x} appears twice in the code table")
            seen.add(symbol)
            if not code or code.strip("01"):
                raise FormatError(f"invalid code {code!r} for byte 0x{symbol:02x}")

            node = root
            for char in code[:-1]:
                bit = char == "1"
                nxt = node.child(bit)
                if nxt is None:
                    nxt = HuffmanNode(None, 0)
                    node.set_child(bit, nxt)
                elif nxt.is_leaf:
                    raise FormatError(
                        f"code of byte 0x{nxt.symbol:02x} is a prefix of "
                        f"code {code!r} for byte 0x{symbol:02x}"
                    )
                node = nxt

            last = code[-1] == "1"
            if node.child(last) is not None:
                raise FormatError(
                    f"code {code!r} for byte 0x{symbol:02x} collides with another code"
                )
            node.set_child(last, HuffmanNode(symbol, 0))

        if not seen:
            raise FormatError("code table is empty")
        return cls(root)

    def codes(self):
        """Return ``{symbol: code}`` where each code is a string of '0'/'1'."""
        # A lone leaf still needs one bit per symbol
        if self.root.is_leaf:
            return {self.root.symbol: "0"}
        codes = {}
        self._assign_codes(self.root, "", codes)
        return codes

    def _assign_codes(self, node, current_code, codes):
        if node is None:
            return
        if node.is_leaf:
            codes[node.symbol] = current_code
            return
        self._assign_codes(node.left, current_code + "0", codes)
        self._assign_codes(node.right, current_code + "1", codes)

    def code_table(self, codes=None):
        if codes is None:
            codes = self.codes()
        return [CodeTableEntry(symbol, codes[symbol]) for symbol in sorted(codes)]

    def decode(self, bits):
        """Walk the tree over exactly ``len(bits)`` bits and return the decoded bytes."""
        root = self.root
        if root.is_leaf:
            if any(bits):
                raise FormatError("bit stream does not match the single-symbol code table")
            return bytes([root.symbol]) * len(bits)

        out = bytearray()
        node = root
        for bit in bits:
            node = node.child(bit)
            if node is None:
                raise FormatError("bit stream follows a path missing from the code table")
            if node.is_leaf:
                out.append(node.symbol)
                node = root

        if node is not root:
            raise FormatError("bit stream ends in the middle of a code")
        return bytes(out)

    def depth(self):
        def walk(node):
            if node is None or node.is_leaf:
                return 0
            return 1 + max(walk(node.left), walk(node.right))
        return walk(self.root)

    def node_count(self):
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node is None:
                continue
            count += 1
            stack.append(node.left)
            stack.append(node.right)
        return count

    def dump(self):
        """Indented text picture of the tree, one node per line."""
        lines = []
        codes = self.codes()

        def walk(node, indent):
            if node is None:
                return
            if node.is_leaf:
                lines.append(f"{' ' * indent}--[{node.symbol}]({codes[node.symbol]})")
                return
            lines.append(f"{' ' * indent}--{node.freq or '*'}:")
            walk(node.left, indent + 2)
            walk(node.right, indent + 2)

        walk(self.root, 0)
        return "\n".join(lines)


class HuffmanLogic:
    def __init__(self, config=None):
        self.config = config or CompressorConfig()

    def build_tree(self, data):
        freqs = count_frequencies(data)
        if not freqs:
            return None
        logger.debug("building tree for %d distinct bytes out of %d", len(freqs), len(data))
        return HuffmanTree.from_frequencies(freqs)

    def generate_codes(self, tree):
        codes = tree.codes()
        limit = self.config.max_code_length
        for symbol in sorted(codes):
            if len(codes[symbol]) > limit:
                raise EncodingLimitError(symbol, len(codes[symbol]), limit)
        return codes

    def rebuild_tree(self, table):
        logger.debug("rebuilding tree from %d table entries", len(table))
        return HuffmanTree.from_code_table(table)
