#!/usr/bin/env python3
# filename: huffman_cli.py
"""
File front end for the Huffman compressor.

    huffman-compressor encode <input> <output>
    huffman-compressor decode <input> <output>
    huffman-compressor info <input>

Exit codes: 0 success, 1 bad container or encoding limit, 2 usage error,
3 file could not be read or written.
"""

import argparse
import logging
import sys
from pathlib import Path

from huffman_bits import code_byte_width
from huffman_config import CompressorConfig
from huffman_container import ENTRY_PREFIX, HEADER
from huffman_errors import HuffmanError
from huffman_service import HuffmanService

logger = logging.getLogger("huffman")

EXIT_OK = 0
EXIT_FORMAT = 1
EXIT_USAGE = 2
EXIT_IO = 3


def build_parser():
    parser = argparse.ArgumentParser(prog="huffman-compressor", description="Static Huffman file compressor")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details")
    sub = parser.add_subparsers(dest="cmd", required=True)

    enc = sub.add_parser("encode", help="compress INPUT into OUTPUT")
    enc.add_argument("input")
    enc.add_argument("output")

    dec = sub.add_parser("decode", help="restore INPUT container into OUTPUT")
    dec.add_argument("input")
    dec.add_argument("output")

    info = sub.add_parser("info", help="print the header, code table and tree of a container")
    info.add_argument("input")
    return parser


def encode_file(service, src, dst):
    raw = Path(src).read_bytes()
    packed = service.compress(raw)
    Path(dst).write_bytes(packed)
    logger.info("encoded %s (%d bytes) -> %s (%d bytes)", src, len(raw), dst, len(packed))


def decode_file(service, src, dst):
    packed = Path(src).read_bytes()
    # decode fully before touching the output so a bad container leaves nothing behind
    raw = service.decompress(packed)
    Path(dst).write_bytes(raw)
    logger.info("decoded %s (%d bytes) -> %s (%d bytes)", src, len(packed), dst, len(raw))


def describe_file(service, src, out=None):
    out = out or sys.stdout
    container, tree = service.inspect(Path(src).read_bytes())
    header = container.header
    print(f"magic: 0x{header.magic:08x}", file=out)
    print(f"symbols: {header.symbol_count}", file=out)
    print(f"last byte bits: {header.last_byte_bit_length}", file=out)
    print(f"body bytes: {len(container.body)}", file=out)
    if tree is None:
        return
    table_size = sum(ENTRY_PREFIX.size + code_byte_width(len(code)) for _, code in container.table)
    print(f"table bytes: {table_size} (header {HEADER.size})", file=out)
    for symbol, code in container.table:
        print(f"  0x{symbol:02x} {len(code):3d} {code}", file=out)
    print(f"huffman tree ({len(container.table)})", file=out)
    print(tree.dump(), file=out)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = CompressorConfig.from_env()
    except ValueError as exc:
        parser.error(f"invalid configuration: {exc}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s huffman: %(message)s",
    )
    service = HuffmanService(config)

    try:
        if args.cmd == "encode":
            encode_file(service, args.input, args.output)
        elif args.cmd == "decode":
            decode_file(service, args.input, args.output)
        else:
            describe_file(service, args.input)
    except HuffmanError as exc:
        logger.error("%s: %s", args.input, exc)
        return EXIT_FORMAT
    except OSError as exc:
        logger.error("cannot access file: %s", exc)
        return EXIT_IO
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
