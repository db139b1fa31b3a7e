import pytest

from huffman_container import (
	ENTRY_PREFIX,
	HEADER,
	MAGIC,
	ContainerCodec,
	Header,
)
from huffman_core import CodeTableEntry
from huffman_errors import EncodingLimitError, FormatError


@pytest.fixture
def codec():
	return ContainerCodec()


def test_magic_on_disk(codec):
	assert codec.pack([], b"", 0)[:4] == b".HUF"


def test_pack_layout(codec):
	table = [CodeTableEntry(ord("a"), "0"), CodeTableEntry(ord("b"), "1")]
	assert codec.pack(table, b"\x55", 0) == (
		b".HUF\x02\x00\x00\x00"
		b"\x61\x01\x00"
		b"\x62\x01\x80"
		b"\x55"
	)


def test_unpack_layout(codec):
	table = [CodeTableEntry(1, "1" * 9), CodeTableEntry(2, "0")]
	container = codec.unpack(codec.pack(table, b"\xff\x00", 3))
	assert container.header == Header(MAGIC, 2, 3)
	assert container.table == table
	assert container.body == b"\xff\x00"


def test_longest_code_fits(codec):
	long_code = "1" * 254 + "0"
	table = [CodeTableEntry(7, long_code), CodeTableEntry(8, "1" * 255)]
	buf = codec.pack(table, b"\x01", 1)
	assert len(buf) == HEADER.size + 2 * (ENTRY_PREFIX.size + 32) + 1
	assert codec.unpack(buf).table == table


def test_pack_rejects_code_longer_than_length_field(codec):
	with pytest.raises(EncodingLimitError):
		codec.pack([CodeTableEntry(1, "1" * 256)], b"\x00", 0)


def test_pack_rejects_bad_arguments(codec):
	with pytest.raises(ValueError):
		codec.pack([], b"\x00", 0)
	with pytest.raises(ValueError):
		codec.pack([CodeTableEntry(1, "0")], b"\x00", 8)
	with pytest.raises(ValueError):
		codec.pack([CodeTableEntry(1, "")], b"\x00", 0)


@pytest.mark.parametrize("buf, message", [
	(b"", "truncated header"),
	(b".HUF\x00\x00", "truncated header"),
	(b"HUF.\x00\x00\x00\x00", "not a recognized container"),
	(HEADER.pack(MAGIC, 257, 0), "symbol count"),
	(HEADER.pack(MAGIC, 1, 8) + b"\x61\x01\x00\x00", "last byte bit length"),
	(HEADER.pack(MAGIC, 0, 0) + b"\x00", "empty container"),
	(HEADER.pack(MAGIC, 0, 3), "empty container"),
	(HEADER.pack(MAGIC, 1, 0) + b"\x61\x01\x00", "body is missing"),
	(HEADER.pack(MAGIC, 2, 0) + b"\x61\x01\x00\x62", "truncated code table"),
	(HEADER.pack(MAGIC, 1, 0) + b"\x61\x09\xff", "truncated code bits"),
	(HEADER.pack(MAGIC, 1, 0) + b"\x61\x00\x00", "zero-length code"),
])
def test_unpack_rejects_malformed(codec, buf, message):
	with pytest.raises(FormatError, match=message):
		codec.unpack(buf)


def test_read_header(codec):
	assert codec.read_header(HEADER.pack(MAGIC, 3, 6)) == Header(MAGIC, 3, 6)
