# filename: huffman_bits.py

from bitarray import bitarray

# Bits are laid out most-significant first inside every byte
BIT_ORDER = "big"


def pack_codes(codes, data):
    """Concatenate the code of every byte in ``data`` and pack it into bytes.

    Returns ``(body, last_byte_bit_length)``; the unused low bits of the last
    byte are zero and ``last_byte_bit_length`` is 0 when that byte is full.
    """
    bits = bitarray(endian=BIT_ORDER)
    bits.encode({symbol: bitarray(code, endian=BIT_ORDER) for symbol, code in codes.items()}, data)
    return bits.tobytes(), len(bits) % 8


def bit_length(body_length, last_byte_bit_length):
    if body_length == 0:
        return 0
    if last_byte_bit_length == 0:
        return body_length * 8
    return (body_length - 1) * 8 + last_byte_bit_length


def unpack_bits(body, last_byte_bit_length):
    """Inverse of ``pack_codes``: the valid bits of ``body`` with padding dropped."""
    bits = bitarray(endian=BIT_ORDER)
    bits.frombytes(bytes(body))
    del bits[bit_length(len(body), last_byte_bit_length):]
    return bits


def code_to_bytes(code):
    # left-aligned, zero padded to whole bytes
    return bitarray(code, endian=BIT_ORDER).tobytes()


def code_from_bytes(raw, length):
    bits = bitarray(endian=BIT_ORDER)
    bits.frombytes(bytes(raw))
    return bits[:length].to01()


def code_byte_width(length):
    return (length + 7) // 8
