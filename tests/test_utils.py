import pytest

from chacha20_stream.utils import rotl32, is_bytes_like, load_words_le, store_words_le


def test_rotl32_wraps_high_bits():
    assert rotl32(0x80000000, 1) == 0x00000001
    assert rotl32(0x7998bfda, 7) == 0xcc5fed3c
    assert rotl32(0x12345678, 16) == 0x56781234


def test_rotl32_stays_32_bit():
    for n in (7, 8, 12, 16):
        assert rotl32(0xFFFFFFFF, n) == 0xFFFFFFFF


@pytest.mark.parametrize("value, expected", [
    (b"abc", True),
    (bytearray(b"abc"), True),
    (memoryview(b"abc"), True),
    ("abc", False),
    ([1, 2, 3], False),
    (None, False),
])
def test_is_bytes_like(value, expected):
    assert is_bytes_like(value) is expected


def test_load_words_little_endian():
    assert load_words_le(b"\x01\x02\x03\x04\xff\x00\x00\x00", 2) == (0x04030201, 0xff)


def test_load_words_short_input():
    with pytest.raises(ValueError):
        load_words_le(b"\x00" * 7, 2)


def test_store_words_in_place():
    buf = bytearray(b"\xaa" * 8)
    store_words_le(buf, [0x04030201, 0x08070605])
    assert buf == bytearray(range(1, 9))
