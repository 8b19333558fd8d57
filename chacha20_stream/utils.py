import struct

from . import config


def rotl32(x, n):
    return ((x << n) & config.WORD_MASK) | (x >> (32 - n))


def is_bytes_like(obj):
    return isinstance(obj, (bytes, bytearray, memoryview))


def load_words_le(data, count):
    """Read `count` little-endian uint32 words from the start of `data`."""
    if len(data) < count * 4:
        raise ValueError(f"need {count * 4} bytes, got {len(data)}")
    return struct.unpack_from(f'<{count}I', data)


def store_words_le(buf, words):
    """Write uint32 words little-endian into `buf` in place."""
    struct.pack_into(f'<{len(words)}I', buf, 0, *words)
