# ==================================================
# nvs_partition_gen/entry.py
# ==================================================
"""
Encoding of single 32-byte entries.

    [0]      namespace index
    [1]      item type
    [2]      span (entries used, header included)
    [3]      chunk index
    [4:8]    crc32 over [0:4] + [8:32]
    [8:24]   key, NUL padded
    [24:32]  inline value, or a data/index descriptor
"""
import struct

from .checksum import crc32
from .const import *
from .errors import InputError

PAYLOAD_OFFSET = 24


def encode_key(key: str) -> bytes:
    raw = key.encode("utf-8")
    if len(raw) > MAX_KEY_LEN:
        raise InputError(f"Length of key `{key}` should be <= {MAX_KEY_LEN} characters.")
    return raw


def new_entry(ns_index: int, type_code: int, span: int, key: str,
              chunk_index: int = CHUNK_ANY) -> bytearray:
    entry = bytearray(b"\xff" * SINGLE_ENTRY_SIZE)
    struct.pack_into(ENTRY_HDR_FMT, entry, 0, ns_index, type_code, span,
                     chunk_index, 0xFFFFFFFF, encode_key(key))
    return entry


def set_primitive(entry: bytearray, encoding: str, value: int) -> bytearray:
    type_code, fmt = PRIMITIVE_ENCODINGS[encoding]
    try:
        raw = struct.pack(fmt, value)
    except struct.error as e:
        raise InputError(f"Value {value} out of range for `{encoding}`: {e}") from e
    entry[1] = type_code
    entry[PAYLOAD_OFFSET:PAYLOAD_OFFSET + len(raw)] = raw
    return entry


def set_data_payload(entry: bytearray, data: bytes) -> bytearray:
    struct.pack_into(DATA_FMT, entry, PAYLOAD_OFFSET,
                     len(data), b"\xff\xff", crc32(data))
    return entry


def set_index_payload(entry: bytearray, total_size: int, chunk_count: int,
                      chunk_start: int) -> bytearray:
    struct.pack_into(INDEX_FMT, entry, PAYLOAD_OFFSET,
                     total_size, chunk_count, chunk_start, b"\xff\xff")
    return entry


def seal(entry: bytearray) -> bytearray:
    """Stamp the header crc; must be the last change to the entry."""
    entry[4:8] = struct.pack("<I", crc32(entry[0:4] + entry[8:32]))
    return entry


def slots_for(size: int) -> int:
    """Number of 32-byte data slots `size` bytes occupy."""
    return ((size + SINGLE_ENTRY_SIZE - 1) & ~(SINGLE_ENTRY_SIZE - 1)) // SINGLE_ENTRY_SIZE
