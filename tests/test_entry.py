import struct

import pytest

from nvs_partition_gen.checksum import crc32
from nvs_partition_gen.const import BLOB_IDX, I8, SZ, U16
from nvs_partition_gen.entry import (new_entry, seal, set_data_payload,
                                     set_index_payload, set_primitive, slots_for)
from nvs_partition_gen.errors import InputError


def test_new_entry_layout():
    entry = new_entry(3, SZ, 2, "wifi")
    assert len(entry) == 32
    assert entry[0:4] == bytes([3, SZ, 2, 0xFF])
    assert entry[8:24] == b"wifi" + b"\0" * 12
    assert entry[24:32] == b"\xff" * 8


def test_key_of_fifteen_bytes_is_accepted():
    entry = new_entry(0, SZ, 1, "k" * 15)
    assert entry[8:24] == b"k" * 15 + b"\0"


def test_key_too_long():
    with pytest.raises(InputError):
        new_entry(0, SZ, 1, "k" * 16)


def test_signed_primitive_is_twos_complement():
    entry = set_primitive(new_entry(1, 0xFF, 1, "t"), "i8", -1)
    assert entry[1] == I8
    assert entry[24:32] == b"\xff" * 8

    entry = set_primitive(new_entry(1, 0xFF, 1, "t"), "u16", 0x1234)
    assert entry[1] == U16
    assert entry[24:32] == b"\x34\x12" + b"\xff" * 6


@pytest.mark.parametrize("encoding,value", [("u8", 256), ("u8", -1), ("i16", 40000)])
def test_out_of_range_primitive(encoding, value):
    with pytest.raises(InputError):
        set_primitive(new_entry(0, 0xFF, 1, "t"), encoding, value)


def test_data_payload():
    entry = set_data_payload(new_entry(0, SZ, 2, "s"), b"hello\0")
    size, reserved, crc = struct.unpack_from("<H2sI", entry, 24)
    assert size == 6
    assert reserved == b"\xff\xff"
    assert crc == crc32(b"hello\0")


def test_index_payload():
    entry = set_index_payload(new_entry(0, BLOB_IDX, 1, "b"), 5000, 2, 0)
    assert struct.unpack_from("<IBB", entry, 24) == (5000, 2, 0)
    assert entry[30:32] == b"\xff\xff"


def test_seal_covers_everything_but_the_crc_field():
    entry = seal(new_entry(1, SZ, 1, "abc"))
    (crc,) = struct.unpack_from("<I", entry, 4)
    assert crc == crc32(entry[0:4] + entry[8:32])


@pytest.mark.parametrize("size,slots", [(0, 0), (1, 1), (32, 1), (33, 2), (4000, 125)])
def test_slots_for(size, slots):
    assert slots_for(size) == slots
