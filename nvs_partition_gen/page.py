# ==================================================
# nvs_partition_gen/page.py
# ==================================================
import logging
import struct

import numpy as np

from .checksum import crc32
from .const import *
from .entry import (new_entry, set_data_payload, set_index_payload,
                    set_primitive, seal, slots_for)
from .errors import InputError, PageOverflowError, WriteStatus

logger = logging.getLogger(__name__)


class Page:
    """One 4 KiB page: header, entry-state bitmap and 126 entry slots."""
    def __init__(self, page_num: int, reserved: bool = False):
        self.page_num  = page_num
        self.reserved  = reserved
        self.entry_num = 0
        self.buf       = np.full(PAGE_SIZE, 0xFF, dtype=np.uint8)
        self.bitmap    = None
        if not reserved:
            self.bitmap = np.full(BITMAPARRAY_SIZE_IN_BYTES, 0xFF, dtype=np.uint8)
            self._set_header(page_num)

    # ------------------------------------------------------------------
    def _put(self, offset: int, data) -> None:
        raw = np.frombuffer(bytes(data), dtype=np.uint8)
        self.buf[offset:offset + len(raw)] = raw

    def _set_header(self, page_num: int) -> None:
        header = bytearray(struct.pack(PAGE_HEADER_FMT, ACTIVE, page_num,
                                       VERSION2, b"\xff" * 19, 0xFFFFFFFF))
        header[28:32] = struct.pack("<I", crc32(header[4:28]))
        self._put(0, header)

    @property
    def state(self) -> int | None:
        if self.reserved:
            return None
        return struct.unpack(STATE_FMT, self.buf[0:4].tobytes())[0]

    def mark_full(self) -> None:
        # only the state word changes; the header crc does not cover it
        if self.state == ACTIVE:
            self._put(0, struct.pack(STATE_FMT, FULL))

    @property
    def free_entries(self) -> int:
        return MAX_ENTRIES - self.entry_num

    # ------------------------------------------------------------------
    def _mark_written(self) -> None:
        bitnum     = self.entry_num * 2
        byte_idx   = bitnum // 8
        bit_offset = bitnum & 7
        self.bitmap[byte_idx] &= ~(1 << bit_offset) & 0xFF

    def write_slots(self, data, slot_count: int) -> None:
        """Copy `data` into the next free slots and mark `slot_count` of them written."""
        if self.entry_num + slot_count > MAX_ENTRIES:
            raise PageOverflowError(
                f"page {self.page_num}: {slot_count} slots requested, "
                f"{self.free_entries} left")
        self._put(FIRST_ENTRY_OFFSET + SINGLE_ENTRY_SIZE * self.entry_num, data)
        for _ in range(slot_count):
            self._mark_written()
            self.entry_num += 1
        self._put(BITMAPARRAY_OFFSET, self.bitmap.tobytes())

    # ------------------------------------------------------------------
    def write_primitive(self, key: str, value: int, encoding: str,
                        ns_index: int) -> WriteStatus:
        if self.entry_num >= MAX_ENTRIES:
            return WriteStatus.PAGE_FULL
        entry = new_entry(ns_index, 0xFF, 1, key)
        set_primitive(entry, encoding, value)
        self.write_slots(seal(entry), 1)
        return WriteStatus.OK

    def write_varlen(self, key: str, data: bytes, encoding: str, ns_index: int,
                     partition) -> WriteStatus:
        """
        Strings go on this page in one piece; binary encodings are split into
        blob chunks that may continue on pages taken from `partition`.
        """
        datalen = len(data)
        if encoding == "string" and datalen > MAX_OLD_BLOB_SIZE:
            raise InputError(f"Input File: Size ({datalen}) exceeds max allowed length "
                             f"`{MAX_OLD_BLOB_SIZE}` bytes for key `{key}`.")

        data_entry_count  = slots_for(datalen)
        total_entry_count = data_entry_count + 1     # +1 for the entry header

        if self.entry_num >= MAX_ENTRIES:
            return WriteStatus.PAGE_FULL
        if encoding in CHUNKED_ENCODINGS:
            return self._write_blob(key, data, ns_index, partition)
        if self.entry_num + total_entry_count >= MAX_ENTRIES:
            return WriteStatus.PAGE_FULL

        entry = new_entry(ns_index, SZ, total_entry_count, key)
        set_data_payload(entry, data)
        self.write_slots(seal(entry), 1)
        self.write_slots(data, data_entry_count)
        return WriteStatus.OK

    # ------------------------------------------------------------------
    def _chunks_needed(self, size: int) -> int:
        """Number of BLOB_DATA chunks a `size`-byte blob takes starting on this page."""
        tailroom = (MAX_ENTRIES - self.entry_num - 1) * SINGLE_ENTRY_SIZE
        if tailroom <= 0:
            return max(1, -(-size // MAX_NEW_BLOB_SIZE))
        if size <= tailroom:
            return 1
        return 1 + -(-(size - tailroom) // MAX_NEW_BLOB_SIZE)

    def _write_blob(self, key: str, data: bytes, ns_index: int,
                    partition) -> WriteStatus:
        page        = self
        chunk_start = 0
        chunk_count = 0
        offset      = 0
        remaining   = len(data)

        # chunk indices must stay below CHUNK_ANY
        needed = self._chunks_needed(remaining)
        if chunk_start + needed > CHUNK_ANY:
            raise InputError(f"`{key}`: {len(data)} bytes need {needed} chunks, "
                             f"at most {CHUNK_ANY} are addressable")

        while True:
            tailroom = (MAX_ENTRIES - page.entry_num - 1) * SINGLE_ENTRY_SIZE
            if tailroom < 0:
                raise PageOverflowError(f"page {page.page_num} overflow")
            if tailroom == 0 and remaining:
                page = partition.create_new_page()
                continue

            chunk_size = min(tailroom, remaining)
            chunk      = data[offset:offset + chunk_size]

            entry = new_entry(ns_index, BLOB_DATA, slots_for(chunk_size) + 1, key,
                              chunk_start + chunk_count)
            set_data_payload(entry, chunk)
            page.write_slots(seal(entry), 1)
            page.write_slots(chunk, slots_for(chunk_size))
            logger.debug("%s: chunk %d (%d bytes) on page %d",
                         key, chunk_start + chunk_count, chunk_size, page.page_num)

            chunk_count += 1
            remaining   -= chunk_size
            offset      += chunk_size

            if remaining or (tailroom - chunk_size) < SINGLE_ENTRY_SIZE:
                page = partition.create_new_page()

            if not remaining:
                index = new_entry(ns_index, BLOB_IDX, 1, key)
                set_index_payload(index, len(data), chunk_count, chunk_start)
                page.write_slots(seal(index), 1)
                return WriteStatus.OK

    # ------------------------------------------------------------------
    def get_data(self) -> bytes:
        return self.buf.tobytes()
