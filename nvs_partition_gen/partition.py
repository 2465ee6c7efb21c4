# ==================================================
# nvs_partition_gen/partition.py
# ==================================================
import base64
import binascii
import logging

import numpy as np

from .const import *
from .errors import (InputError, InsufficientSizeError, PageFullError,
                     UnsupportedEncodingError, WriteStatus)
from .page import Page

logger = logging.getLogger(__name__)


def _parse_int(key: str, value) -> int:
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text, 10)
    except ValueError:
        pass
    try:
        return int(text, 0)
    except ValueError:
        raise InputError(f"{key}: `{value}` is not an integer") from None


def _normalize(key: str, value, encoding: str):
    """Convert the textual cell value into what the page writers expect."""
    if value is None:
        raise InputError(f"{key}: missing value")
    if encoding == "hex2bin":
        value = value.strip()
        if len(value) % 2 != 0:
            raise InputError(f"{key}: Invalid data length. Should be multiple of 2.")
        try:
            return binascii.a2b_hex(value)
        except binascii.Error as e:
            raise InputError(f"{key}: invalid hex data ({e})") from e
    if encoding == "base64":
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise InputError(f"{key}: invalid base64 data ({e})") from e
    if encoding == "string":
        if isinstance(value, (bytes, bytearray)):
            value = value.decode("utf-8")
        return (value + "\0").encode("utf-8")
    if encoding == "binary":
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return _parse_int(key, value)


class Partition:
    """
    Builds an NVS partition page by page.

    `size` is the byte budget for regular pages; the trailing reserved page
    written by finish() is not taken from it.
    """
    def __init__(self, size: int):
        self.size          = size
        self.namespace_idx = 0
        self.page_num      = -1
        self.pages: list[Page] = []
        self.cur_page: Page | None = None
        self.create_new_page()

    # ------------------------------------------------------------------
    def _allocate_page(self, reserved: bool = False) -> WriteStatus:
        if self.cur_page is not None:
            self.cur_page.mark_full()
        if self.size <= 0 and not reserved:
            return WriteStatus.INSUFFICIENT_SIZE
        if not reserved:
            self.size -= PAGE_SIZE
        self.page_num += 1
        page = Page(self.page_num, reserved)
        self.pages.append(page)
        self.cur_page = page
        logger.debug("page %d allocated%s, %d bytes left", self.page_num,
                     " (reserved)" if reserved else "", self.size)
        return WriteStatus.OK

    def create_new_page(self, reserved: bool = False) -> Page:
        if self._allocate_page(reserved) is WriteStatus.INSUFFICIENT_SIZE:
            raise InsufficientSizeError(
                "Size parameter is less than the size of data in csv. Please increase size.")
        return self.cur_page

    def _place(self, key: str, write, *args) -> None:
        """Run a page writer on the current page, retrying once on a new page."""
        if write(self.cur_page, key, *args) is WriteStatus.OK:
            return
        page = self.create_new_page()
        if write(page, key, *args) is not WriteStatus.OK:
            raise PageFullError(f"`{key}` does not fit on an empty page")

    # ------------------------------------------------------------------
    def write_namespace(self, key: str) -> None:
        """Open a new namespace; subsequent entries are stored under it."""
        self.namespace_idx += 1
        if self.namespace_idx > 0xFF:
            raise InputError(f"{key}: too many namespaces")
        self._place(key, Page.write_primitive, self.namespace_idx, "u8", 0)

    def write_entry(self, key: str, value, encoding: str) -> None:
        encoding = (encoding or "").strip().lower()
        if encoding in VARLEN_ENCODINGS:
            data = _normalize(key, value, encoding)
            self._place(key, Page.write_varlen, data, encoding,
                        self.namespace_idx, self)
        elif encoding in PRIMITIVE_ENCODINGS:
            number = _normalize(key, value, encoding)
            self._place(key, Page.write_primitive, number, encoding,
                        self.namespace_idx)
        else:
            raise UnsupportedEncodingError(f"{encoding}: Unsupported encoding")

    # ------------------------------------------------------------------
    def finish(self) -> bytes:
        """Fill the remaining budget with empty pages, add the reserved page, return the image."""
        while self._allocate_page() is WriteStatus.OK:
            pass
        self._allocate_page(reserved=True)
        logger.info("NVS binary created: %d pages", len(self.pages))
        return self.get_binary_data()

    def get_binary_data(self) -> bytes:
        return np.concatenate([page.buf for page in self.pages]).tobytes()
