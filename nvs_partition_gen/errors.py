# ==================================================
# nvs_partition_gen/errors.py
# ==================================================
import enum


class WriteStatus(enum.Enum):
    """Outcome of placing an entry on a page."""
    OK                = "ok"
    PAGE_FULL         = "page-full"
    INSUFFICIENT_SIZE = "insufficient-size"


class NVSError(Exception):
    """Base class of everything the generator raises on purpose."""


class InputError(NVSError):
    """Bad caller input: size, key, value or declaration row."""


class PageFullError(NVSError):
    """An entry did not fit even on a freshly allocated page."""


class InsufficientSizeError(NVSError):
    """The partition budget cannot hold another page."""


class PageOverflowError(NVSError):
    """Entry counter ran past the last slot of a page."""


class UnsupportedEncodingError(NVSError):
    pass


class UnsupportedTypeError(NVSError):
    pass
