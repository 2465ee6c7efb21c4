from .declarations import check_size, generate, generate_from_file, read_declarations
from .errors import (InputError, InsufficientSizeError, NVSError, PageFullError,
                     PageOverflowError, UnsupportedEncodingError,
                     UnsupportedTypeError, WriteStatus)
from .page import Page
from .partition import Partition

__all__ = ["generate", "generate_from_file", "check_size", "read_declarations",
           "Partition", "Page", "WriteStatus", "NVSError", "InputError",
           "PageFullError", "InsufficientSizeError", "PageOverflowError",
           "UnsupportedEncodingError", "UnsupportedTypeError"]
