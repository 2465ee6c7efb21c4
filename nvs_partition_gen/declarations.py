# ==================================================
# nvs_partition_gen/declarations.py
# ==================================================
"""
Reading the key,type,encoding,value table and driving a Partition with it.

    key,type,encoding,value
    storage,namespace,,
    ssid,data,string,myssid
"""
import csv
import io
import itertools
import logging
import os
from pathlib import Path
from typing import Optional

from .const import MAX_KEY_LEN, PAGE_SIZE
from .errors import InputError, UnsupportedTypeError
from .partition import Partition

logger = logging.getLogger(__name__)


def check_size(size) -> int:
    """Validate the partition size; returns the budget left after the reserved page."""
    try:
        input_size = int(size, 0) if isinstance(size, str) else int(size)
    except (TypeError, ValueError):
        raise InputError(f"Invalid partition size `{size}`") from None
    if input_size <= 0 or input_size % PAGE_SIZE != 0:
        raise InputError(f"Size of partition must be multiple of {PAGE_SIZE}")

    # one page is reserved for the trailing filler
    input_size -= PAGE_SIZE
    if input_size < 2 * PAGE_SIZE:
        raise InputError("Minimum NVS partition size needed is 0x3000 bytes.")
    return input_size


def read_declarations(text: str) -> list[dict]:
    """Rows as dicts keyed by the header; stops at the first empty row."""
    header = None
    rows   = []
    for cells in csv.reader(io.StringIO(text)):
        if header is None:
            if not cells or cells[0].lstrip().startswith("#"):
                continue
            header = [c.strip() for c in cells]
            missing = {"key", "type"} - set(header)
            if missing:
                raise InputError(f"Input File: header row lacks column(s) "
                                 f"{', '.join(sorted(missing))}: {cells}")
            continue
        if len(cells) <= 1 and "".join(cells) == "":
            break
        rows.append(dict(itertools.zip_longest(header, cells)))
    if header is None:
        raise InputError("Input File: missing header row")
    return rows


def write_declaration(nvs: Partition, key: str, datatype, encoding, value) -> None:
    if datatype == "file":
        raise UnsupportedTypeError("Files are not supported")
    if datatype == "namespace":
        nvs.write_namespace(key)
    elif datatype == "data":
        nvs.write_entry(key, value, encoding)
    else:
        raise UnsupportedTypeError(f"{key}: unsupported type `{datatype}`")


def generate(source, size, overrides: Optional[dict] = None) -> bytes:
    """
    Encode a declaration table into an NVS partition image of `size` bytes.

    `source` is the table text, a readable text stream or an os.PathLike
    naming the table file; a plain str is always table text, use
    generate_from_file() for string paths. Values found in
    `overrides` (keyed by row key) replace the table's own values.
    """
    input_size = check_size(size)
    overrides  = overrides or {}
    if isinstance(source, os.PathLike):
        text = Path(source).read_text(encoding="utf-8")
    elif hasattr(source, "read"):
        text = source.read()
    else:
        text = source

    nvs = Partition(input_size)
    logger.info("Creating NVS binary")
    for row in read_declarations(text):
        key = (row.get("key") or "").strip()
        if not key:
            raise InputError(f"Input File: row without key: {row}")
        value = overrides.get(key, row.get("value"))
        if len(key) > MAX_KEY_LEN:
            raise InputError(f"Length of key `{key}` should be <= {MAX_KEY_LEN} characters.")
        write_declaration(nvs, key, (row.get("type") or "").strip(),
                          row.get("encoding"), value)
    return nvs.finish()


def generate_from_file(path: str | os.PathLike, size,
                       overrides: Optional[dict] = None) -> bytes:
    return generate(Path(path).read_text(encoding="utf-8"), size, overrides)
