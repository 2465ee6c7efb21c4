# ==================================================
# nvs_partition_gen/checksum.py
# ==================================================
import zlib

from .const import CRC_SEED


def crc32(data, seed: int = CRC_SEED) -> int:
    """CRC-32 of `data`; every checksum in the image starts from a fresh seed."""
    return zlib.crc32(bytes(data), seed) & 0xFFFFFFFF
