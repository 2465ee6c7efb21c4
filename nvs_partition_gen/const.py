# ==================================================
# nvs_partition_gen/const.py
# ==================================================
# -------- item type codes -------------------------------------------------
U8        = 0x01
I8        = 0x11
U16       = 0x02
I16       = 0x12
U32       = 0x04
I32       = 0x14
U64       = 0x08
I64       = 0x18
SZ        = 0x21
BLOB      = 0x41          # legacy single-page blob, never emitted
BLOB_DATA = 0x42
BLOB_IDX  = 0x48

# -------- page geometry ---------------------------------------------------
PAGE_SIZE                 = 4096
HEADER_SIZE               = 32
BITMAPARRAY_OFFSET        = 32
BITMAPARRAY_SIZE_IN_BYTES = 32
FIRST_ENTRY_OFFSET        = 64
SINGLE_ENTRY_SIZE         = 32
MAX_ENTRIES               = 126      # (4096 - 64) / 32
MAX_OLD_BLOB_SIZE         = 1984     # strings never leave their page
MAX_NEW_BLOB_SIZE         = 4000     # data budget of one empty page

# -------- page / entry markers ---------------------------------------------
CHUNK_ANY = 0xFF
ACTIVE    = 0xFFFFFFFE
FULL      = 0xFFFFFFFC
VERSION2  = 0xFE
CRC_SEED  = 0xFFFFFFFF

MAX_KEY_LEN   = 15       # + NUL terminator
KEY_FIELD_LEN = 16

# -------- struct formats ----------------------------------------------------
PAGE_HEADER_FMT = "<IIB19sI"   # state, seq_no, version, reserved, crc32
ENTRY_HDR_FMT   = "<BBBBI16s"  # ns_index, type, span, chunk_index, crc32, key
DATA_FMT        = "<H2sI"      # size, reserved, data crc32
INDEX_FMT       = "<IBB2s"     # total size, chunk_count, chunk_start, reserved
STATE_FMT       = "<I"

# -------- encodings ---------------------------------------------------------
# encoding -> (type code, struct format of the inline value)
PRIMITIVE_ENCODINGS = {
    "u8":  (U8,  "<B"),
    "i8":  (I8,  "<b"),
    "u16": (U16, "<H"),
    "i16": (I16, "<h"),
    "u32": (U32, "<I"),
    "i32": (I32, "<i"),
    "u64": (U64, "<Q"),
    "i64": (I64, "<q"),
}
CHUNKED_ENCODINGS = ("binary", "hex2bin", "base64")
VARLEN_ENCODINGS  = ("string",) + CHUNKED_ENCODINGS
