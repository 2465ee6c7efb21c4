# ==================================================
# nvs_partition_gen/config.py
# ==================================================
import os
from pathlib import Path

# ───────────────────────── configuration ──────────────────────
PARTITION_SIZE   = int(os.getenv("NVS_PARTITION_SIZE",   "0x3000"), 0)
PARTITION_OFFSET = int(os.getenv("NVS_PARTITION_OFFSET", "0x9000"), 0)   # flash address of the image
TEMPLATE_PATH    = Path(os.getenv("NVS_TEMPLATE",        "wsPartitions.csv"))
