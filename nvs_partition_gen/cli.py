# ==================================================
# nvs_partition_gen/cli.py
# ==================================================
import argparse
import logging
import sys
from pathlib import Path

from . import config
from .declarations import generate_from_file
from .errors import NVSError


def _parse_overrides(pairs: list[str], parser: argparse.ArgumentParser) -> dict:
    overrides = {}
    for item in pairs:
        if "=" not in item:
            parser.error(f"bad override (expected KEY=VALUE): {item!r}")
        k, v = item.split("=", 1)
        overrides[k.strip()] = v
    return overrides


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="nvs-partition-gen",
                                description="Generate an NVS partition image from a CSV table")
    p.add_argument("input", nargs="?", default=str(config.TEMPLATE_PATH),
                   help="declaration table (key,type,encoding,value)")
    p.add_argument("output", help="path of the binary image to write")
    p.add_argument("--size", default=str(config.PARTITION_SIZE),
                   help="partition size in bytes, multiple of 4096 (default: %(default)s)")
    p.add_argument("--set", dest="overrides", action="append", default=[],
                   metavar="KEY=VALUE", help="replace the value of KEY")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.DEBUG)

    overrides = _parse_overrides(args.overrides, p)
    try:
        image = generate_from_file(args.input, args.size, overrides)
    except (NVSError, OSError, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(image)
    print(f"  ⋄ wrote {out} ({len(image)} bytes, flash at 0x{config.PARTITION_OFFSET:X})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
