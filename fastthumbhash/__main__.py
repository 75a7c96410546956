from __future__ import annotations

import argparse
from pathlib import Path

from fastthumbhash.core.decode import decode_to_file
from fastthumbhash.core.encode import encode_to_file
from fastthumbhash.core.types import DEFAULT_BASE_SIZE
from fastthumbhash.io.config import (
    get_section,
    load_yaml,
    pick_bool,
    pick_int,
    pick_str,
)
from fastthumbhash.io.text import to_base64
from fastthumbhash.utils.logger import Logger

_FORMATS = {"auto": None, "raw": False, "base64": True}


def _common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", type=Path, default=None)
    p.add_argument("--format", type=str, default=None, choices=sorted(_FORMATS))
    g = p.add_mutually_exclusive_group()
    g.add_argument("--quiet", dest="quiet", action="store_const", const=True, default=None)
    g.add_argument("--verbose", dest="quiet", action="store_const", const=False)


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="fastthumbhash")
    sp = p.add_subparsers(dest="cmd", required=True)

    pe = sp.add_parser("encode")
    pe.add_argument("input", type=Path)
    pe.add_argument("output", type=Path)
    _common_flags(pe)

    pd = sp.add_parser("decode")
    pd.add_argument("input", type=Path)
    pd.add_argument("output", type=Path)
    pd.add_argument("--base-size", type=int, default=None)
    pd.add_argument("--upscale", type=int, default=None)
    _common_flags(pd)

    a = p.parse_args(argv)

    cfg_all: dict[str, object] = {}
    if getattr(a, "config", None) is not None:
        cfg_all = load_yaml(a.config)

    cfg = get_section(cfg_all, a.cmd)
    fmt = pick_str(cfg, "format", a.format, "auto")
    if fmt not in _FORMATS:
        raise ValueError(f"unknown hash format {fmt!r}")
    quiet = pick_bool(cfg, "quiet", a.quiet, False)
    log = None if quiet else Logger(print).child(f"{a.cmd}: ")

    if a.cmd == "encode":
        data = encode_to_file(a.input, a.output, text=_FORMATS[fmt], log=log)
        if log is not None:
            log.info(to_base64(data))
        return

    base_size = pick_int(cfg, "base_size", a.base_size, DEFAULT_BASE_SIZE)
    upscale = pick_int(cfg, "upscale", a.upscale, 1)
    decode_to_file(
        a.input,
        a.output,
        base_size=base_size,
        upscale=upscale,
        text=_FORMATS[fmt],
        log=log,
    )


if __name__ == "__main__":
    main()
