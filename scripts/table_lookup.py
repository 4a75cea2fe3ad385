#!/usr/bin/env python3
"""Load table files and print lookups.

Handy for checking what a set of table files resolves to before wiring
them into a service, and for watching how edits are picked up.

Usage
-----
::

    python scripts/table_lookup.py aliases                    # dump everything
    python scripts/table_lookup.py aliases local -k postmaster  # single lookups
    python scripts/table_lookup.py aliases --watch 60 -i 1      # reprint on reload

Options::

    --key, -k KEY        Look up KEY (repeatable; default: dump the table)
    --json               Output as machine-readable JSON
    --watch SECONDS      Keep the table running and reprint after each reload
    --interval, -i SECS  Reload interval while watching (default: 15)
    --verbose, -v        Enable debug logging
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from filetable import FileTable, FileTableConfig, FileTableError, Snapshot  # noqa: E402
from filetable._constants import DEFAULT_RELOAD_INTERVAL  # noqa: E402
from filetable.parser import Entry, format_line  # noqa: E402


def _render(snapshot: Snapshot, keys: list[str], json_mode: bool) -> str:
    if keys:
        result: dict[str, Any] = {
            key: snapshot.entries[key] if key in snapshot.entries else None for key in keys
        }
    else:
        result = dict(sorted(snapshot.entries.items()))

    if json_mode:
        return json.dumps(
            {"loaded_at": snapshot.loaded_at.isoformat(), "entries": result},
            indent=2,
            ensure_ascii=False,
        )

    out: list[str] = []
    for key, value in result.items():
        if value is None:
            out.append(f"# {key}: not found")
        else:
            out.append(format_line(Entry(key=key, value=value)))
    return "\n".join(out)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load table files and print lookups.")
    parser.add_argument("files", nargs="+", help="Table files, later files override earlier ones")
    parser.add_argument("--key", "-k", action="append", default=[], help="Key to look up (repeatable)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--watch", type=float, metavar="SECONDS", help="Keep running and reprint on reload")
    parser.add_argument(
        "--interval", "-i", type=float, default=DEFAULT_RELOAD_INTERVAL, help="Reload interval in seconds"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    def on_reload(snapshot: Snapshot) -> None:
        print(_render(snapshot, args.key, args.json_mode), flush=True)

    try:
        config = FileTableConfig(paths=tuple(args.files), reload_interval=args.interval)
        table = FileTable(config, on_reload=on_reload if args.watch else None)
        with table:
            print(_render(table.snapshot(), args.key, args.json_mode), flush=True)
            if args.watch:
                time.sleep(args.watch)
    except FileTableError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
