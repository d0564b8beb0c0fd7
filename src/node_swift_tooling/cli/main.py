"""`node-swift [rebuild [--debug] | build [--debug] | clean]`."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from node_swift_tooling.build import (
    ARCHITECTURES,
    BuildError,
    build_all,
    clean,
    load_project_config,
)

USAGE = "node-swift [rebuild [--debug] | build [--debug] | clean]"


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="node-swift", usage=USAGE)
    ap.add_argument(
        "command",
        nargs="?",
        default="rebuild",
        choices=("rebuild", "build", "clean"),
        help="rebuild (default) = clean + build",
    )
    ap.add_argument("--debug", action="store_true", help="Debug build (default: release)")
    ap.add_argument(
        "--arch",
        action="append",
        choices=ARCHITECTURES,
        help="Architecture to build; repeatable (default: arm64 and x86_64)",
    )
    ap.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Directory holding package.json (default: cwd)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log spawned commands")
    return ap


def run_argv(argv: list[str] | None = None) -> int:
    """Parse argv and run the command. Returns 0 on success, 1 on any build error."""
    ap = _parser()
    args = ap.parse_args(argv)
    if args.command == "clean" and args.debug:
        ap.error("--debug only applies to build and rebuild")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    root = args.project_root.resolve()
    mode = "debug" if args.debug else "release"
    archs = args.arch or list(ARCHITECTURES)

    try:
        config = load_project_config(root)
        if args.command in ("clean", "rebuild"):
            clean(config, cwd=root)
        if args.command == "clean":
            return 0
        print(f"🔨 Building {mode} for {', '.join(archs)}...")
        for path in build_all(mode, config, archs, cwd=root):
            print(f"✅ Built {path}")
    except (BuildError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run_argv())


if __name__ == "__main__":
    main()
