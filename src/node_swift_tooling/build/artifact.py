"""Turn the raw NodeSwiftHost library into <product>.node and publish the current-build symlink."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from node_swift_tooling.build.plan import ResolvedPlan

log = logging.getLogger(__name__)


def force_symlink(target: str | Path, link: Path) -> None:
    """Point link at target, replacing whatever is there.

    The new link is created under a temporary sibling name and renamed over the
    old one, so readers never observe a missing link.
    """
    tmp = link.with_name(f".{link.name}.{os.getpid()}.tmp")
    if tmp.is_symlink() or tmp.exists():
        tmp.unlink()
    os.symlink(target, tmp)
    os.replace(tmp, link)


def codesign(path: Path) -> None:
    """Ad-hoc sign path. Failures are logged; an unsigned artifact still loads in dev setups."""
    try:
        r = subprocess.run(["codesign", "-fs", "-", str(path)])
    except OSError as e:
        log.warning("codesign unavailable, leaving %s unsigned: %s", path, e)
        return
    if r.returncode != 0:
        log.warning("codesign exited with status %s for %s", r.returncode, path)


def assemble(plan: ResolvedPlan, product: str, sign: bool = False) -> Path:
    """Rename <mode>/<lib> to <mode>/<product>.node, link <buildDir>/<product>.node at it."""
    binary_name = f"{product}.node"
    binary_path = plan.mode_dir / binary_name
    os.replace(plan.mode_dir / plan.link.lib_name, binary_path)
    force_symlink(Path(plan.mode) / binary_name, plan.build_dir / binary_name)
    if sign:
        codesign(binary_path)
    # Not resolve(): SwiftPM makes <mode> a symlink into <triple>/<mode>.
    return Path(os.path.abspath(binary_path))
