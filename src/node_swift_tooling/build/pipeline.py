"""clean/build: the operations the node-swift CLI (and other callers) drive."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path

from node_swift_tooling.build.artifact import assemble
from node_swift_tooling.build.config import BuildConfig
from node_swift_tooling.build.manifest import resolve_product
from node_swift_tooling.build.plan import ARCHITECTURES, DEFAULT_BUILD_PATH, resolve_plan
from node_swift_tooling.build.platforms import HostInfo
from node_swift_tooling.build.swiftpm import Runner, build_host, dump_package

log = logging.getLogger(__name__)


def clean(config: BuildConfig | None = None, cwd: Path | None = None) -> None:
    """Remove the build output tree. A missing tree is fine."""
    if config is None:
        config = BuildConfig()
    if cwd is None:
        cwd = Path.cwd()
    target = cwd / (config.build_path or DEFAULT_BUILD_PATH)
    log.debug("Removing %s", target)
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)


def build(
    mode: str,
    arch: str,
    config: BuildConfig | None = None,
    *,
    host: HostInfo | None = None,
    cwd: Path | None = None,
    runner: Runner = subprocess.run,
) -> Path:
    """Build one architecture and return the absolute path of <buildDir>/<mode>/<product>.node."""
    if config is None:
        config = BuildConfig()
    if host is None:
        host = HostInfo.detect()
    plan = resolve_plan(config, mode, arch, host=host, cwd=cwd)

    manifest = dump_package(plan, runner=runner)
    product = resolve_product(manifest, plan.product)
    log.debug("Building product %s of package %s (%s, %s)", product, manifest.name, mode, arch)

    build_host(plan, manifest, product, runner=runner)
    return assemble(plan, product, sign=host.system == "darwin")


def build_all(
    mode: str,
    config: BuildConfig | None = None,
    archs: Iterable[str] = ARCHITECTURES,
    *,
    host: HostInfo | None = None,
    cwd: Path | None = None,
    runner: Runner = subprocess.run,
) -> list[Path]:
    """One sequential build() per architecture, each in its own scratch directory."""
    return [build(mode, arch, config, host=host, cwd=cwd, runner=runner) for arch in archs]
