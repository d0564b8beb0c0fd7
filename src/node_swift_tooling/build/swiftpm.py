"""Invoke SwiftPM: dump-package against the user's package, then build the NodeSwiftHost package."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable
from typing import Any

from node_swift_tooling.build.errors import ToolExitError
from node_swift_tooling.build.manifest import PackageManifest, mac_version
from node_swift_tooling.build.plan import ResolvedPlan
from node_swift_tooling.build.platforms import HOST_BINARY, HOST_PRODUCT

log = logging.getLogger(__name__)

Runner = Callable[..., Any]

# Verbose output would interleave with the JSON on stdout.
_DUMP_EXCLUDED_FLAGS = frozenset({"-v"})


def swift_executable() -> str:
    return os.environ.get("NODE_SWIFT_SWIFT") or "swift"


def dump_package_command(plan: ResolvedPlan) -> list[str]:
    return [
        swift_executable(),
        "package",
        "dump-package",
        "--package-path",
        str(plan.package_path),
        *(f for f in plan.spm_flags if f not in _DUMP_EXCLUDED_FLAGS),
        *plan.aux_flags,
    ]


def dump_package(plan: ResolvedPlan, runner: Runner = subprocess.run) -> PackageManifest:
    """Phase 1: read the package description. Raises ToolExitError or ManifestError."""
    cmd = dump_package_command(plan)
    log.debug("Running %s", cmd)
    r = runner(cmd, stdout=subprocess.PIPE)
    if r.returncode != 0:
        raise ToolExitError(cmd, r.returncode, "swift package dump-package")
    return PackageManifest.from_json(r.stdout)


def host_environment(plan: ResolvedPlan, manifest: PackageManifest, product: str) -> dict[str, str]:
    """Variables NodeSwiftHost's Package.swift reads to locate and configure the target package."""
    return {
        "NODE_SWIFT_TARGET_PACKAGE": manifest.name,
        "NODE_SWIFT_TARGET_PATH": str(plan.package_path),
        "NODE_SWIFT_TARGET_NAME": product,
        "NODE_SWIFT_HOST_BINARY": HOST_BINARY,
        "NODE_SWIFT_TARGET_MAC_VERSION": mac_version(manifest),
        "NODE_SWIFT_BUILD_DYNAMIC": "1" if plan.is_dynamic else "0",
        "NODE_SWIFT_ENABLE_EVOLUTION": "1" if plan.enable_evolution else "0",
    }


def build_host_command(plan: ResolvedPlan) -> list[str]:
    return [
        swift_executable(),
        "build",
        "-c",
        plan.mode,
        "--arch",
        plan.arch,
        "--product",
        HOST_PRODUCT,
        "--scratch-path",
        str(plan.build_dir),
        "--package-path",
        str(plan.host_package_dir),
        *plan.link.ldflags,
        *plan.spm_flags,
        *plan.aux_flags,
    ]


def build_host(
    plan: ResolvedPlan,
    manifest: PackageManifest,
    product: str,
    runner: Runner = subprocess.run,
) -> None:
    """Phase 2: build NodeSwiftHost with the target package wired in through the environment."""
    cmd = build_host_command(plan)
    overlay = host_environment(plan, manifest, product)
    log.debug("Running %s", cmd)
    log.debug("Environment overlay %s", overlay)
    env = dict(os.environ)
    env.update(overlay)
    r = runner(cmd, env=env)
    if r.returncode != 0:
        raise ToolExitError(cmd, r.returncode, "swift build")
