"""Resolve a BuildConfig plus (mode, arch, host) into the immutable plan a build runs from."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from node_swift_tooling.build.config import (
    BuildConfig,
    Napi,
    NapiExperimental,
    NapiVersion,
)
from node_swift_tooling.build.errors import BuildError, ConfigError
from node_swift_tooling.build.platforms import (
    HOST_PRODUCT,
    HostInfo,
    PlatformLink,
    resolve_platform_link,
)

DEFAULT_BUILD_PATH = "build"

BUILD_MODES = ("release", "debug")
ARCHITECTURES = ("arm64", "x86_64")

EVOLUTION_FLAG = "--enable-parseable-module-interfaces"

SUPPORT_DIR = Path(__file__).resolve().parent.parent / "support"


@dataclass(frozen=True)
class ResolvedPlan:
    mode: str
    arch: str
    is_dynamic: bool
    enable_evolution: bool
    package_path: Path
    build_dir: Path
    host_package_dir: Path
    product: str | None
    spm_flags: tuple[str, ...]
    c_flags: tuple[str, ...]
    swift_flags: tuple[str, ...]
    cxx_flags: tuple[str, ...]
    linker_flags: tuple[str, ...]
    link: PlatformLink

    @property
    def aux_flags(self) -> tuple[str, ...]:
        """Per-tool flags as -Xcc/-Xswiftc/-Xcxx/-Xlinker pairs, appended to every swift invocation."""
        out: list[str] = []
        for prefix, flags in (
            ("-Xcc", self.c_flags),
            ("-Xswiftc", self.swift_flags),
            ("-Xcxx", self.cxx_flags),
            ("-Xlinker", self.linker_flags),
        ):
            for f in flags:
                out.extend((prefix, f))
        return tuple(out)

    @property
    def mode_dir(self) -> Path:
        return self.build_dir / self.mode


def napi_flags(napi: Napi) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """(C flags, Swift flags) defining the Node-API level macros."""
    if isinstance(napi, NapiVersion):
        swift = ["-DNAPI_VERSIONED"]
        swift.extend(f"-DNAPI_GE_{i}" for i in range(1, napi.level + 1))
        return (f"-DNAPI_VERSION={napi.level}",), tuple(swift)
    if isinstance(napi, NapiExperimental):
        return ("-DNAPI_EXPERIMENTAL",), ("-DNAPI_EXPERIMENTAL",)
    return (), ()


def _host_package_dir(support_dir: Path) -> Path:
    override = os.environ.get("NODE_SWIFT_HOST_PATH")
    if override:
        return Path(override)
    return support_dir / HOST_PRODUCT


def resolve_plan(
    config: BuildConfig,
    mode: str,
    arch: str,
    host: HostInfo | None = None,
    cwd: Path | None = None,
    support_dir: Path | None = None,
) -> ResolvedPlan:
    """Validate the build target and derive every flag and path. Spawns nothing."""
    if mode not in BUILD_MODES:
        raise ConfigError("mode", mode, f"expected one of {', '.join(BUILD_MODES)}")
    if arch not in ARCHITECTURES:
        raise ConfigError("architecture", arch, f"expected one of {', '.join(ARCHITECTURES)}")
    if host is None:
        host = HostInfo.detect()
    if cwd is None:
        cwd = Path.cwd()
    if support_dir is None:
        support_dir = Path(os.environ.get("NODE_SWIFT_SUPPORT_DIR") or SUPPORT_DIR)

    if config.package_path is not None:
        try:
            package_path = (cwd / config.package_path).resolve(strict=True)
        except OSError as e:
            raise ConfigError("packagePath", config.package_path, str(e)) from e
    else:
        package_path = cwd

    if config.build_path:
        build_dir = cwd / config.build_path
    else:
        build_dir = cwd / DEFAULT_BUILD_PATH / arch

    spm_flags = list(config.spm_flags)
    if config.triple is not None:
        spm_flags.extend(("--triple", config.triple))
    napi_c, napi_swift = napi_flags(config.napi)
    if config.enable_evolution:
        spm_flags.append(EVOLUTION_FLAG)

    link = resolve_platform_link(host, support_dir)
    host_package_dir = _host_package_dir(support_dir)
    if not host_package_dir.is_dir():
        msg = (
            f"{HOST_PRODUCT} package not found at {host_package_dir}; "
            "set NODE_SWIFT_HOST_PATH to the NodeSwiftHost directory of the node-swift package"
        )
        raise BuildError(msg)

    return ResolvedPlan(
        mode=mode,
        arch=arch,
        is_dynamic=config.is_dynamic,
        enable_evolution=config.enable_evolution,
        package_path=package_path,
        build_dir=build_dir,
        host_package_dir=host_package_dir,
        product=config.product,
        spm_flags=tuple(spm_flags),
        c_flags=config.c_flags + napi_c,
        swift_flags=config.swift_flags + napi_swift,
        cxx_flags=config.cxx_flags,
        linker_flags=config.linker_flags,
        link=link,
    )
