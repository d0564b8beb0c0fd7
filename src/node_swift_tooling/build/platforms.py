"""Host platform detection and the per-platform link table for the NodeSwiftHost library."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from pathlib import Path

from node_swift_tooling.build.errors import UnsupportedPlatformError

# The binary the Windows delay-load hook expects to resolve Node-API symbols from.
HOST_BINARY = "node.exe"

HOST_PRODUCT = "NodeSwiftHost"

# platform.machine() spellings -> Node-style arch names.
_MACHINE_ALIASES = {
    "amd64": "x64",
    "x86_64": "x64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


@dataclass(frozen=True)
class HostInfo:
    """The machine running the build: system is darwin|linux|win32, machine is x64|arm64|..."""

    system: str
    machine: str

    @classmethod
    def detect(cls) -> HostInfo:
        system = platform.system().lower()
        if system == "windows":
            system = "win32"
        machine = platform.machine().lower()
        return cls(system, _MACHINE_ALIASES.get(machine, machine))


@dataclass(frozen=True)
class PlatformLink:
    lib_name: str
    ldflags: tuple[str, ...]


def windows_import_lib(host: HostInfo, support_dir: Path) -> Path:
    """Bundled node.lib for delay-loading; only x64 is shipped."""
    if host.machine != "x64":
        raise UnsupportedPlatformError(host.system, host.machine)
    return support_dir / "vendored" / "node" / "lib" / "node-win32-x64.lib"


def resolve_platform_link(host: HostInfo, support_dir: Path) -> PlatformLink:
    """Raw library filename and extra linker flags for host. Raises UnsupportedPlatformError."""
    if host.system == "darwin":
        return PlatformLink(
            f"lib{HOST_PRODUCT}.dylib",
            ("-Xlinker", "-undefined", "-Xlinker", "dynamic_lookup"),
        )
    if host.system == "linux":
        return PlatformLink(f"lib{HOST_PRODUCT}.so", ("-Xlinker", "-undefined"))
    if host.system == "win32":
        lib = windows_import_lib(host, support_dir)
        return PlatformLink(
            f"{HOST_PRODUCT}.dll",
            (
                "-Xlinker",
                str(lib),
                "-Xlinker",
                "delayimp.lib",
                "-Xlinker",
                f"/DELAYLOAD:{HOST_BINARY}",
            ),
        )
    raise UnsupportedPlatformError(host.system, host.machine)
