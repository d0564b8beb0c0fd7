"""Pytest fixtures for node-swift tooling tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from node_swift_tooling.build import HostInfo


@pytest.fixture(autouse=True)
def host_package(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An existing NodeSwiftHost directory so plans resolve without the npm package."""
    host = tmp_path_factory.mktemp("NodeSwiftHost")
    monkeypatch.setenv("NODE_SWIFT_HOST_PATH", str(host))
    return host


class FakeSwift:
    """Stands in for subprocess.run: answers dump-package with JSON, fakes the host library on build."""

    def __init__(
        self,
        manifest: dict[str, Any],
        lib_name: str = "libNodeSwiftHost.so",
        triple: str | None = None,
    ) -> None:
        self.manifest = manifest
        self.lib_name = lib_name
        # Real SwiftPM builds into <scratch>/<triple>/<mode> and links <scratch>/<mode> there.
        self.triple = triple
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self.dump_rc = 0
        self.build_rc = 0

    def __call__(self, cmd: list[str], **kwargs: Any) -> Any:
        self.calls.append((cmd, kwargs))
        if cmd[1:3] == ["package", "dump-package"]:
            out = json.dumps(self.manifest).encode()
            return type("R", (), {"returncode": self.dump_rc, "stdout": out})()
        if cmd[1] == "build" and self.build_rc == 0:
            scratch = Path(cmd[cmd.index("--scratch-path") + 1])
            mode = cmd[cmd.index("-c") + 1]
            if self.triple and not (scratch / mode).exists():
                (scratch / self.triple / mode).mkdir(parents=True)
                (scratch / mode).symlink_to(Path(self.triple) / mode)
            (scratch / mode).mkdir(parents=True, exist_ok=True)
            (scratch / mode / self.lib_name).write_bytes(b"\x7fELF")
        return type("R", (), {"returncode": self.build_rc, "stdout": b""})()

    def command(self, index: int) -> list[str]:
        return self.calls[index][0]


@pytest.fixture
def linux_host() -> HostInfo:
    return HostInfo("linux", "x64")


@pytest.fixture
def one_product_manifest() -> dict[str, Any]:
    return {
        "name": "foo-package",
        "products": [{"name": "Foo"}],
        "platforms": [{"platformName": "macos", "version": "10.15"}],
    }


@pytest.fixture
def fake_swift(one_product_manifest: dict[str, Any]) -> FakeSwift:
    return FakeSwift(one_product_manifest)


@pytest.fixture
def make_swift() -> type[FakeSwift]:
    return FakeSwift
