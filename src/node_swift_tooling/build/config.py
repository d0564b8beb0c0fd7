"""Typed build configuration. Loose package.json `swift` mappings enter through BuildConfig.from_mapping."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

from node_swift_tooling.build.errors import BuildError, ConfigError

log = logging.getLogger(__name__)

PROJECT_YAML = "node-swift.yaml"

# Declared order is also validation order.
FLAG_GROUPS = ("spmFlags", "cFlags", "swiftFlags", "cxxFlags", "linkerFlags")

KNOWN_KEYS = frozenset(
    {
        "buildPath",
        "packagePath",
        "product",
        "triple",
        "napi",
        "static",
        "enableEvolution",
        *FLAG_GROUPS,
    }
)


@dataclass(frozen=True)
class NapiVersion:
    """Target a specific Node-API level (1..N feature gates)."""

    level: int


@dataclass(frozen=True)
class NapiExperimental:
    """Build against the experimental Node-API surface."""


Napi = Union[NapiVersion, NapiExperimental, None]


@dataclass(frozen=True)
class BuildConfig:
    build_path: str | None = None
    package_path: str | None = None
    product: str | None = None
    triple: str | None = None
    napi: Napi = None
    static: bool = False
    enable_evolution: bool = False
    spm_flags: tuple[str, ...] = ()
    c_flags: tuple[str, ...] = ()
    swift_flags: tuple[str, ...] = ()
    cxx_flags: tuple[str, ...] = ()
    linker_flags: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> BuildConfig:
        """Validate a package.json-style mapping. First invalid field raises ConfigError."""
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigError("swift", raw, "expected an object")
        for key in raw:
            if key not in KNOWN_KEYS:
                log.debug("Ignoring unknown build option %r", key)

        static = raw.get("static")
        if static is not None and not isinstance(static, bool):
            raise ConfigError("static", static)
        package_path = _optional_str(raw, "packagePath")
        flags = {name: normalize_flags(name, raw.get(name)) for name in FLAG_GROUPS}
        triple = _optional_str(raw, "triple")
        napi = parse_napi(raw.get("napi"))
        build_path = _optional_str(raw, "buildPath")
        product = _optional_str(raw, "product")

        return cls(
            build_path=build_path,
            package_path=package_path,
            product=product,
            triple=triple,
            napi=napi,
            static=bool(static),
            enable_evolution=bool(raw.get("enableEvolution")),
            spm_flags=flags["spmFlags"],
            c_flags=flags["cFlags"],
            swift_flags=flags["swiftFlags"],
            cxx_flags=flags["cxxFlags"],
            linker_flags=flags["linkerFlags"],
        )

    @property
    def is_dynamic(self) -> bool:
        return not self.static


def _optional_str(raw: Mapping[str, Any], field: str) -> str | None:
    value = raw.get(field)
    if value is not None and not isinstance(value, str):
        raise ConfigError(field, value, "expected a string")
    return value


def normalize_flags(field: str, value: Any) -> tuple[str, ...]:
    """Flag group -> token tuple. Strings split on single spaces; lists must hold only strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split(" "))
    if isinstance(value, (list, tuple)) and all(isinstance(t, str) for t in value):
        return tuple(value)
    raise ConfigError(field, value, "expected a string or a list of strings")


def parse_napi(value: Any) -> Napi:
    if value is None:
        return None
    if value == "experimental":
        return NapiExperimental()
    # bool is an int subclass; true/false are not Node-API levels.
    if isinstance(value, int) and not isinstance(value, bool):
        return NapiVersion(value)
    raise ConfigError("napi", value, 'expected an integer or "experimental"')


def load_project_config(project_root: Path) -> BuildConfig:
    """Read build options from package.json's `swift` field, else node-swift.yaml, else defaults."""
    raw: Any = None
    package_json = project_root / "package.json"
    if package_json.is_file():
        try:
            data = json.loads(package_json.read_text())
        except json.JSONDecodeError as e:
            msg = f"Could not parse {package_json}: {e}"
            raise BuildError(msg) from e
        if isinstance(data, dict):
            raw = data.get("swift")
    if raw is None:
        yaml_path = project_root / PROJECT_YAML
        if yaml_path.is_file():
            with yaml_path.open() as f:
                raw = yaml.safe_load(f)
            log.debug("Loaded build options from %s", yaml_path)
    return BuildConfig.from_mapping({} if raw is None else raw)
