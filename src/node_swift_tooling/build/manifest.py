"""The `swift package dump-package` document: products, platforms, product selection."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from node_swift_tooling.build.errors import (
    AmbiguousProductError,
    ConfigError,
    ManifestError,
    NoProductsError,
)

DEFAULT_MAC_VERSION = "10.10"


@dataclass(frozen=True)
class Platform:
    name: str
    version: str | None = None


@dataclass(frozen=True)
class PackageManifest:
    name: str
    products: tuple[str, ...]
    platforms: tuple[Platform, ...] = ()

    @classmethod
    def from_json(cls, text: str | bytes) -> PackageManifest:
        try:
            data = json.loads(text)
        except ValueError as e:
            msg = f"swift package dump-package produced invalid JSON: {e}"
            raise ManifestError(msg) from e
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> PackageManifest:
        if not isinstance(data, dict) or not isinstance(data.get("name"), str):
            msg = "Package manifest is missing a string 'name'"
            raise ManifestError(msg)
        products = data.get("products") or []
        if not isinstance(products, list) or not all(
            isinstance(p, dict) and isinstance(p.get("name"), str) for p in products
        ):
            msg = f"Package manifest for {data['name']} has malformed 'products'"
            raise ManifestError(msg)
        platforms = []
        for p in data.get("platforms") or []:
            if isinstance(p, dict) and isinstance(p.get("platformName"), str):
                platforms.append(Platform(p["platformName"], p.get("version")))
        return cls(
            name=data["name"],
            products=tuple(p["name"] for p in products),
            platforms=tuple(platforms),
        )


def resolve_product(manifest: PackageManifest, configured: Any = None) -> str:
    """Configured product wins; otherwise the package must declare exactly one."""
    if configured is not None:
        if not isinstance(configured, str):
            raise ConfigError("product", configured, "expected a string")
        return configured
    if not manifest.products:
        raise NoProductsError()
    if len(manifest.products) > 1:
        raise AmbiguousProductError(list(manifest.products))
    return manifest.products[0]


def mac_version(manifest: PackageManifest) -> str:
    """Deployment target declared for macOS, else DEFAULT_MAC_VERSION."""
    for p in manifest.platforms:
        if p.name == "macos":
            return p.version or DEFAULT_MAC_VERSION
    return DEFAULT_MAC_VERSION
