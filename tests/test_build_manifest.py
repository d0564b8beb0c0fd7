"""Tests for node_swift_tooling.build.manifest."""

import pytest

from node_swift_tooling.build.errors import (
    AmbiguousProductError,
    ConfigError,
    ManifestError,
    NoProductsError,
)
from node_swift_tooling.build.manifest import PackageManifest, mac_version, resolve_product


def _manifest(products: list[str], platforms: list[dict] | None = None) -> PackageManifest:
    return PackageManifest.from_dict(
        {
            "name": "pkg",
            "products": [{"name": p, "type": {"library": ["automatic"]}} for p in products],
            "platforms": platforms or [],
        }
    )


class TestFromJson:
    def test_parses_dump_package_output(self) -> None:
        m = PackageManifest.from_json(
            b'{"name": "MyExample", "products": [{"name": "MyExample"}],'
            b' "platforms": [{"platformName": "macos", "version": "10.15"}], "targets": []}'
        )
        assert m.name == "MyExample"
        assert m.products == ("MyExample",)
        assert m.platforms[0].name == "macos"

    def test_invalid_json(self) -> None:
        with pytest.raises(ManifestError, match="invalid JSON"):
            PackageManifest.from_json("warning: something\n{}")

    def test_missing_name(self) -> None:
        with pytest.raises(ManifestError, match="name"):
            PackageManifest.from_json('{"products": []}')

    def test_malformed_products(self) -> None:
        with pytest.raises(ManifestError, match="products"):
            PackageManifest.from_json('{"name": "x", "products": [{"id": 1}]}')


class TestResolveProduct:
    def test_single_product_selected(self) -> None:
        assert resolve_product(_manifest(["Foo"])) == "Foo"

    def test_no_products(self) -> None:
        with pytest.raises(NoProductsError, match="No products"):
            resolve_product(_manifest([]))

    def test_ambiguous_products(self) -> None:
        with pytest.raises(AmbiguousProductError, match="swift.product") as exc:
            resolve_product(_manifest(["Foo", "Bar"]))
        assert exc.value.candidates == ["Foo", "Bar"]

    def test_configured_product_wins(self) -> None:
        assert resolve_product(_manifest(["Foo", "Bar"]), "Bar") == "Bar"

    def test_configured_product_used_verbatim(self) -> None:
        assert resolve_product(_manifest([]), "Other") == "Other"

    def test_configured_product_must_be_string(self) -> None:
        with pytest.raises(ConfigError, match="product"):
            resolve_product(_manifest(["Foo"]), 7)


class TestMacVersion:
    def test_declared(self) -> None:
        m = _manifest(["Foo"], [{"platformName": "ios", "version": "13.0"},
                                {"platformName": "macos", "version": "11.0"}])  # fmt: skip
        assert mac_version(m) == "11.0"

    def test_default_without_macos(self) -> None:
        assert mac_version(_manifest(["Foo"], [{"platformName": "ios", "version": "13.0"}])) == "10.10"

    def test_default_without_version(self) -> None:
        assert mac_version(_manifest(["Foo"], [{"platformName": "macos"}])) == "10.10"
