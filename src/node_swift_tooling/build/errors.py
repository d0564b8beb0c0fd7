"""Build error taxonomy. Everything raised by the build pipeline derives from BuildError."""

from __future__ import annotations

from typing import Any


class BuildError(RuntimeError):
    """Base class for failures surfaced by clean/build."""


class ConfigError(BuildError, ValueError):
    """Malformed or contradictory build configuration, detected before any subprocess runs."""

    def __init__(self, field: str, value: Any, detail: str | None = None) -> None:
        self.field = field
        self.value = value
        msg = f"Invalid value for {field} option (got {type(value).__name__})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UnsupportedPlatformError(BuildError):
    def __init__(self, platform: str, arch: str) -> None:
        self.platform = platform
        self.arch = arch
        super().__init__(
            f"The platform {platform} ({arch}) is currently unsupported by node-swift."
        )


class ToolExitError(BuildError):
    """An external tool exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, tool: str | None = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        if tool is None:
            tool = self.command[0] if self.command else "command"
        super().__init__(f"{tool} exited with status {returncode}")


class ManifestError(BuildError):
    """dump-package output could not be understood."""


class ProductResolutionError(BuildError):
    pass


class NoProductsError(ProductResolutionError):
    def __init__(self) -> None:
        super().__init__("No products found in Swift Package")


class AmbiguousProductError(ProductResolutionError):
    def __init__(self, candidates: list[str]) -> None:
        self.candidates = list(candidates)
        super().__init__(
            f"Found more than 1 product in the Swift Package ({', '.join(self.candidates)}). "
            "Consider specifying which product should be built via the swift.product "
            "field in package.json."
        )
