"""Swift -> Node-API build pipeline (SwiftPM dump-package, NodeSwiftHost build, .node assembly)."""

from .config import BuildConfig, NapiExperimental, NapiVersion, load_project_config
from .errors import (
    AmbiguousProductError,
    BuildError,
    ConfigError,
    ManifestError,
    NoProductsError,
    ToolExitError,
    UnsupportedPlatformError,
)
from .pipeline import build, build_all, clean
from .plan import ARCHITECTURES, BUILD_MODES, ResolvedPlan, resolve_plan
from .platforms import HostInfo

__all__ = [
    "ARCHITECTURES",
    "BUILD_MODES",
    "AmbiguousProductError",
    "BuildConfig",
    "BuildError",
    "ConfigError",
    "HostInfo",
    "ManifestError",
    "NapiExperimental",
    "NapiVersion",
    "NoProductsError",
    "ResolvedPlan",
    "ToolExitError",
    "UnsupportedPlatformError",
    "build",
    "build_all",
    "clean",
    "load_project_config",
    "resolve_plan",
]
