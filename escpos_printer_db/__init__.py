"""Parse-free access to the ESC/POS printer capability database."""

from __future__ import annotations

from .capabilities import (
    Color,
    FeatureSet,
    FontInfo,
    IntMap,
    Media,
    OwnedIntMap,
    Profile,
    Width,
    clear_capabilities_cache,
    get_database,
    get_profile,
    load_database_module,
)
from .codegen import generate_source
from .const import GeneratorConfig
from .exceptions import (
    CapabilitiesError,
    FeatureMismatchError,
    MediaResolutionError,
    SchemaError,
)

__all__ = [
    "CapabilitiesError",
    "Color",
    "FeatureMismatchError",
    "FeatureSet",
    "FontInfo",
    "GeneratorConfig",
    "IntMap",
    "Media",
    "MediaResolutionError",
    "OwnedIntMap",
    "Profile",
    "SchemaError",
    "Width",
    "clear_capabilities_cache",
    "generate_source",
    "get_database",
    "get_profile",
    "load_database_module",
]
