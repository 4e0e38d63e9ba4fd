"""Generate the capability module from the printer database.

The pipeline validates the document, resolves every profile's media width,
packs feature flags and renders the result as Python source.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from ..const import GeneratorConfig
from .emitter import CodeEmitter
from .features import FeatureRegistry
from .schema import Database, load_database
from .units import resolve_media, resolve_width

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "CodeEmitter",
    "Database",
    "FeatureRegistry",
    "generate_source",
    "load_database",
    "resolve_media",
    "resolve_width",
]


def generate_source(
    document: Mapping[str, Any], config: GeneratorConfig | None = None
) -> str:
    """Return the source of the capability module for ``document``.

    Raises:
        SchemaError: If the document is malformed; the error names the
            encoding or profile at fault.
    """
    config = config or GeneratorConfig()
    db = load_database(document)
    registry = FeatureRegistry.from_database(db, strict=config.strict_features)
    for profile in db.profiles.values():
        registry.check(profile)
    media = {key: resolve_media(profile) for key, profile in db.profiles.items()}
    source = CodeEmitter(db, registry, media, config).emit()
    _LOGGER.debug("Generated %s (%d bytes)", config.module_name, len(source))
    return source
