"""Capabilities loader for the ESC/POS printer database."""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
import logging
import threading
import types
from typing import Any

from ..const import GeneratorConfig

_LOGGER = logging.getLogger(__name__)

_LOCK = threading.Lock()
_DATABASE: types.ModuleType | None = None


@lru_cache(maxsize=1)
def _get_capabilities() -> dict[str, Any]:
    """Load capabilities from python-escpos (cached).

    Returns:
        Dictionary containing 'profiles' and 'encodings' data.
        Falls back to minimal capabilities if python-escpos unavailable.
    """
    try:
        from escpos.capabilities import CAPABILITIES  # noqa: PLC0415

        return CAPABILITIES  # type: ignore[no-any-return]  # noqa: TRY300
    except ImportError:
        _LOGGER.warning("python-escpos capabilities not available, using fallback")
        return _get_fallback_capabilities()


def _get_fallback_capabilities() -> dict[str, Any]:
    """Return fallback capabilities when python-escpos is unavailable.

    Returns:
        Minimal capabilities dict with a default profile and common encodings.
    """
    return {
        "profiles": {
            "default": {
                "name": "Default",
                "vendor": "Generic",
                "notes": "Default ESC/POS profile.",
                "codePages": {"0": "CP437"},
                "colors": {"0": "black"},
                "fonts": {"0": {"name": "Font A", "columns": 48}},
                "features": {
                    "paperFullCut": True,
                    "paperPartCut": True,
                },
                "media": {
                    "dpi": "Unknown",
                    "width": {"mm": "Unknown", "pixels": "Unknown"},
                },
            }
        },
        "encodings": {
            "CP437": {"name": "CP437", "python_encode": "cp437"},
            "CP850": {"name": "CP850", "python_encode": "cp850"},
            "CP852": {"name": "CP852", "python_encode": "cp852"},
            "CP858": {"name": "CP858", "python_encode": "cp858"},
            "CP1252": {"name": "CP1252", "python_encode": "cp1252"},
            "ISO_8859-1": {"name": "ISO_8859-1", "python_encode": "iso-8859-1"},
        },
    }


def load_database_module(
    document: Mapping[str, Any], config: GeneratorConfig | None = None
) -> types.ModuleType:
    """Generate the capability module for ``document`` and execute it.

    Raises:
        SchemaError: If the document is malformed.
    """
    from ..codegen import generate_source  # noqa: PLC0415

    config = config or GeneratorConfig()
    source = generate_source(document, config)
    module = types.ModuleType(config.module_name)
    code = compile(source, f"<{config.module_name}>", "exec")
    exec(code, module.__dict__)  # noqa: S102
    return module


def get_database() -> types.ModuleType:
    """Return the capability module for the bundled database.

    Built on first use and shared by every caller afterwards.
    """
    global _DATABASE  # noqa: PLW0603
    if _DATABASE is not None:
        return _DATABASE
    with _LOCK:
        if _DATABASE is None:
            _DATABASE = load_database_module(_get_capabilities())
            _LOGGER.debug(
                "Loaded %d printer profiles", len(_DATABASE.ALL_PROFILES)
            )
        return _DATABASE


def clear_capabilities_cache() -> None:
    """Clear the capabilities cache.

    Useful for testing or when capabilities file changes.
    """
    global _DATABASE  # noqa: PLW0603
    with _LOCK:
        _get_capabilities.cache_clear()
        _DATABASE = None
