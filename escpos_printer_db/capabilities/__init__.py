"""Runtime side of the ESC/POS printer capability database.

Profiles are immutable and keep their per-id tables in :class:`IntMap`
instances. The bundled database is generated from python-escpos's copy of
escpos-printer-db the first time it is needed.
"""

from __future__ import annotations

from .int_map import IntMap, OwnedIntMap
from .loader import clear_capabilities_cache, get_database, load_database_module
from .profile import Color, FeatureSet, FontInfo, Media, Profile, Width
from .queries import (
    get_profile,
    get_profile_choices,
    get_profile_codepages,
    get_profile_cut_modes,
    get_profile_line_widths,
    is_valid_profile,
    profile_supports_feature,
)

__all__ = [
    "Color",
    "FeatureSet",
    "FontInfo",
    "IntMap",
    "Media",
    "OwnedIntMap",
    "Profile",
    "Width",
    "clear_capabilities_cache",
    "get_database",
    "get_profile",
    "get_profile_choices",
    "get_profile_codepages",
    "get_profile_cut_modes",
    "get_profile_line_widths",
    "is_valid_profile",
    "load_database_module",
    "profile_supports_feature",
]
