"""Capability queries over printer profiles.

Profiles may come from the bundled database (looked up by key) or be built
in code; every function accepting a profile takes either.
"""

from __future__ import annotations

import logging
from typing import Any

from ..const import (
    COMMON_CODEPAGES,
    COMMON_LINE_WIDTHS,
    DEFAULT_CUT_MODES,
    FEATURE_PAPER_FULL_CUT,
    FEATURE_PAPER_PART_CUT,
    PROFILE_AUTO,
    PROFILE_CUSTOM,
    UNKNOWN_LITERAL,
)
from ..naming import snake
from .loader import get_database
from .profile import Profile

_LOGGER = logging.getLogger(__name__)


def get_profile(profile_key: str | None) -> Profile | None:
    """Look up a bundled profile by its database key."""
    if not profile_key or profile_key in (PROFILE_AUTO, PROFILE_CUSTOM):
        return None
    profiles = get_database().ALL_PROFILES
    profile: Profile | None = profiles.get(profile_key)
    if profile is None:
        _LOGGER.debug("Unknown profile '%s'", profile_key)
    return profile


def _resolve(profile: Profile | str | None) -> Profile | None:
    if isinstance(profile, Profile):
        return profile
    return get_profile(profile)


def get_profile_choices() -> list[tuple[str, str]]:
    """Get list of (profile_key, display_name) tuples.

    Returns list sorted alphabetically with "Auto-detect (Default)" first
    and "Custom..." last.
    """
    choices: list[tuple[str, str]] = [(PROFILE_AUTO, "Auto-detect (Default)")]

    profile_list: list[tuple[str, str]] = []
    for key, profile in get_database().ALL_PROFILES.items():
        vendor = profile.vendor
        display = profile.name
        if vendor and vendor != "Generic":
            display = f"{vendor} {profile.name}"
        profile_list.append((key, display))

    # Sort by display name, case-insensitive
    profile_list.sort(key=lambda x: x[1].lower())
    choices.extend(profile_list)
    choices.append((PROFILE_CUSTOM, "Custom (enter profile name)..."))
    return choices


def is_valid_profile(profile_key: str | None) -> bool:
    """Check if a profile key is valid, empty (auto) or the custom marker."""
    if not profile_key or profile_key in (PROFILE_AUTO, PROFILE_CUSTOM):
        return True
    return profile_key in get_database().ALL_PROFILES


def get_profile_codepages(profile: Profile | str | None) -> list[str]:
    """Get the sorted code page names a profile supports.

    Falls back to the common code pages when the profile is unknown or lists
    none that have been identified.
    """
    resolved = _resolve(profile)
    if resolved is None:
        return COMMON_CODEPAGES.copy()

    unique_pages = {encoding.value for _, encoding in resolved.code_pages}
    unique_pages.discard(UNKNOWN_LITERAL)
    if not unique_pages:
        return COMMON_CODEPAGES.copy()
    return sorted(unique_pages)


def get_profile_line_widths(profile: Profile | str | None) -> list[int]:
    """Get the sorted line widths (column counts) of a profile's fonts."""
    resolved = _resolve(profile)
    if resolved is None:
        return COMMON_LINE_WIDTHS.copy()

    widths = {font.columns for _, font in resolved.fonts if font.columns > 0}
    if not widths:
        return COMMON_LINE_WIDTHS.copy()
    return sorted(widths)


def profile_supports_feature(profile: Profile | str | None, feature: str) -> bool:
    """Check if a profile supports a feature such as ``qrCode``.

    Unknown profiles are assumed to support everything.
    """
    resolved = _resolve(profile)
    if resolved is None:
        return True
    check: Any = getattr(resolved.features, f"is_{snake(feature)}", None)
    if check is None:
        return False
    return bool(check())


def get_profile_cut_modes(profile: Profile | str | None) -> list[str]:
    """Get available cut modes for a profile (always includes "none")."""
    resolved = _resolve(profile)
    if resolved is None:
        return DEFAULT_CUT_MODES.copy()

    modes = ["none"]
    if profile_supports_feature(resolved, FEATURE_PAPER_PART_CUT):
        modes.append("partial")
    if profile_supports_feature(resolved, FEATURE_PAPER_FULL_CUT):
        modes.append("full")
    return modes
