"""Assign bit positions to feature names and pack profile features."""

from __future__ import annotations

import logging

from ..exceptions import FeatureMismatchError
from .schema import Database, ProfileRecord

_LOGGER = logging.getLogger(__name__)


class FeatureRegistry:
    """Canonical feature list for one database.

    The first profile in key order defines the feature names; the ``i``-th
    name is bit ``i``. Every profile is expected to declare exactly these
    names. With ``strict`` a profile that adds or omits a name is rejected,
    otherwise unknown names are logged and ignored.
    """

    def __init__(self, names: list[str], *, strict: bool = True) -> None:
        self._names = list(names)
        self._bits = {name: 1 << i for i, name in enumerate(self._names)}
        self._strict = strict

    @classmethod
    def from_database(cls, db: Database, *, strict: bool = True) -> FeatureRegistry:
        if not db.profiles:
            return cls([], strict=strict)
        canonical = next(iter(db.profiles.values()))
        _LOGGER.debug(
            "Using profile '%s' for %d feature names",
            canonical.key,
            len(canonical.features),
        )
        return cls(list(canonical.features), strict=strict)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def bit(self, name: str) -> int:
        """Return the mask for ``name``."""
        return self._bits[name]

    def check(self, profile: ProfileRecord) -> None:
        """Compare a profile's feature names with the canonical list.

        Raises:
            FeatureMismatchError: In strict mode, if the name sets differ.
        """
        extra = sorted(set(profile.features) - self._bits.keys())
        missing = sorted(self._bits.keys() - set(profile.features))
        if not extra and not missing:
            return
        if self._strict:
            details = []
            if extra:
                details.append(f"unknown features {', '.join(extra)}")
            if missing:
                details.append(f"missing features {', '.join(missing)}")
            raise FeatureMismatchError(profile.key, "; ".join(details))
        if extra:
            _LOGGER.warning(
                "Profile '%s' declares unknown features %s, ignoring them",
                profile.key,
                ", ".join(extra),
            )

    def enabled(self, profile: ProfileRecord) -> list[str]:
        """Return the canonical names the profile turns on, in bit order.

        Names outside the canonical list are skipped. Call :meth:`check`
        first to reject or report them.
        """
        return [name for name in self._names if profile.features.get(name)]

    def pack(self, profile: ProfileRecord) -> int:
        """Return the profile's enabled features as a bit mask."""
        self.check(profile)
        mask = 0
        for name in self.enabled(profile):
            mask |= self._bits[name]
        return mask
