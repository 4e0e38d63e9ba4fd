"""Exceptions raised while building the capability database."""

from __future__ import annotations


class CapabilitiesError(Exception):
    """Base error for the capability database."""


class SchemaError(CapabilitiesError):
    """The source document is malformed.

    Carries the kind of entity ("encoding" or "profile") and its database
    key so the offending record can be found.
    """

    def __init__(self, kind: str, key: str, message: str) -> None:
        super().__init__(f"{kind} '{key}': {message}")
        self.kind = kind
        self.key = key
        self.message = message


class MediaResolutionError(SchemaError):
    """A media width cannot be completed from the known values."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__("profile", key, message)


class FeatureMismatchError(SchemaError):
    """A profile's feature names differ from the canonical feature list."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__("profile", key, message)
