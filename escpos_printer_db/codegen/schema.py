"""Load and validate the raw printer database.

The database is a JSON-style document with two top-level mappings,
``encodings`` and ``profiles``. It is validated with voluptuous and turned
into a small intermediate model ordered by key, so that everything derived
from it is reproducible for identical input.

Numeric media fields are tri-state: the literal ``"Unknown"`` means the
value was never measured, a number is a known value and a missing key means
the field is absent altogether.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import enum
import logging
import math
from typing import Any

import voluptuous as vol

from ..capabilities.profile import Color
from ..const import CODE_PAGE_SIZE, MAX_KEY, MAX_U16, MIN_KEY, UNKNOWN_LITERAL
from ..exceptions import SchemaError

_LOGGER = logging.getLogger(__name__)


class Unknown(enum.Enum):
    """Marker for a value the database explicitly lists as unknown."""

    UNKNOWN = UNKNOWN_LITERAL

    def __repr__(self) -> str:
        return "UNKNOWN"


UNKNOWN = Unknown.UNKNOWN

# A tri-state field: None (absent), UNKNOWN, or the value
MaybeInt = int | Unknown | None
MaybeFloat = float | Unknown | None


def known(value: Any) -> Any:
    """Collapse a tri-state value to the value, or None."""
    if value is None or value is UNKNOWN:
        return None
    return value


def _tristate(parse: Any) -> Any:
    def validator(value: Any) -> Any:
        if value == UNKNOWN_LITERAL:
            return UNKNOWN
        return parse(value)

    return validator


def _u16(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"expected an integer, got {value!r}")
    if not 0 <= value <= MAX_U16:
        raise vol.Invalid(f"{value} is outside 0..{MAX_U16}")
    return value


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise vol.Invalid(f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise vol.Invalid(f"expected a finite number, got {value!r}")
    return float(value)


def _byte_key(value: Any) -> int:
    # JSON object keys arrive as strings
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"expected a numeric id, got {value!r}")
    if not MIN_KEY <= value <= MAX_KEY:
        raise vol.Invalid(f"id {value} is outside {MIN_KEY}..{MAX_KEY}")
    return value


def _id_map(value: Any) -> vol.Schema:
    return vol.Schema({_byte_key: value})


def _code_page_table(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(s, str) for s in value):
        raise vol.Invalid("expected a list of strings")
    table = "".join(value)
    if len(table) != CODE_PAGE_SIZE:
        raise vol.Invalid(
            f"code page has {len(table)} characters, expected {CODE_PAGE_SIZE}"
        )
    return table


_FEATURE_NAME = vol.Match(r"^[A-Za-z][A-Za-z0-9_]*$")

ENCODING_SCHEMA = vol.Schema(
    {
        vol.Required("name"): str,
        vol.Optional("data"): _code_page_table,
        vol.Optional("notes"): vol.Any(None, str),
        vol.Optional("python_encode"): vol.Any(None, str),
        vol.Optional("iconv"): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)

FONT_SCHEMA = vol.Schema(
    {
        vol.Required("columns"): vol.All(int, vol.Range(min=0, max=MAX_KEY)),
        vol.Optional("name"): str,
    },
    extra=vol.ALLOW_EXTRA,
)

MEDIA_SCHEMA = vol.Schema(
    {
        vol.Optional("dpi"): _tristate(vol.All(_u16, vol.Range(min=1))),
        vol.Optional("width", default=dict): {
            vol.Optional("mm"): _tristate(vol.All(_number, vol.Range(min=0))),
            vol.Optional("pixels"): _tristate(_u16),
        },
    },
    extra=vol.ALLOW_EXTRA,
)

PROFILE_SCHEMA = vol.Schema(
    {
        vol.Required("name"): str,
        vol.Optional("vendor", default=""): str,
        vol.Optional("notes", default=""): vol.Any(None, str),
        vol.Optional("codePages", default=dict): _id_map(str),
        vol.Optional("colors", default=dict): _id_map(vol.In([c.value for c in Color])),
        vol.Optional("fonts", default=dict): _id_map(FONT_SCHEMA),
        vol.Optional("features", default=dict): vol.Schema({_FEATURE_NAME: bool}),
        vol.Optional("media", default=dict): MEDIA_SCHEMA,
    },
    extra=vol.ALLOW_EXTRA,
)

DATABASE_SCHEMA = vol.Schema(
    {
        vol.Required("encodings"): {str: dict},
        vol.Required("profiles"): {str: dict},
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass(frozen=True)
class EncodingRecord:
    """An encoding as read from the database."""

    key: str
    name: str
    data: str | None = None
    notes: str | None = None
    codec: str | None = None


@dataclass(frozen=True)
class MediaRecord:
    """Unresolved media information."""

    dpi: MaybeInt = None
    width_mm: MaybeFloat = None
    width_px: MaybeInt = None


@dataclass(frozen=True)
class ProfileRecord:
    """A profile as read from the database, tables ordered by id."""

    key: str
    name: str
    vendor: str
    notes: str
    code_pages: dict[int, str] = field(default_factory=dict)
    colors: dict[int, Color] = field(default_factory=dict)
    fonts: dict[int, int] = field(default_factory=dict)
    features: dict[str, bool] = field(default_factory=dict)
    media: MediaRecord = field(default_factory=MediaRecord)


@dataclass(frozen=True)
class Database:
    """Intermediate model for one generation run."""

    encodings: dict[str, EncodingRecord]
    profiles: dict[str, ProfileRecord]


def _validate(schema: vol.Schema, kind: str, key: str, value: Any) -> Any:
    try:
        return schema(value)
    except vol.Invalid as err:
        raise SchemaError(kind, key, str(err)) from err


def load_encoding(key: str, raw: Mapping[str, Any]) -> EncodingRecord:
    """Validate one encoding entry."""
    data = _validate(ENCODING_SCHEMA, "encoding", key, dict(raw))
    return EncodingRecord(
        key=key,
        name=data["name"],
        data=data.get("data"),
        notes=data.get("notes"),
        codec=data.get("python_encode"),
    )


def load_profile(key: str, raw: Mapping[str, Any]) -> ProfileRecord:
    """Validate one profile entry."""
    data = _validate(PROFILE_SCHEMA, "profile", key, dict(raw))
    media = data["media"]
    width = media["width"]
    return ProfileRecord(
        key=key,
        name=data["name"],
        vendor=data["vendor"],
        notes=data["notes"] or "",
        code_pages=dict(sorted(data["codePages"].items())),
        colors={k: Color(v) for k, v in sorted(data["colors"].items())},
        fonts={k: v["columns"] for k, v in sorted(data["fonts"].items())},
        features=dict(sorted(data["features"].items())),
        media=MediaRecord(
            dpi=media.get("dpi"),
            width_mm=width.get("mm"),
            width_px=width.get("pixels"),
        ),
    )


def load_database(document: Mapping[str, Any]) -> Database:
    """Validate ``document`` and build the intermediate model.

    Raises:
        SchemaError: If any entry is malformed, naming the entry.
    """
    try:
        top = DATABASE_SCHEMA(dict(document))
    except vol.Invalid as err:
        raise SchemaError("database", "", str(err)) from err

    encodings = {
        key: load_encoding(key, raw) for key, raw in sorted(top["encodings"].items())
    }
    profiles = {
        key: load_profile(key, raw) for key, raw in sorted(top["profiles"].items())
    }

    for profile in profiles.values():
        for page_id, page in profile.code_pages.items():
            if page not in encodings:
                raise SchemaError(
                    "profile",
                    profile.key,
                    f"code page {page_id} refers to unknown encoding '{page}'",
                )

    _LOGGER.debug(
        "Loaded %d encodings and %d profiles", len(encodings), len(profiles)
    )
    return Database(encodings=encodings, profiles=profiles)
