"""Printer profile types shared by generated and hand-built profiles."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import enum
from typing import Any, TypeVar

from .int_map import IntMap, OwnedIntMap

_F = TypeVar("_F", bound="FeatureSet")


class Color(enum.Enum):
    """An ink color supported by a printer profile."""

    BLACK = "black"
    RED = "red"
    ALTERNATE = "alternate"


@dataclass(frozen=True)
class FontInfo:
    """Information for a supported ESC/POS font."""

    # Maximum number of characters that fit on a line with this font
    columns: int


@dataclass(frozen=True)
class Width:
    """The supported print width for a printer profile."""

    mm: float
    px: int


@dataclass(frozen=True)
class Media:
    """Print media information for a printer profile."""

    dpi: int | None = None
    width: Width | None = None


class FeatureSet:
    """Base class for the generated ``Features`` flag set.

    Subclasses declare one ``is_<feature>()``/``with_<feature>()`` pair per
    feature and set ``_EMPTY`` to their zero flag value. The packed bits
    stay private so the layout can change between database versions.
    """

    __slots__ = ("_bits",)

    _EMPTY: Any = 0

    def __init__(self) -> None:
        object.__setattr__(self, "_bits", self._EMPTY)

    @classmethod
    def new(cls: type[_F]) -> _F:
        """Create a flag set with no features enabled."""
        return cls()

    @classmethod
    def _from_flags(cls: type[_F], flags: Any) -> _F:
        inst = cls()
        object.__setattr__(inst, "_bits", flags)
        return inst

    def _has(self, flag: Any) -> bool:
        return (self._bits & flag) == flag

    def _with(self: _F, flag: Any, on: bool) -> _F:
        bits = (self._bits | flag) if on else (self._bits & ~flag)
        return type(self)._from_flags(bits)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureSet):
            return NotImplemented
        return int(self._bits) == int(other._bits)

    def __hash__(self) -> int:
        return hash(int(self._bits))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._bits!r})"


@dataclass(frozen=True)
class Profile:
    """A profile with capability information for an ESC/POS printer."""

    name: str
    vendor: str
    features: FeatureSet = field(default_factory=FeatureSet)
    code_pages: IntMap[Any] = field(default_factory=IntMap.empty)
    colors: IntMap[Color] = field(default_factory=IntMap.empty)
    fonts: IntMap[FontInfo] = field(default_factory=IntMap.empty)
    media: Media = field(default_factory=Media)

    def __post_init__(self) -> None:
        for name in ("code_pages", "colors", "fonts"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    @classmethod
    def new(
        cls, name: str, vendor: str, features: FeatureSet | None = None
    ) -> Profile:
        """Create a profile with every field but ``name`` and ``vendor`` defaulted.

        Without ``features`` the profile gets an empty set of the bundled
        database's ``Features`` type, so its ``is_<feature>()`` accessors
        are available. A bare :class:`FeatureSet` has none of them.
        """
        if features is None:
            from .loader import get_database  # noqa: PLC0415

            features = get_database().Features.new()
        return cls(name=name, vendor=vendor, features=features)

    def with_features(self, features: FeatureSet) -> Profile:
        return replace(self, features=features)

    def with_code_pages(self, code_pages: IntMap[Any]) -> Profile:
        return replace(self, code_pages=code_pages)

    def with_colors(self, colors: IntMap[Color]) -> Profile:
        return replace(self, colors=colors)

    def with_fonts(self, fonts: IntMap[FontInfo]) -> Profile:
        return replace(self, fonts=fonts)

    def with_media(self, media: Media) -> Profile:
        return replace(self, media=media)


def _frozen(table: IntMap[Any]) -> IntMap[Any]:
    # Profiles never share mutable state with their builder
    if isinstance(table, OwnedIntMap):
        return table.as_int_map()
    return table
