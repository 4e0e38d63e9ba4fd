"""Emit the generated capability module as Python source.

The output only contains literals and constructor calls over the runtime
types in :mod:`escpos_printer_db.capabilities`, so importing it does no
parsing. Everything is emitted in key order and the output is byte-identical
for identical input.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from ..capabilities.profile import Media
from ..const import CODE_PAGE_SEGMENTS, CODE_PAGE_SIZE, GeneratorConfig
from ..exceptions import SchemaError
from .features import FeatureRegistry
from ..naming import is_identifier, shouty_snake, snake
from .schema import Database, EncodingRecord, ProfileRecord
from .units import f32

_LOGGER = logging.getLogger(__name__)

_INDENT = "    "
_RESERVED = {"ALL_PROFILES", "Encoding", "Features", "encoding_data"}


def format_f32(value: float) -> str:
    """Shortest decimal that reads back as the same single-precision value."""
    target = f32(value)
    for digits in range(1, 10):
        text = f"{target:.{digits}g}"
        if f32(float(text)) == target:
            break
    return repr(float(text))


def _identifiers(
    kind: str, keys: list[str], convert: Callable[[str], str]
) -> dict[str, str]:
    """Map each key to a unique identifier, rejecting unusable names."""
    out: dict[str, str] = {}
    seen: dict[str, str] = {}
    for key in keys:
        ident = convert(key)
        if not is_identifier(ident) or ident in _RESERVED:
            raise SchemaError(kind, key, f"'{ident}' is not a usable identifier")
        if ident in seen:
            raise SchemaError(
                kind, key, f"identifier '{ident}' already used by '{seen[ident]}'"
            )
        seen[ident] = key
        out[key] = ident
    return out


def _comment_block(text: str) -> list[str]:
    return [f"#: {line}".rstrip() for line in text.splitlines()]


class CodeEmitter:
    """Render a resolved database into the source of one module."""

    def __init__(
        self,
        db: Database,
        registry: FeatureRegistry,
        media: dict[str, Media],
        config: GeneratorConfig | None = None,
    ) -> None:
        self._db = db
        self._registry = registry
        self._media = media
        self._config = config or GeneratorConfig()
        self._encodings = _identifiers("encoding", list(db.encodings), shouty_snake)
        self._profiles = _identifiers("profile", list(db.profiles), shouty_snake)
        self._flags = _identifiers("feature", registry.names, shouty_snake)
        self._methods = _identifiers("feature", registry.names, snake)

    def emit(self) -> str:
        lines: list[str] = []
        lines.extend(self._header())
        lines.extend(self._encoding_enum())
        lines.extend(self._encoding_tables())
        lines.extend(self._features())
        for record in self._db.profiles.values():
            lines.extend(self._profile(record))
        lines.extend(self._profile_table())
        _LOGGER.debug(
            "Emitted %d encodings, %d features and %d profiles",
            len(self._encodings),
            len(self._flags),
            len(self._profiles),
        )
        return "\n".join(lines) + "\n"

    def _header(self) -> list[str]:
        exported = sorted(
            ["ALL_PROFILES", "Encoding", "Features", "encoding_data"]
            + list(self._profiles.values())
        )
        lines = [
            self._config.header,
            '"""ESC/POS printer capabilities generated from the printer database."""',
            "",
            "from __future__ import annotations",
            "",
            "import enum",
            "from types import MappingProxyType",
            "",
            "from escpos_printer_db.capabilities.int_map import IntMap",
            "from escpos_printer_db.capabilities.profile import (",
            f"{_INDENT}Color,",
            f"{_INDENT}FeatureSet,",
            f"{_INDENT}FontInfo,",
            f"{_INDENT}Media,",
            f"{_INDENT}Profile,",
            f"{_INDENT}Width,",
            ")",
            "",
            "__all__ = [",
        ]
        lines.extend(f"{_INDENT}{name!r}," for name in exported)
        lines.extend(["]", "", ""])
        return lines

    def _encoding_enum(self) -> list[str]:
        lines = [
            "class Encoding(enum.Enum):",
            f'{_INDENT}"""A code page supported by ESC/POS printers."""',
            "",
        ]
        for key, ident in self._encodings.items():
            lines.append(f"{_INDENT}{ident} = {key!r}")
        if self._encodings:
            lines.append("")
        lines.extend(
            [
                f"{_INDENT}@property",
                f"{_INDENT}def doc(self) -> str:",
                f'{_INDENT * 2}"""The name of this encoding, followed by any notes."""',
                f"{_INDENT * 2}return _ENCODING_DOCS[self]",
                "",
                f"{_INDENT}def data(self) -> str | None:",
                f'{_INDENT * 2}"""This encoding\'s 7-bit code page, if known."""',
                f"{_INDENT * 2}return _ENCODING_DATA.get(self)",
                "",
                f"{_INDENT}def codec(self) -> str | None:",
                f'{_INDENT * 2}"""The Python codec for this encoding, if known."""',
                f"{_INDENT * 2}return _ENCODING_CODECS.get(self)",
                "",
                "",
            ]
        )
        return lines

    def _encoding_tables(self) -> list[str]:
        docs = ["_ENCODING_DOCS: dict[Encoding, str] = {"]
        data = ["_ENCODING_DATA: dict[Encoding, str] = {"]
        codecs = ["_ENCODING_CODECS: dict[Encoding, str] = {"]
        for key, record in self._db.encodings.items():
            member = f"Encoding.{self._encodings[key]}"
            docs.append(f"{_INDENT}{member}: {self._encoding_doc(record)!r},")
            if record.data is not None:
                data.append(f"{_INDENT}{member}: (")
                data.extend(self._code_page(record.data))
                data.append(f"{_INDENT}),")
            if record.codec:
                codecs.append(f"{_INDENT}{member}: {record.codec!r},")
        lines: list[str] = []
        for block in (docs, data, codecs):
            lines.extend(block)
            lines.extend(["}", ""])
        lines.extend(
            [
                "",
                "def encoding_data(encoding: Encoding) -> str | None:",
                f'{_INDENT}"""Return the 7-bit code page of ``encoding``, if known."""',
                f"{_INDENT}return _ENCODING_DATA.get(encoding)",
                "",
                "",
            ]
        )
        return lines

    @staticmethod
    def _encoding_doc(record: EncodingRecord) -> str:
        if record.notes:
            return f"{record.name}\n\n{record.notes}"
        return record.name

    @staticmethod
    def _code_page(table: str) -> list[str]:
        step = CODE_PAGE_SIZE // CODE_PAGE_SEGMENTS
        return [
            f"{_INDENT * 2}{table[i:i + step]!r}" for i in range(0, len(table), step)
        ]

    def _features(self) -> list[str]:
        lines = ["class _FeatureFlag(enum.IntFlag):"]
        if not self._flags:
            lines.append(f"{_INDENT}pass")
        for i, flag in enumerate(self._flags.values()):
            lines.append(f"{_INDENT}{flag} = 1 << {i}")
        lines.extend(
            [
                "",
                "",
                "class Features(FeatureSet):",
                f'{_INDENT}"""The ESC/POS features supported by a printer profile."""',
                "",
                f"{_INDENT}__slots__ = ()",
                "",
            ]
        )
        # A flag class with no members cannot be called
        empty = "_FeatureFlag(0)" if self._flags else "0"
        lines.append(f"{_INDENT}_EMPTY = {empty}")
        for name in self._registry.names:
            flag = f"_FeatureFlag.{self._flags[name]}"
            method = self._methods[name]
            lines.extend(
                [
                    "",
                    f"{_INDENT}def is_{method}(self) -> bool:",
                    f'{_INDENT * 2}"""Check if the `{name}` feature is supported."""',
                    f"{_INDENT * 2}return self._has({flag})",
                    "",
                    f"{_INDENT}def with_{method}(self, on: bool) -> Features:",
                    f'{_INDENT * 2}"""Set the `{name}` feature to be on or off."""',
                    f"{_INDENT * 2}return self._with({flag}, on)",
                ]
            )
        lines.extend(["", ""])
        return lines

    def _profile(self, record: ProfileRecord) -> list[str]:
        lines = _comment_block(f"{record.name} profile")
        if record.notes:
            lines.append("#:")
            lines.extend(_comment_block(record.notes))
        lines.extend(
            [
                f"{self._profiles[record.key]} = Profile(",
                f"{_INDENT}name={record.name!r},",
                f"{_INDENT}vendor={record.vendor!r},",
                f"{_INDENT}features={self._feature_value(record)},",
            ]
        )
        lines.extend(
            self._table(
                "code_pages",
                {k: f"Encoding.{self._encodings[v]}" for k, v in record.code_pages.items()},
            )
        )
        lines.extend(
            self._table("colors", {k: f"Color.{v.name}" for k, v in record.colors.items()})
        )
        lines.extend(
            self._table(
                "fonts", {k: f"FontInfo(columns={v})" for k, v in record.fonts.items()}
            )
        )
        lines.append(f"{_INDENT}media={self._media_value(self._media[record.key])},")
        lines.extend([")", "", ""])
        return lines

    def _feature_value(self, record: ProfileRecord) -> str:
        enabled = self._registry.enabled(record)
        if not enabled:
            return "Features()"
        flags = " | ".join(f"_FeatureFlag.{self._flags[name]}" for name in enabled)
        return f"Features._from_flags({flags})"

    @staticmethod
    def _table(field_name: str, entries: dict[int, str]) -> list[str]:
        if not entries:
            return [f"{_INDENT}{field_name}=IntMap.empty(),"]
        lines = [f"{_INDENT}{field_name}=IntMap.from_entries(("]
        lines.extend(f"{_INDENT * 2}({k}, {v})," for k, v in sorted(entries.items()))
        lines.append(f"{_INDENT})),")
        return lines

    @staticmethod
    def _media_value(media: Media) -> str:
        width = "None"
        if media.width is not None:
            width = f"Width(mm={format_f32(media.width.mm)}, px={media.width.px})"
        return f"Media(dpi={media.dpi!r}, width={width})"

    def _profile_table(self) -> list[str]:
        lines = [
            "#: Every profile in the database, by name.",
            "ALL_PROFILES: MappingProxyType[str, Profile] = MappingProxyType(",
            f"{_INDENT}{{",
        ]
        for key, ident in self._profiles.items():
            lines.append(f"{_INDENT * 2}{key!r}: {ident},")
        lines.extend([f"{_INDENT}}}", ")"])
        return lines
