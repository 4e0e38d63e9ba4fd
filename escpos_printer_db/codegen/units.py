"""Complete a profile's print width from its known measurements.

A width needs both millimeters and pixels. When the database gives only one
of them, the other is derived through the printer's resolution. Arithmetic is
carried out in IEEE single precision with the pixel count truncated, which is
what existing consumers of the generated data expect.
"""

from __future__ import annotations

import logging
import struct

from ..capabilities.profile import Media, Width
from ..const import MAX_U16, MM_PER_INCH
from ..exceptions import MediaResolutionError
from .schema import ProfileRecord, known

_LOGGER = logging.getLogger(__name__)

_F32 = struct.Struct("<f")


def f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    return _F32.unpack(_F32.pack(value))[0]  # type: ignore[no-any-return]


def resolve_width(
    mm: float | None,
    px: int | None,
    dpi: int | None,
    *,
    key: str = "",
) -> tuple[float, int] | None:
    """Return the ``(mm, px)`` width, or None when neither value is known.

    Both known values are returned as given, without checking them against
    each other.

    Raises:
        MediaResolutionError: If exactly one of ``mm``/``px`` is known and
            ``dpi`` is not, or if the width cannot be expressed in 0..65535
            pixels.
    """
    if mm is not None and px is not None:
        return f32(mm), px
    if mm is None and px is None:
        return None
    if dpi is None:
        missing = "pixels" if px is None else "mm"
        raise MediaResolutionError(
            key, f"cannot derive width {missing} without a known dpi"
        )
    if dpi <= 0:
        raise MediaResolutionError(key, f"dpi must be positive, got {dpi}")

    if px is None:
        mm = f32(mm)  # type: ignore[arg-type]
        dots = f32(mm * f32(dpi))
        px = int(f32(dots / f32(MM_PER_INCH)))
        if not 0 <= px <= MAX_U16:
            raise MediaResolutionError(
                key, f"width of {mm} mm is {px} pixels, outside 0..{MAX_U16}"
            )
        return mm, px

    dots_per_mm = f32(f32(dpi) / f32(MM_PER_INCH))
    return f32(f32(px) / dots_per_mm), px


def resolve_media(profile: ProfileRecord) -> Media:
    """Resolve a loaded profile's media information."""
    record = profile.media
    dpi = known(record.dpi)
    width = resolve_width(
        known(record.width_mm), known(record.width_px), dpi, key=profile.key
    )
    if width is None:
        _LOGGER.debug("Profile '%s' has no known print width", profile.key)
        return Media(dpi=dpi, width=None)
    return Media(dpi=dpi, width=Width(mm=width[0], px=width[1]))
