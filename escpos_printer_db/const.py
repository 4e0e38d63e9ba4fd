"""Constants for the ESC/POS printer capability database."""

from __future__ import annotations

from dataclasses import dataclass

# Literal used by the database for values that have not been measured
UNKNOWN_LITERAL = "Unknown"

# Code page tables cover the upper half of a single-byte encoding
CODE_PAGE_SIZE = 128
CODE_PAGE_SEGMENTS = 8

MM_PER_INCH = 25.4

# Device-internal ids are single bytes
MIN_KEY = 0
MAX_KEY = 255
MAX_U16 = 0xFFFF

# Constants for special profile/option values
PROFILE_AUTO = ""  # Auto-detect (default) profile
PROFILE_CUSTOM = "__custom__"  # Custom profile option

# Common fallback values (sorted for consistency)
COMMON_CODEPAGES = sorted(["CP437", "CP850", "CP852", "CP858", "CP1252", "ISO_8859-1"])
COMMON_LINE_WIDTHS = sorted([32, 42, 48, 56, 64, 72])
DEFAULT_CUT_MODES = ["none", "partial", "full"]  # Order matters: none first

FEATURE_PAPER_FULL_CUT = "paperFullCut"
FEATURE_PAPER_PART_CUT = "paperPartCut"

GENERATED_MODULE = "escpos_printer_db.generated"
GENERATED_HEADER = "# GENERATED by escpos_printer_db.codegen, do not edit."


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for a generation run."""

    strict_features: bool = True
    module_name: str = GENERATED_MODULE
    header: str = GENERATED_HEADER
