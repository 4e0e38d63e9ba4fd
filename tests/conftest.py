from collections.abc import Generator
from functools import lru_cache
from typing import Any

import pytest

from escpos_printer_db.capabilities import loader
from escpos_printer_db.capabilities.loader import clear_capabilities_cache


def code_page_segments(start: int = 0x100) -> list[str]:
    """Eight printable 16-character segments, 128 characters in total."""
    return [
        "".join(chr(start + 16 * row + col) for col in range(16)) for row in range(8)
    ]


def make_document() -> dict[str, Any]:
    """Two encodings and one profile, built fresh for each caller."""
    return {
        "encodings": {
            "EncodingA": {
                "name": "Encoding A",
                "data": code_page_segments(),
                "notes": "First test encoding.",
                "python_encode": "cp437",
            },
            "EncodingB": {"name": "Encoding B"},
        },
        "profiles": {
            "test-printer": {
                "name": "Test Printer",
                "vendor": "Acme",
                "notes": "A printer used in tests.",
                "codePages": {"0": "EncodingA"},
                "colors": {"0": "black", "1": "red"},
                "fonts": {"0": {"name": "Font A", "columns": 42}, "1": {"columns": 56}},
                "features": {
                    "paperPartCut": False,
                    "cut": True,
                    "qrCode": False,
                    "paperFullCut": True,
                },
                "media": {"dpi": 203, "width": {"mm": 10.0, "pixels": "Unknown"}},
            }
        },
    }


@pytest.fixture
def document() -> dict[str, Any]:
    return make_document()


@pytest.fixture(autouse=True)
def reset_capabilities_cache() -> Generator[None, None, None]:
    clear_capabilities_cache()
    yield
    clear_capabilities_cache()


@pytest.fixture
def bundled_document(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Serve the test document in place of python-escpos's database."""
    doc = make_document()
    monkeypatch.setattr(loader, "_get_capabilities", lru_cache(maxsize=1)(lambda: doc))
    return doc
