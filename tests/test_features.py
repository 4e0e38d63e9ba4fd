"""Tests for the feature registry."""

from typing import Any

import pytest

from escpos_printer_db.codegen.features import FeatureRegistry
from escpos_printer_db.codegen.schema import load_database
from escpos_printer_db.exceptions import FeatureMismatchError


def _with_second_profile(document: dict[str, Any], features: dict[str, bool]) -> Any:
    second = dict(document["profiles"]["test-printer"], features=features)
    document["profiles"]["z-printer"] = second
    return load_database(document)


class TestFeatureRegistry:
    """Tests for FeatureRegistry."""

    def test_bits_follow_canonical_order(self, document: dict[str, Any]) -> None:
        registry = FeatureRegistry.from_database(load_database(document))
        assert registry.names == ["cut", "paperFullCut", "paperPartCut", "qrCode"]
        assert registry.bit("cut") == 1
        assert registry.bit("qrCode") == 8

    def test_pack(self, document: dict[str, Any]) -> None:
        db = load_database(document)
        registry = FeatureRegistry.from_database(db)
        # cut and paperFullCut
        assert registry.pack(db.profiles["test-printer"]) == 0b0011

    def test_other_profile_any_order(self, document: dict[str, Any]) -> None:
        db = _with_second_profile(
            document,
            {"qrCode": True, "paperPartCut": True, "paperFullCut": False, "cut": False},
        )
        registry = FeatureRegistry.from_database(db)
        assert registry.pack(db.profiles["z-printer"]) == 0b1100

    def test_extra_feature_rejected(self, document: dict[str, Any]) -> None:
        features = dict(document["profiles"]["test-printer"]["features"], buzzer=True)
        db = _with_second_profile(document, features)
        registry = FeatureRegistry.from_database(db)
        with pytest.raises(FeatureMismatchError, match="buzzer"):
            registry.check(db.profiles["z-printer"])

    def test_missing_feature_rejected(self, document: dict[str, Any]) -> None:
        db = _with_second_profile(document, {"cut": True})
        registry = FeatureRegistry.from_database(db)
        with pytest.raises(FeatureMismatchError, match="missing"):
            registry.pack(db.profiles["z-printer"])

    def test_extra_feature_ignored_when_lenient(
        self, document: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        features = dict(document["profiles"]["test-printer"]["features"], buzzer=True)
        db = _with_second_profile(document, features)
        registry = FeatureRegistry.from_database(db, strict=False)
        assert registry.pack(db.profiles["z-printer"]) == 0b0011
        assert "buzzer" in caplog.text

    def test_empty_database(self) -> None:
        registry = FeatureRegistry.from_database(
            load_database({"encodings": {}, "profiles": {}})
        )
        assert registry.names == []
