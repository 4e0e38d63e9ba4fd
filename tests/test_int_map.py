"""Tests for IntMap and OwnedIntMap."""

import random

import pytest

from escpos_printer_db.capabilities.int_map import IntMap, OwnedIntMap


class TestIntMap:
    """Tests for the immutable map."""

    @pytest.mark.parametrize("seed", range(5))
    def test_lookup_random_keys(self, seed: int) -> None:
        rng = random.Random(seed)
        keys = sorted(rng.sample(range(256), rng.randint(1, 64)))
        imap = IntMap.from_entries((k, f"v{k}") for k in keys)
        for k in keys:
            assert imap.get(k) == f"v{k}"
        for k in set(range(256)) - set(keys):
            assert imap.get(k) is None

    def test_unsorted_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            IntMap.from_entries([(5, "a"), (3, "b"), (9, "c")])

    def test_duplicate_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            IntMap.from_entries([(5, "a"), (5, "b"), (9, "c")])

    def test_out_of_range_key_rejected(self) -> None:
        with pytest.raises(ValueError):
            IntMap.from_entries([(256, "a")])

    def test_empty_is_singleton(self) -> None:
        assert IntMap.from_entries([]) is IntMap.empty()
        assert len(IntMap.empty()) == 0
        assert IntMap.empty().get(0) is None

    def test_get_default(self) -> None:
        imap = IntMap.from_entries([(1, "a")])
        assert imap.get(2, "missing") == "missing"

    def test_get_non_int_key_returns_default(self) -> None:
        imap = IntMap.from_entries([(1, "a")])
        assert imap.get("1", "missing") == "missing"  # type: ignore[arg-type]
        assert imap.get(None) is None  # type: ignore[arg-type]
        with pytest.raises(KeyError):
            imap["1"]  # type: ignore[index]

    def test_iteration_is_ordered_and_restartable(self) -> None:
        imap = IntMap.from_entries([(0, "a"), (7, "b"), (200, "c")])
        first = list(imap.iter())
        assert first == [(0, "a"), (7, "b"), (200, "c")]
        assert list(imap) == first
        assert imap.keys() == [0, 7, 200]
        assert imap.values() == ["a", "b", "c"]

    def test_container_protocol(self) -> None:
        imap = IntMap.from_entries([(3, "x")])
        assert 3 in imap
        assert 4 not in imap
        assert "3" not in imap
        assert imap[3] == "x"
        with pytest.raises(KeyError):
            imap[4]

    def test_equality_and_hash(self) -> None:
        a = IntMap.from_entries([(1, "a"), (2, "b")])
        b = IntMap.from_entries([(1, "a"), (2, "b")])
        assert a == b
        assert hash(a) == hash(b)
        assert a != IntMap.from_entries([(1, "a")])

    def test_to_owned_is_independent(self) -> None:
        imap = IntMap.from_entries([(1, "a")])
        owned = imap.to_owned()
        owned.insert(2, "b")
        assert len(imap) == 1
        assert owned.get(2) == "b"


class TestOwnedIntMap:
    """Tests for the mutable map."""

    def test_insert_existing_key_returns_previous(self) -> None:
        owned = OwnedIntMap([(1, "a"), (2, "b")])
        assert owned.insert(1, "z") == "a"
        assert len(owned) == 2
        assert owned.get(1) == "z"

    def test_insert_new_key_keeps_order(self) -> None:
        owned = OwnedIntMap([(1, "a"), (9, "c")])
        assert owned.insert(5, "b") is None
        assert len(owned) == 3
        assert owned.keys() == [1, 5, 9]

    def test_construct_from_unordered_pairs(self) -> None:
        owned = OwnedIntMap([(9, "c"), (1, "a"), (5, "b")])
        assert list(owned) == [(1, "a"), (5, "b"), (9, "c")]

    def test_duplicate_pairs_last_write_wins(self) -> None:
        owned = OwnedIntMap([(1, "a"), (2, "b"), (1, "c")])
        assert list(owned) == [(1, "c"), (2, "b")]

    def test_extend_merges_and_sorts(self) -> None:
        owned = OwnedIntMap([(4, "d")])
        owned.extend([(2, "b"), (4, "x"), (0, "a")])
        assert list(owned) == [(0, "a"), (2, "b"), (4, "x")]

    def test_extend_rolls_back_on_failure(self) -> None:
        owned = OwnedIntMap([(1, "a")])

        def pairs():
            yield (2, "b")
            yield (3, "c")
            raise MemoryError

        with pytest.raises(MemoryError):
            owned.extend(pairs())
        assert list(owned) == [(1, "a")]

    def test_extend_rolls_back_on_bad_key(self) -> None:
        owned = OwnedIntMap([(1, "a")])
        with pytest.raises(ValueError):
            owned.extend([(2, "b"), (300, "c")])
        assert list(owned) == [(1, "a")]

    def test_as_int_map_snapshot(self) -> None:
        owned = OwnedIntMap([(1, "a")])
        snapshot = owned.as_int_map()
        owned.insert(2, "b")
        assert type(snapshot) is IntMap
        assert list(snapshot) == [(1, "a")]
        assert OwnedIntMap().as_int_map() is IntMap.empty()

    def test_reads_like_int_map(self) -> None:
        owned = OwnedIntMap([(3, "x")])
        assert isinstance(owned, IntMap)
        assert owned == IntMap.from_entries([(3, "x")])
        assert owned[3] == "x"

    def test_not_hashable(self) -> None:
        with pytest.raises(TypeError):
            hash(OwnedIntMap())
