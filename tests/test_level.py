"""Tests for level.py."""

import dataclasses

import pytest

from leveldata_translator.errors import MalformedEntityError
from leveldata_translator.level import EntityIndex, LevelDataEntity

from factories import entity


class TestLevelDataEntity:
    def test_from_raw(self):
        e = LevelDataEntity.from_raw(entity("TapNote", beat=1, lane=2, name="n1"))
        assert e.archetype == "TapNote"
        assert e.name == "n1"
        assert len(e.data) == 2

    def test_missing_archetype_is_empty(self):
        assert LevelDataEntity.from_raw({"data": []}).archetype == ""

    def test_not_an_object(self):
        with pytest.raises(MalformedEntityError):
            LevelDataEntity.from_raw(["TapNote"])

    def test_frozen(self):
        e = LevelDataEntity.from_raw(entity("TapNote"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            e.name = "other"


class TestEntityIndex:
    def _index(self, *raws):
        return EntityIndex(
            [(i, LevelDataEntity.from_raw(r)) for i, r in enumerate(raws, start=1)]
        )

    def test_lookup(self):
        index = self._index(entity("TapNote", name="a"), entity("FlickNote", name="b"))
        assert index.get("b").archetype == "FlickNote"
        assert "a" in index
        assert len(index) == 2

    def test_unresolved_is_none(self):
        index = self._index(entity("TapNote", name="a"))
        assert index.get("zzz") is None
        assert index.get("") is None

    def test_unnamed_entities_are_not_indexed(self):
        assert len(self._index(entity("TapNote"), entity("Stage"))) == 0

    def test_duplicate_names_keep_first(self):
        index = self._index(
            entity("TapNote", name="a"), entity("FlickNote", name="a")
        )
        assert index.get("a").archetype == "TapNote"
        assert index.duplicates == [(2, "a")]
