"""Tests for slide_chain.py."""

import pytest

from leveldata_translator.errors import EntityReferenceError
from leveldata_translator.level import EntityIndex, LevelDataEntity
from leveldata_translator.offset import Offset
from leveldata_translator.slide_chain import SlideChainReconstructor

from factories import entity


def _reconstructor(*raws, offset=None, merge_unlinked=True):
    entities = [LevelDataEntity.from_raw(r) for r in raws]
    index = EntityIndex(list(enumerate(entities, start=1)))
    slides = SlideChainReconstructor(
        index, offset or Offset(), merge_unlinked=merge_unlinked
    )
    for position, e in enumerate(entities, start=1):
        slides.add(position, e)
    return slides


def _points(reconstructed):
    return [(p.beat, p.lane) for p in reconstructed.slide.connections]


class TestGrouping:
    def test_orders_by_base_beat(self):
        slides = _reconstructor(
            entity("SlideStartNote", beat=2.0, lane=1, name="s"),
            entity("SlideTickNote", beat=1.0, lane=2, first="s"),
            entity("SlideEndNote", beat=3.0, lane=3, first="s"),
        )
        (only,) = slides.build()
        assert only.group.key == "s"
        assert [p[0] for p in _points(only)] == [1.0, 2.0, 3.0]

    def test_offsets_applied_to_every_point(self):
        slides = _reconstructor(
            entity("SlideStartNote", beat=0.0, lane=1, name="s"),
            entity("SlideEndNote", beat=1.0, lane=4, first="s"),
            offset=Offset(vertical=0.5, lane=3),
        )
        (only,) = slides.build()
        assert _points(only) == [(0.5, 4), (1.5, 7)]

    def test_separate_gestures(self):
        slides = _reconstructor(
            entity("SlideStartNote", beat=0, lane=1, name="a"),
            entity("SlideStartNote", beat=0, lane=5, name="b"),
            entity("StraightSlideConnector", beat=0, lane=5, first="b"),
            entity("SlideEndNote", beat=2, lane=1, first="a"),
        )
        built = slides.build()
        assert [r.group.key for r in built] == ["a", "b"]
        assert [len(r.slide.connections) for r in built] == [2, 2]

    def test_ties_keep_input_order(self):
        slides = _reconstructor(
            entity("SlideStartNote", beat=1.0, lane=0, name="s"),
            entity("CurvedSlideConnector", beat=1.0, lane=1, first="s"),
            entity("SlideTickNote", beat=1.0, lane=2, first="s"),
        )
        (only,) = slides.build()
        assert [p[1] for p in _points(only)] == [0, 1, 2]

    def test_single_segment_group(self):
        slides = _reconstructor(entity("SlideStartNote", beat=4, lane=2, name="s"))
        (only,) = slides.build()
        assert _points(only) == [(4.0, 2)]

    def test_unresolved_first_reference(self):
        e = LevelDataEntity.from_raw(entity("SlideEndNote", beat=1, first="gone"))
        slides = SlideChainReconstructor(EntityIndex([]), Offset())
        with pytest.raises(EntityReferenceError, match="gone"):
            slides.add(1, e)
        assert slides.groups == []


class TestUnlinkedSegments:
    def test_merged_by_default(self):
        slides = _reconstructor(
            entity("StraightSlideConnector", beat=3, lane=1),
            entity("CurvedSlideConnector", beat=1, lane=2),
        )
        (only,) = slides.build()
        assert only.group.key == ""
        assert [p[0] for p in _points(only)] == [1.0, 3.0]

    def test_add_reports_unlinked(self):
        slides = _reconstructor()
        e = LevelDataEntity.from_raw(entity("StraightSlideConnector", beat=3))
        assert slides.add(1, e) == ("", True)

    def test_isolated_with_minted_keys(self):
        slides = _reconstructor(
            entity("StraightSlideConnector", beat=3, lane=1),
            entity("CurvedSlideConnector", beat=1, lane=2),
            merge_unlinked=False,
        )
        built = slides.build()
        assert [r.group.key for r in built] == ["~1", "~2"]
        assert [_points(r) for r in built] == [[(3.0, 1)], [(1.0, 2)]]

    def test_minted_keys_avoid_entity_names(self):
        slides = _reconstructor(
            entity("SlideStartNote", beat=0, name="~1"),
            entity("StraightSlideConnector", beat=1),
            merge_unlinked=False,
        )
        assert [g.key for g in slides.groups] == ["~1", "~2"]
