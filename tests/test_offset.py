"""Tests for offset.py."""

from leveldata_translator.offset import Offset


class TestOffset:
    def test_apply(self):
        assert Offset(vertical=0.5, lane=3).apply(4.0, 2) == (4.5, 5)

    def test_default_is_identity(self):
        assert Offset().apply(1.25, 4) == (1.25, 4)

    def test_no_clamping(self):
        assert Offset(vertical=-2.0, lane=-5).apply(1.0, 2) == (-1.0, -3)

    def test_offsets_accumulate(self):
        offset = Offset(vertical=1.0, lane=1)
        once = offset.apply(2.0, 2)
        assert offset.apply(*once) == (4.0, 4)

    def test_apply_beat(self):
        assert Offset(vertical=0.25, lane=9).apply_beat(1.0) == 1.25
