"""Tests for exporter.py."""

import io
import json

from leveldata_translator.exporter import export, to_dicts
from leveldata_translator.notes import Bpm, Passthrough, Single, Slide, SlidePoint


class TestExport:
    def test_drops_absent_optionals(self):
        notes = [
            Single(beat=1.0, lane=2),
            Passthrough(type="Ignored", beat=0.0, lane=0),
        ]
        assert to_dicts(notes) == [
            {"type": "Single", "beat": 1.0, "lane": 2},
            {"type": "Ignored", "beat": 0.0, "lane": 0},
        ]

    def test_slide_connections(self):
        slide = Slide(connections=[SlidePoint(beat=1.0, lane=1), SlidePoint(beat=2.0, lane=2)])
        assert to_dicts([slide]) == [
            {
                "type": "Slide",
                "connections": [{"beat": 1.0, "lane": 1}, {"beat": 2.0, "lane": 2}],
            }
        ]

    def test_path(self, tmp_path):
        out = tmp_path / "nested" / "chart.json"
        export(out, [Bpm(bpm=120.0, beat=0.0)])
        text = out.read_text(encoding="utf-8")
        assert "\n    " in text
        assert json.loads(text) == [{"type": "BPM", "bpm": 120.0, "beat": 0.0}]

    def test_minified_string_stream(self):
        buf = io.StringIO()
        export(buf, [Single(beat=1.0, lane=2, flick=True)], minified=True)
        assert "\n" not in buf.getvalue()
        assert json.loads(buf.getvalue())[0]["flick"] is True

    def test_single_precision(self):
        buf = io.BytesIO()
        export(buf, [Single(beat=-3.200000047683716, lane=1)], single_precision=True)
        assert json.loads(buf.getvalue().decode("utf-8"))[0]["beat"] == -3.2
