"""Tests for table_grid_detector.parser — hOCR and JSON adapters."""

import json

import pytest

from table_grid_detector.parser import load_observations_json, parse_hocr_words
from table_grid_detector.structures import parse_bbox

HOCR = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
 <body>
  <div class="ocr_page" id="page_1" title="image &quot;scan.png&quot;; bbox 0 0 400 200; ppageno 0">
   <span class="ocr_line" id="line_1_1" title="bbox 10 10 390 30">
    <span class="ocrx_word" id="word_1_1" title="bbox 10 10 60 30; x_wconf 95">Item</span>
    <span class="ocrx_word" id="word_1_2" title="bbox 200 10 240 30; x_wconf 95">Qty</span>
    <span class="ocrx_word" id="word_1_3" title="bbox 330 10 390 30; x_wconf 95"> </span>
   </span>
   <span class="ocr_line" id="line_1_2" title="bbox 10 50 390 70">
    <span class="ocrx_word" id="word_1_4" title="bbox 10 50 60 70; x_wconf 91">Tea</span>
    <span class="ocrx_word" id="word_1_5" title="bbox 200 50 215 70; x_wconf 90">3</span>
   </span>
  </div>
 </body>
</html>
"""


@pytest.fixture
def hocr_file(tmp_path):
    path = tmp_path / "scan.hocr"
    path.write_text(HOCR, encoding="utf-8")
    return str(path)


class TestParseBbox:
    def test_parses_title(self):
        assert parse_bbox("bbox 1 2 3 4; x_wconf 9") == (1, 2, 3, 4)

    def test_missing(self):
        assert parse_bbox("") is None
        assert parse_bbox("baseline 0 0") is None


class TestParseHocrWords:
    def test_words_and_page_size(self, hocr_file):
        words, size = parse_hocr_words(hocr_file)
        assert size == (400, 200)
        assert [w.text for w in words] == ["Item", "Qty", "Tea", "3"]
        item = words[0]
        assert (item.x, item.y, item.width, item.height) == (10.0, 10.0, 50.0, 20.0)

    def test_table_bbox_crop(self, hocr_file):
        words, _ = parse_hocr_words(hocr_file, table_bbox=(0, 40, 400, 200))
        assert [w.text for w in words] == ["Tea", "3"]

    def test_no_page(self, tmp_path):
        path = tmp_path / "empty.hocr"
        path.write_text("<html><body></body></html>", encoding="utf-8")
        assert parse_hocr_words(str(path)) == ([], None)


class TestLoadObservationsJson:
    def test_reads_schema(self, tmp_path):
        path = tmp_path / "obs.json"
        path.write_text(json.dumps({
            "image_size": [640, 480],
            "observations": [{"text": "A", "bbox": [0.1, 0.8, 0.05, 0.02]}],
        }), encoding="utf-8")
        obs, size = load_observations_json(str(path))
        assert size == (640.0, 480.0)
        assert obs[0].text == "A"
        assert (obs[0].min_x, obs[0].min_y, obs[0].width, obs[0].height) == (0.1, 0.8, 0.05, 0.02)

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"observations": []},
            {"image_size": [1, 2], "observations": [{"text": "x", "bbox": [0, 0, 1]}]},
        ],
    )
    def test_bad_schema_raises(self, tmp_path, payload):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(ValueError):
            load_observations_json(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_observations_json(str(tmp_path / "nope.json"))
