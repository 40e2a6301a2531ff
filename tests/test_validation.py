"""Tests for table_grid_detector.validation and config thresholds."""

import pytest

from table_grid_detector.config import (
    ConfigValidationError,
    DetectorConfig,
    TableDetectMode,
    TableThresholds,
)
from table_grid_detector.validation import (
    RejectReason,
    count_non_empty_cells,
    is_good_table,
    validate_grid,
)


class TestValidateGrid:
    def test_accepts_full_grid(self):
        assert validate_grid([["a", "b"], ["c", "d"]]) is None

    def test_rejects_single_row(self):
        assert validate_grid([["a", "b", "c", "d"]]) is RejectReason.INSUFFICIENT_ROWS

    def test_rejects_empty(self):
        assert validate_grid([]) is RejectReason.INSUFFICIENT_ROWS

    def test_rejects_single_column(self):
        assert validate_grid([["a"], ["b"], ["c"], ["d"]]) is RejectReason.INSUFFICIENT_COLUMNS

    def test_rejects_three_cells(self):
        assert validate_grid([["a", "b"], ["c", ""]]) is RejectReason.INSUFFICIENT_CONTENT

    def test_whitespace_cells_are_empty(self):
        assert count_non_empty_cells([["a", " "], ["\t", "b"]]) == 2

    def test_custom_thresholds(self):
        t = TableThresholds(min_rows=3, min_columns=2, min_non_empty_cells=2)
        assert validate_grid([["a", "b"], ["c", "d"]], t) is RejectReason.INSUFFICIENT_ROWS
        assert is_good_table([["a", "b"], ["c", ""], ["", ""]], t)


class TestDetectorConfig:
    def test_defaults(self):
        cfg = DetectorConfig()
        assert cfg.tolerance_scale(TableDetectMode.FAST) == 0.65
        assert cfg.tolerance_scale("strict") == 0.45
        assert cfg.kmeans_max_iter == 20
        assert cfg.thresholds == TableThresholds(2, 2, 4)

    def test_mode_parse(self):
        assert TableDetectMode.parse(" Strict ") is TableDetectMode.STRICT
        with pytest.raises(ConfigValidationError):
            TableDetectMode.parse("slow")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"fast_tolerance_scale": 0.0},
            {"kmeans_max_iter": 0},
            {"min_row_tolerance": -1.0},
            {"thresholds": TableThresholds(min_rows=0)},
        ],
    )
    def test_validate_rejects_bad_values(self, kwargs):
        with pytest.raises(ConfigValidationError):
            DetectorConfig(**kwargs).validate()

    def test_validate_returns_self(self):
        cfg = DetectorConfig()
        assert cfg.validate() is cfg
