from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional, Sequence

from .config import TableThresholds

log = logging.getLogger(__name__)


class RejectReason(Enum):
    INPUT_EMPTY = "input_empty"
    INSUFFICIENT_ROWS = "insufficient_rows"
    INSUFFICIENT_COLUMNS = "insufficient_columns"
    INSUFFICIENT_CONTENT = "insufficient_content"


def count_non_empty_cells(grid: Sequence[Sequence[str]]) -> int:
    return sum(1 for row in grid for cell in row if cell.strip())


def validate_grid(grid: List[List[str]],
                  thresholds: Optional[TableThresholds] = None) -> Optional[RejectReason]:
    """Devuelve el motivo de rechazo, o None si la rejilla se acepta como tabla."""
    t = thresholds or TableThresholds()
    if not grid or len(grid) < t.min_rows:
        return RejectReason.INSUFFICIENT_ROWS
    # la rejilla es rectangular: la primera fila es representativa
    if len(grid[0]) < t.min_columns:
        return RejectReason.INSUFFICIENT_COLUMNS
    non_empty = count_non_empty_cells(grid)
    if non_empty < t.min_non_empty_cells:
        log.debug("Solo %d celdas con texto (mínimo %d).", non_empty, t.min_non_empty_cells)
        return RejectReason.INSUFFICIENT_CONTENT
    return None


def is_good_table(grid: List[List[str]], thresholds: Optional[TableThresholds] = None) -> bool:
    return validate_grid(grid, thresholds) is None
