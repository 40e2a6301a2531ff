# src/table_grid_detector/grid_builder.py
from __future__ import annotations
import logging
import re
from typing import List, Sequence

from .columns import nearest_center_index
from .rows import Row

log = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")

def normalize_cell_text(text: str) -> str:
    """Colapsa cualquier racha de espacios (incluye tab y salto de línea) a un espacio."""
    return _WS_RE.sub(" ", text or "").strip()

def _is_blank(cell: str) -> bool:
    return not cell.strip()

def trim_empty_outer_columns(grid: List[List[str]]) -> List[List[str]]:
    """Elimina columnas vacías al inicio y al final (en todas las filas).

    Si la rejilla quedaría sin columnas se devuelve tal cual; la validación
    posterior la rechaza por falta de contenido.
    """
    if not grid or not grid[0]:
        return grid
    cols = len(grid[0])

    left = 0
    while left < cols and all(_is_blank(row[left]) for row in grid):
        left += 1
    if left == cols:
        return grid

    right = cols - 1
    while right > left and all(_is_blank(row[right]) for row in grid):
        right -= 1

    if left == 0 and right == cols - 1:
        return grid
    log.debug("Recorte de columnas exteriores: [%d:%d] de %d", left, right + 1, cols)
    return [row[left:right + 1] for row in grid]

def build_grid(rows: Sequence[Row], column_centers: Sequence[float]) -> List[List[str]]:
    """
    Coloca cada palabra en la celda (fila, columna más cercana) y recorta
    las columnas exteriores vacías.
    """
    centers = sorted(column_centers)
    k = len(centers)
    grid: List[List[str]] = [["" for _ in range(k)] for _ in rows]
    if k == 0:
        return grid

    for ri, row in enumerate(rows):
        for w in row:
            text = normalize_cell_text(w.text)
            if not text:
                continue
            ci = nearest_center_index(w.xc, centers)
            grid[ri][ci] = f"{grid[ri][ci]} {text}" if grid[ri][ci] else text

    log.info("Rejilla construida con %d filas y %d columnas.", len(grid), k)
    return trim_empty_outer_columns(grid)
