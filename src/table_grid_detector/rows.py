# src/table_grid_detector/rows.py
from __future__ import annotations
import logging
from typing import List, Sequence

from .structures import WordObservation, median

log = logging.getLogger(__name__)

Row = List[WordObservation]

def row_tolerance(words: Sequence[WordObservation],
                  tolerance_scale: float,
                  min_height: float = 8.0,
                  min_tolerance: float = 6.0) -> float:
    """Tolerancia vertical en px: max(min_tolerance, max(min_height, hMed) * escala)."""
    h_med = max(min_height, median(w.height for w in words))
    return max(min_tolerance, h_med * tolerance_scale)

def group_words_into_rows(words: Sequence[WordObservation],
                          tolerance_scale: float,
                          *,
                          min_height: float = 8.0,
                          min_tolerance: float = 6.0,
                          ) -> List[Row]:
    """Agrupa palabras en filas horizontales por proximidad del centro vertical.

    Cada palabra se compara con el *ancla* de la fila actual (su primera
    palabra), no con un promedio móvil: así no se acumula deriva cuando hay
    muchas palabras ligeramente desplazadas.
    """
    if not words:
        return []

    tol = row_tolerance(words, tolerance_scale, min_height, min_tolerance)
    log.debug("Tolerancia de filas: %.3f px (escala %.2f)", tol, tolerance_scale)

    rows: List[Row] = []
    for w in sorted(words, key=lambda z: z.yc):
        if rows and abs(w.yc - rows[-1][0].yc) <= tol:
            rows[-1].append(w)
        else:
            rows.append([w])

    for i, row in enumerate(rows):
        rows[i] = sorted(row, key=lambda z: z.x1)

    return rows
