from __future__ import annotations
import logging
from typing import List, Sequence

import numpy as np

from .rows import Row
from .structures import median

log = logging.getLogger(__name__)

def estimate_column_count(rows: Sequence[Row]) -> int:
    """La fila más ancha fija el número de columnas presunto."""
    return max((len(r) for r in rows), default=0)

def nearest_center_index(x: float, centers: Sequence[float]) -> int:
    """Índice del centro más cercano; en empate gana el de menor índice."""
    best = 0
    best_dist = float("inf")
    for i, c in enumerate(centers):
        d = abs(x - c)
        if d < best_dist:
            best = i
            best_dist = d
    return best

def kmeans_1d(points: Sequence[float], k: int, max_iter: int = 20) -> List[float]:
    """K-means 1-D con mediana como estadístico de actualización.

    Semillas en cuantiles de los puntos ordenados; se detiene antes del tope
    si ningún centro cambia. Devuelve los centros ordenados de menor a mayor.
    """
    if len(points) == 0 or k < 1:
        return []

    pts = np.sort(np.asarray(points, dtype=float))
    n = len(pts)
    centers = np.array(
        [pts[int((i / max(1, k - 1)) * (n - 1))] for i in range(k)],
        dtype=float,
    )

    for it in range(max_iter):
        # argmin devuelve el primer mínimo: empates al centro de menor índice
        labels = np.argmin(np.abs(pts[:, None] - centers[None, :]), axis=1)

        changed = False
        for c in range(k):
            members = pts[labels == c]
            if members.size == 0:
                continue
            new_center = median(members.tolist())
            if new_center != centers[c]:
                centers[c] = new_center
                changed = True
        if not changed:
            log.debug("K-means convergió en %d iteraciones.", it + 1)
            break

    return sorted(float(c) for c in centers)

def estimate_column_centers(rows: Sequence[Row], max_iter: int = 20) -> List[float]:
    """Centros de columna (estrictamente crecientes) a partir de todas las filas.

    Devuelve [] si la fila más ancha tiene menos de 2 palabras.
    """
    k = estimate_column_count(rows)
    if k < 2:
        return []

    all_xc = [w.xc for row in rows for w in row]
    centers = kmeans_1d(all_xc, k, max_iter=max_iter)
    # semillas repetidas dejan centros duplicados
    distinct = [float(c) for c in np.unique(np.asarray(centers, dtype=float))]
    log.debug("K estimado=%d, centros=%s", k, distinct)
    return distinct
