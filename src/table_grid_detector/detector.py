from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .columns import estimate_column_centers, estimate_column_count
from .config import DetectorConfig, TableDetectMode
from .exporters import grid_to_csv_text, grid_to_tsv
from .geometry import words_in_image_space
from .grid_builder import build_grid, normalize_cell_text
from .rows import group_words_into_rows
from .structures import NormalizedObservation, WordObservation
from .validation import RejectReason, validate_grid

log = logging.getLogger(__name__)

ModeLike = Union[str, TableDetectMode]


@dataclass(frozen=True)
class DetectedTable:
    """Tabla reconstruida (inmutable). `source_image` solo sirve para diagnóstico."""

    rows: Tuple[Tuple[str, ...], ...]
    source_image: Optional[str] = None

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[str]], source_image: Optional[str] = None) -> "DetectedTable":
        return cls(rows=tuple(tuple(r) for r in grid), source_image=source_image)

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def as_lists(self) -> List[List[str]]:
        return [list(r) for r in self.rows]

    def to_tsv(self) -> str:
        return grid_to_tsv(self.rows)

    def to_csv(self) -> str:
        return grid_to_csv_text(self.rows)


@dataclass(frozen=True)
class DetectionOutcome:
    table: Optional[DetectedTable]
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.table is not None


def _reject(reason: RejectReason) -> DetectionOutcome:
    log.info("No se detectó tabla (%s).", reason.value)
    return DetectionOutcome(table=None, reason=reason)


def detect_words(
    words: Sequence[WordObservation],
    mode: ModeLike = TableDetectMode.FAST,
    *,
    config: Optional[DetectorConfig] = None,
    source_image: Optional[str] = None,
) -> DetectionOutcome:
    """
    Pipeline sobre palabras ya en píxeles (origen arriba-izquierda):
    filas → nº de columnas → centros k-means → rejilla → validación.
    Una sola pasada, con retorno temprano en cada etapa.
    """
    cfg = config or DetectorConfig()
    thresholds = cfg.thresholds

    if not words:
        return _reject(RejectReason.INPUT_EMPTY)

    rows = group_words_into_rows(
        words,
        cfg.tolerance_scale(mode),
        min_height=cfg.min_word_height,
        min_tolerance=cfg.min_row_tolerance,
    )
    log.info("Se agruparon %d palabras en %d filas.", len(words), len(rows))
    if len(rows) < thresholds.min_rows:
        return _reject(RejectReason.INSUFFICIENT_ROWS)

    if estimate_column_count(rows) < 2:
        return _reject(RejectReason.INSUFFICIENT_COLUMNS)

    centers = estimate_column_centers(rows, max_iter=cfg.kmeans_max_iter)
    if len(centers) < 2:
        return _reject(RejectReason.INSUFFICIENT_COLUMNS)
    log.info("Se estimaron %d columnas en las posiciones: %s", len(centers), centers)

    grid = build_grid(rows, centers)
    reason = validate_grid(grid, thresholds)
    if reason is not None:
        return _reject(reason)

    table = DetectedTable.from_grid(grid, source_image=source_image)
    log.info("Tabla aceptada: %d filas x %d columnas.", table.n_rows, table.n_cols)
    return DetectionOutcome(table=table)


def explain(
    observations: Sequence[NormalizedObservation],
    image_size: Tuple[float, float],
    mode: ModeLike = TableDetectMode.FAST,
    *,
    config: Optional[DetectorConfig] = None,
    source_image: Optional[str] = None,
) -> DetectionOutcome:
    """Igual que `detect`, pero conserva el motivo de rechazo (diagnóstico)."""
    words = words_in_image_space(observations, image_size)
    return detect_words(words, mode, config=config, source_image=source_image)


def detect(
    observations: Sequence[NormalizedObservation],
    image_size: Tuple[float, float],
    mode: ModeLike = TableDetectMode.FAST,
    *,
    config: Optional[DetectorConfig] = None,
    source_image: Optional[str] = None,
) -> Optional[DetectedTable]:
    """
    Punto de entrada: devuelve la tabla detectada o None ("no es una tabla").
    Todos los motivos de rechazo se reportan igual hacia fuera.
    """
    return explain(observations, image_size, mode, config=config, source_image=source_image).table


async def detect_async(
    observations: Sequence[NormalizedObservation],
    image_size: Tuple[float, float],
    mode: ModeLike = TableDetectMode.FAST,
    *,
    config: Optional[DetectorConfig] = None,
    source_image: Optional[str] = None,
) -> Optional[DetectedTable]:
    """Ejecuta `detect` en un hilo de trabajo. No hay cancelación intermedia."""
    return await asyncio.to_thread(
        detect, observations, image_size, mode, config=config, source_image=source_image
    )


def words_to_plain_text(
    words: Sequence[WordObservation],
    mode: ModeLike = TableDetectMode.FAST,
    *,
    config: Optional[DetectorConfig] = None,
) -> str:
    """Texto plano para cuando no hay tabla: una línea por fila, palabras separadas por espacio."""
    cfg = config or DetectorConfig()
    rows = group_words_into_rows(
        words,
        cfg.tolerance_scale(mode),
        min_height=cfg.min_word_height,
        min_tolerance=cfg.min_row_tolerance,
    )
    lines = []
    for row in rows:
        line = " ".join(t for t in (normalize_cell_text(w.text) for w in row) if t)
        if line:
            lines.append(line)
    return "\n".join(lines)
