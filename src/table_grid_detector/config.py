from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ConfigValidationError(ValueError):
    """Valor de configuración fuera de rango."""


class TableDetectMode(Enum):
    FAST = "fast"      # agrupación de filas más holgada
    STRICT = "strict"  # agrupación más estricta (menos fusiones)

    @classmethod
    def parse(cls, value: Union[str, "TableDetectMode"]) -> "TableDetectMode":
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ConfigValidationError(f"Modo desconocido: {value!r}") from None


@dataclass
class TableThresholds:
    """Umbrales de aceptación de la rejilla reconstruida."""

    min_rows: int = 2
    min_columns: int = 2
    min_non_empty_cells: int = 4


@dataclass
class DetectorConfig:
    """Parámetros del detector."""

    # Multiplicador de la mediana de alturas para la tolerancia de filas, por modo.
    fast_tolerance_scale: float = 0.65
    strict_tolerance_scale: float = 0.45
    # Suelos en píxeles para alturas y tolerancias degeneradas.
    min_word_height: float = 8.0
    min_row_tolerance: float = 6.0
    # Tope de iteraciones del k-means 1-D.
    kmeans_max_iter: int = 20
    thresholds: TableThresholds = field(default_factory=TableThresholds)

    def tolerance_scale(self, mode: Union[str, "TableDetectMode"]) -> float:
        mode = TableDetectMode.parse(mode)
        if mode is TableDetectMode.STRICT:
            return self.strict_tolerance_scale
        return self.fast_tolerance_scale

    def validate(self) -> "DetectorConfig":
        if self.fast_tolerance_scale <= 0 or self.strict_tolerance_scale <= 0:
            raise ConfigValidationError("Las escalas de tolerancia deben ser > 0.")
        if self.min_word_height < 0 or self.min_row_tolerance < 0:
            raise ConfigValidationError("Los suelos de altura/tolerancia no pueden ser negativos.")
        if self.kmeans_max_iter < 1:
            raise ConfigValidationError("kmeans_max_iter debe ser >= 1.")
        t = self.thresholds
        if min(t.min_rows, t.min_columns, t.min_non_empty_cells) < 1:
            raise ConfigValidationError("Los umbrales de aceptación deben ser >= 1.")
        return self
