from __future__ import annotations
from dataclasses import dataclass
from statistics import median as _stat_median
from typing import Iterable, Optional, Tuple
import re

BBOX_RE = re.compile(r"bbox (\d+)\s+(\d+)\s+(\d+)\s+(\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x1, y1, x2, y2 = map(int, m.groups())
    return x1, y1, x2, y2

def within_bbox(bbox: Tuple[int,int,int,int], x1:int,y1:int,x2:int,y2:int) -> bool:
    X1, Y1, X2, Y2 = bbox
    return (x1 >= X1 and y1 >= Y1 and x2 <= X2 and y2 <= Y2)

def median(values: Iterable[float]) -> float:
    """Mediana por ordenación y punto medio; 0.0 si no hay valores.

    Es el único helper de mediana del paquete: lo usan tanto la tolerancia de
    filas como la actualización de centros del k-means.
    """
    vals = [float(v) for v in values]
    if not vals:
        return 0.0
    return float(_stat_median(vals))

@dataclass(frozen=True)
class WordObservation:
    """Palabra OCR en píxeles de imagen, origen arriba-izquierda."""
    text: str
    x: float
    y: float
    width: float
    height: float

    @property
    def x1(self) -> float:
        return self.x

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y1(self) -> float:
        return self.y

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def xc(self) -> float:
        return self.x + self.width / 2.0

    @property
    def yc(self) -> float:
        return self.y + self.height / 2.0

@dataclass(frozen=True)
class NormalizedObservation:
    """Palabra tal como la entrega el OCR: caja en [0,1], origen abajo-izquierda."""
    text: str
    min_x: float
    min_y: float
    width: float
    height: float
