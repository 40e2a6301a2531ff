from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from .structures import NormalizedObservation, WordObservation

log = logging.getLogger(__name__)

def to_image_rect(min_x: float, min_y: float, width: float, height: float,
                  image_size: Tuple[float, float]) -> Tuple[float, float, float, float]:
    """Convierte una caja normalizada (origen abajo-izquierda) a píxeles con origen arriba-izquierda.

    Aritmética exacta en float, sin redondeos: los errores se acumularían en
    las tolerancias de filas y columnas.
    """
    W, H = image_size
    bl_x = min_x * W
    bl_y = min_y * H
    w = width * W
    h = height * H
    return bl_x, H - (bl_y + h), w, h

def words_in_image_space(observations: Iterable[NormalizedObservation],
                         image_size: Tuple[float, float]) -> List[WordObservation]:
    W, H = image_size
    if W <= 0 or H <= 0:
        log.warning("Tamaño de imagen inválido %sx%s; no se convierten palabras.", W, H)
        return []

    out: List[WordObservation] = []
    # las palabras sin texto se conservan: cuentan para K y para el k-means
    for obs in observations:
        x, y, w, h = to_image_rect(obs.min_x, obs.min_y, obs.width, obs.height, image_size)
        out.append(WordObservation(text=obs.text, x=x, y=y, width=w, height=h))
    return out
