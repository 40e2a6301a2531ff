# src/table_grid_detector/parser.py
from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple
from bs4 import BeautifulSoup
from .structures import NormalizedObservation, WordObservation, parse_bbox, within_bbox

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def parse_hocr_words(hocr_path: str,
                     table_bbox: Optional[Tuple[int,int,int,int]] = None
                     ) -> Tuple[List[WordObservation], Optional[Tuple[int, int]]]:
    """
    Extrae las palabras de la primera página HOCR (ya en píxeles, origen
    arriba-izquierda) y el tamaño de la imagen según el bbox de `ocr_page`.
    """
    with open(hocr_path, "r", encoding="utf-8") as f:
        raw = f.read()
    soup = _load_soup(raw)

    page = soup.find(class_=lambda c: c and "ocr_page" in c)
    if page is None:
        return [], None

    image_size = None
    pb = parse_bbox(page.get("title", ""))
    if pb:
        image_size = (pb[2] - pb[0], pb[3] - pb[1])

    words: List[WordObservation] = []
    for w in page.find_all(class_=lambda c: c and "ocrx_word" in c):
        bb = parse_bbox(w.get("title", ""))
        if not bb:
            continue
        x1, y1, x2, y2 = bb
        if table_bbox and not within_bbox(table_bbox, x1, y1, x2, y2):
            continue

        text = (w.get_text() or "").strip()
        if not text:
            continue
        words.append(WordObservation(text=text, x=float(x1), y=float(y1),
                                     width=float(x2 - x1), height=float(y2 - y1)))

    return words, image_size

def _observation_from_dict(item: Dict[str, Any]) -> NormalizedObservation:
    bbox = item.get("bbox")
    if not isinstance(bbox, (list, tuple)) or len(bbox) != 4:
        raise ValueError(f"Observación sin bbox [minX, minY, width, height]: {item!r}")
    min_x, min_y, width, height = map(float, bbox)
    return NormalizedObservation(text=str(item.get("text", "")),
                                 min_x=min_x, min_y=min_y, width=width, height=height)

def load_observations_json(json_path: str) -> Tuple[List[NormalizedObservation], Tuple[float, float]]:
    """
    Lee observaciones OCR normalizadas (origen abajo-izquierda) desde JSON:
    {"image_size": [W, H], "observations": [{"text": ..., "bbox": [minX, minY, w, h]}]}
    """
    with open(json_path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("El JSON debe ser un objeto con 'image_size' y 'observations'.")

    size = data.get("image_size")
    if not isinstance(size, (list, tuple)) or len(size) != 2:
        raise ValueError("'image_size' debe ser [ancho, alto].")
    W, H = map(float, size)

    observations = [_observation_from_dict(o) for o in data.get("observations") or []]
    return observations, (W, H)
