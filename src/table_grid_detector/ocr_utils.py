from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence, Tuple

from .structures import WordObservation

log = logging.getLogger(__name__)


def _conf(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return -1.0


def words_from_tesseract_data(data: Dict[str, Sequence[Any]], min_conf: float = 0.0) -> List[WordObservation]:
    """
    Convierte la salida de `pytesseract.image_to_data` (dict) en palabras en
    píxeles, origen arriba-izquierda.

    Solo se conservan las entradas de nivel palabra (level 5) con confianza
    >= min_conf; Tesseract marca con -1 los bloques, párrafos y líneas.
    """
    words: List[WordObservation] = []
    texts = data.get("text") or []
    for i, raw in enumerate(texts):
        if int(data["level"][i]) != 5:
            continue
        conf = _conf(data["conf"][i])
        if conf < 0 or conf < min_conf:
            continue
        text = (raw or "").strip()
        if not text:
            continue
        words.append(WordObservation(
            text=text,
            x=float(data["left"][i]),
            y=float(data["top"][i]),
            width=float(data["width"][i]),
            height=float(data["height"][i]),
        ))
    return words


def ocr_image_words(
    image_path: str,
    *,
    lang: str = "eng",
    psm: int = 6,
    oem: int = 3,
    min_conf: float = 0.0,
) -> Tuple[List[WordObservation], Tuple[int, int]]:
    """
    Ejecuta Tesseract sobre la imagen y devuelve (palabras, (ancho, alto)).

    El OCR es un colaborador externo: el detector solo consume las palabras
    con su bbox.
    """
    try:
        from PIL import Image
    except ImportError as exc:
        raise RuntimeError("Pillow es requerido para ejecutar OCR (extra 'ocr').") from exc

    try:
        import pytesseract
    except ImportError as exc:
        raise RuntimeError("pytesseract es requerido para ejecutar OCR (extra 'ocr').") from exc

    with Image.open(str(image_path)) as img:
        image = img.convert("RGB")
    data = pytesseract.image_to_data(
        image,
        lang=lang,
        config=f"--oem {oem} --psm {psm}",
        output_type=pytesseract.Output.DICT,
    )
    words = words_from_tesseract_data(data, min_conf=min_conf)
    log.debug("OCR de %s: %d palabras.", image_path, len(words))
    return words, (image.width, image.height)
