from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from .config import DetectorConfig, TableDetectMode, TableThresholds
from .detector import detect_words, words_to_plain_text
from .exporters import rows_to_csv, write_text, write_tsv
from .geometry import words_in_image_space
from .ocr_utils import ocr_image_words
from .parser import load_observations_json, parse_hocr_words
from .structures import WordObservation, within_bbox

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_TABLE = 2


def _load_words(
    *,
    json_path: Optional[str],
    hocr_path: Optional[str],
    image_path: Optional[str],
    table_bbox: Optional[Tuple[int, int, int, int]],
    ocr_lang: str,
) -> List[WordObservation]:
    sources = [p for p in (json_path, hocr_path, image_path) if p]
    if len(sources) != 1:
        raise ValueError("Indique exactamente una fuente: json_path, hocr_path o image_path.")

    if json_path:
        log.info("Leyendo observaciones OCR desde: %s", json_path)
        observations, image_size = load_observations_json(json_path)
        log.info("Imagen de %gx%g px, %d observaciones.", image_size[0], image_size[1], len(observations))
        return words_in_image_space(observations, image_size)

    if image_path:
        words, image_size = ocr_image_words(image_path, lang=ocr_lang)
        log.info("Imagen OCR de %dx%d px, %d palabras.", image_size[0], image_size[1], len(words))
        if table_bbox:
            words = [w for w in words if within_bbox(table_bbox, w.x1, w.y1, w.x2, w.y2)]
        return words

    log.info("Parseando HOCR desde: %s", hocr_path)
    words, page_size = parse_hocr_words(hocr_path, table_bbox=table_bbox)
    if page_size:
        log.info("Página HOCR de %dx%d px, %d palabras.", page_size[0], page_size[1], len(words))
    else:
        log.warning("El HOCR no declara el bbox de la página; %d palabras.", len(words))
    return words


def extract_table(
    output_path: str,
    *,
    json_path: Optional[str] = None,
    hocr_path: Optional[str] = None,
    image_path: Optional[str] = None,
    mode: str = "fast",
    fmt: str = "tsv",
    table_bbox: Optional[Tuple[int, int, int, int]] = None,
    text_fallback: bool = False,
    ocr_lang: str = "eng",
    config: Optional[DetectorConfig] = None,
) -> bool:
    """
    Orquesta carga de palabras → detección → exportación.
    Devuelve True si se escribió una tabla; False si no se detectó ninguna.
    """
    fmt = (fmt or "tsv").lower()
    if fmt not in ("tsv", "csv"):
        raise ValueError(f"Formato desconocido: {fmt!r}")
    cfg = (config or DetectorConfig()).validate()
    detect_mode = TableDetectMode.parse(mode)
    log.info("Modo seleccionado: %s", detect_mode.value)

    words = _load_words(
        json_path=json_path,
        hocr_path=hocr_path,
        image_path=image_path,
        table_bbox=table_bbox,
        ocr_lang=ocr_lang,
    )
    source = image_path or hocr_path or json_path
    outcome = detect_words(words, detect_mode, config=cfg, source_image=source)

    if outcome.table is None:
        if text_fallback:
            log.warning("No se detectó tabla. Se escribirá el texto plano en %s.", output_path)
            write_text(words_to_plain_text(words, detect_mode, config=cfg), output_path)
        else:
            log.warning("No se detectó tabla. Se generará un archivo vacío.")
            write_text("", output_path)
        return False

    grid = outcome.table.as_lists()
    if fmt == "csv":
        rows_to_csv(grid, output_path)
    else:
        write_tsv(grid, output_path)
    log.info("Tabla %dx%d escrita en: %s", outcome.table.n_rows, outcome.table.n_cols, output_path)
    return True


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconstruir una tabla a partir de palabras OCR con bbox.")
    parser.add_argument("output_path", type=str, help="Ruta del archivo de salida (.tsv o .csv)")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--json", dest="json_path", type=str,
                     help="JSON con observaciones normalizadas (origen abajo-izquierda)")
    src.add_argument("--hocr", dest="hocr_path", type=str, help="Archivo .hocr de entrada")
    src.add_argument("--image", dest="image_path", type=str,
                     help="Imagen de entrada (se ejecuta Tesseract; requiere el extra 'ocr')")
    parser.add_argument("--mode", type=str, default="fast", choices=["fast", "strict"],
                        help="Tolerancia de agrupación de filas (default: fast)")
    parser.add_argument("--format", dest="fmt", type=str, default="tsv", choices=["tsv", "csv"],
                        help="Formato de salida (default: tsv)")
    parser.add_argument("--bbox", type=int, nargs=4, metavar=('X1', 'Y1', 'X2', 'Y2'),
                        help="Bbox opcional de la tabla (HOCR o imagen): x1 y1 x2 y2")
    parser.add_argument("--text-fallback", action="store_true",
                        help="Si no hay tabla, escribir el texto plano en lugar de un archivo vacío")
    parser.add_argument("--ocr-lang", type=str, default="eng", help="Idioma de Tesseract (default: eng)")
    parser.add_argument("--min-rows", type=int, default=2, help="Filas mínimas para aceptar la tabla")
    parser.add_argument("--min-cols", type=int, default=2, help="Columnas mínimas para aceptar la tabla")
    parser.add_argument("--min-cells", type=int, default=4, help="Celdas con texto mínimas")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')

    config = DetectorConfig(thresholds=TableThresholds(
        min_rows=args.min_rows,
        min_columns=args.min_cols,
        min_non_empty_cells=args.min_cells,
    ))

    try:
        found = extract_table(
            args.output_path,
            json_path=args.json_path,
            hocr_path=args.hocr_path,
            image_path=args.image_path,
            mode=args.mode,
            fmt=args.fmt,
            table_bbox=tuple(args.bbox) if args.bbox else None,
            text_fallback=args.text_fallback,
            ocr_lang=args.ocr_lang,
            config=config,
        )
    except FileNotFoundError as e:
        log.error("Error: No se encontró el archivo de entrada: %s", e.filename)
        return EXIT_ERROR
    except ValueError as e:
        log.error("Entrada inválida: %s", e)
        return EXIT_ERROR
    except Exception as e:
        log.error("Ocurrió un error inesperado: %s", e, exc_info=True)
        return EXIT_ERROR

    if not found:
        return EXIT_NO_TABLE
    log.info("✔ Proceso completado.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
