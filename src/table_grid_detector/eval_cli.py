from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from .evaluation import evaluate_tables, write_report

log = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compara un TSV predicho contra una referencia (exactitud de celdas y forma)."
    )
    parser.add_argument("--reference", required=True, help="TSV de referencia (ground truth).")
    parser.add_argument("--predicted", required=True, help="TSV generado por el detector.")
    parser.add_argument("--report", help="Ruta opcional para guardar un reporte CSV con las métricas.")
    parser.add_argument("--json", help="Ruta opcional para guardar métricas en JSON.")
    parser.add_argument("--loglevel", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")

    evaluation = evaluate_tables(reference_tsv=args.reference, predicted_tsv=args.predicted)

    log.info("Text accuracy: %.4f (%d/%d)", evaluation.text_accuracy, evaluation.matched_cells, evaluation.total_cells)
    log.info("Forma referencia %s vs predicha %s (coinciden: %s)",
             evaluation.reference_shape, evaluation.predicted_shape, evaluation.shape_match)

    if args.report:
        write_report(evaluation, args.report)
        log.info("Reporte CSV guardado en %s", args.report)

    if args.json:
        Path(args.json).parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, "w", encoding="utf-8") as fh:
            json.dump(evaluation.to_dict(), fh, indent=2)
        log.info("Reporte JSON guardado en %s", args.json)


if __name__ == "__main__":
    main()
