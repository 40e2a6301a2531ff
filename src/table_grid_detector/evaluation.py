from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import pandas as pd

from .exporters import tsv_to_grid


@dataclass
class TableEvaluation:
    reference_shape: tuple
    predicted_shape: tuple
    text_accuracy: float
    total_cells: int
    matched_cells: int

    @property
    def shape_match(self) -> bool:
        return self.reference_shape == self.predicted_shape

    def to_dict(self) -> Dict[str, object]:
        return {
            "reference_shape": list(self.reference_shape),
            "predicted_shape": list(self.predicted_shape),
            "shape_match": self.shape_match,
            "text_accuracy": self.text_accuracy,
            "total_cells": self.total_cells,
            "matched_cells": self.matched_cells,
        }


def read_tsv_grid(path: str) -> pd.DataFrame:
    """Lee un TSV sin cabecera como rejilla de strings; las filas cortas se rellenan con vacíos."""
    text = Path(path).read_text(encoding="utf-8")
    # un salto de línea final no es una fila
    if text.endswith("\n"):
        text = text[:-1]
    grid = tsv_to_grid(text)
    if not grid:
        return pd.DataFrame(dtype=str)
    df = pd.DataFrame(grid, dtype=str)
    # normalizar espacios
    return df.map(lambda x: (x or "").strip())


def _pad(df: pd.DataFrame, n_rows: int, n_cols: int) -> pd.DataFrame:
    out = df.reindex(index=range(n_rows), columns=range(n_cols))
    return out.fillna("")


def compare_grids(reference: pd.DataFrame, predicted: pd.DataFrame) -> TableEvaluation:
    ref = reference.copy()
    pred = predicted.copy()
    ref.columns = range(ref.shape[1])
    pred.columns = range(pred.shape[1])
    ref.index = range(ref.shape[0])
    pred.index = range(pred.shape[0])

    # igualar dimensiones rellenando con celdas vacías
    max_rows = max(ref.shape[0], pred.shape[0])
    max_cols = max(ref.shape[1], pred.shape[1])
    ref_p = _pad(ref, max_rows, max_cols)
    pred_p = _pad(pred, max_rows, max_cols)

    total_cells = int(max_rows * max_cols)
    matches = int((ref_p.values == pred_p.values).sum())
    text_accuracy = matches / total_cells if total_cells else 0.0

    return TableEvaluation(
        reference_shape=tuple(reference.shape),
        predicted_shape=tuple(predicted.shape),
        text_accuracy=text_accuracy,
        total_cells=total_cells,
        matched_cells=matches,
    )


def evaluate_tables(reference_tsv: str, predicted_tsv: str) -> TableEvaluation:
    return compare_grids(read_tsv_grid(reference_tsv), read_tsv_grid(predicted_tsv))


def write_report(evaluation: TableEvaluation, output_path: str) -> None:
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Metric", "Value"])
        writer.writerow(["text_accuracy", f"{evaluation.text_accuracy:.4f}"])
        writer.writerow(["matched_cells", evaluation.matched_cells])
        writer.writerow(["total_cells", evaluation.total_cells])
        writer.writerow(["reference_shape", "x".join(map(str, evaluation.reference_shape))])
        writer.writerow(["predicted_shape", "x".join(map(str, evaluation.predicted_shape))])
        writer.writerow(["shape_match", evaluation.shape_match])
