# src/table_grid_detector/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Sequence
import csv
import io

def grid_to_tsv(grid: Sequence[Sequence[str]]) -> str:
    """Celdas separadas por tab, filas por salto de línea (formato de intercambio)."""
    return "\n".join("\t".join(row) for row in grid)

def tsv_to_grid(text: str) -> List[List[str]]:
    """Inverso de grid_to_tsv; rellena filas cortas hasta la más ancha."""
    if not text:
        return []
    rows = [line.split("\t") for line in text.split("\n")]
    width = max(len(r) for r in rows)
    return [r + [""] * (width - len(r)) for r in rows]

def grid_to_csv_text(grid: Sequence[Sequence[str]]) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerows(grid)
    return buf.getvalue().rstrip("\n")

def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

def rows_to_csv(rows: Sequence[Sequence[str]], csv_path: str,
                header: Optional[Sequence[str]] = None) -> None:
    _ensure_parent_dir(csv_path)
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        if header:
            w.writerow(header)
        w.writerows(rows)

def write_tsv(grid: Sequence[Sequence[str]], tsv_path: str) -> None:
    _ensure_parent_dir(tsv_path)
    with open(tsv_path, "w", encoding="utf-8", newline="") as f:
        f.write(grid_to_tsv(grid))

def write_text(text: str, path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
