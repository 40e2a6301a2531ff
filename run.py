# run.py
from __future__ import annotations
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
grid_main = import_module("table_grid_detector.main")

# El logging se configura en main.py; aquí solo se delega la CLI.
if __name__ == "__main__":
    sys.exit(grid_main.main())
