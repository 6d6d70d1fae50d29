"""Ejecuta `sim-resolver` desde un checkout, sin instalar el paquete.

    python main.py lookup 3520112345671 --json

Añade `src/` al `sys.path` para que `cli`, `core` y `adapters` se importen
igual que tras `pip install -e .`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
