"""`python main.py <comando>` desde `src/`: mismo CLI que el script `sim-resolver`.

En Windows la consola puede no ser UTF-8; los paneles de Rich y los nombres
de titulares con caracteres no ASCII fallarían al imprimirse.
"""

from __future__ import annotations

import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402

if __name__ == "__main__":
    run()
