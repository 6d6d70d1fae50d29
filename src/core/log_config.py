"""Configuración de logging.

Los módulos usan `logging.getLogger(__name__)`; aquí solo se instala el
handler (Rich, a stderr) para no mezclar logs con la salida JSON de la CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "sim-resolver-rich"


def configure_logging(level: str = "WARNING") -> None:
    """Instala (una sola vez) un `RichHandler` en el logger raíz."""

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)

    # httpx loguea cada request a INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
