from __future__ import annotations

import logging
from typing import Tuple

from rich.console import Console
from rich.logging import RichHandler

from .errors import ValidationError
from .models import UNBOUNDED, Quantum

DEFAULT_QUANTUM = 4
DEFAULT_MLFQ_QUANTA: Tuple[Quantum, ...] = (8, 16, UNBOUNDED)
DEFAULT_LOG_LEVEL = "WARNING"

_UNBOUNDED_WORDS = {"inf", "infinity", "unbounded", "none", "*"}


def parse_quanta(text: str) -> Tuple[Quantum, ...]:
    """
    Parse a comma separated MLFQ quanta list such as ``"8,16,inf"``.

    Range checks are left to :func:`schedsim.validation.validate_quanta`.
    """
    quanta = []
    for part in text.split(","):
        token = part.strip().lower()
        if not token:
            raise ValidationError(f"Empty entry in quanta list {text!r}")
        if token in _UNBOUNDED_WORDS:
            quanta.append(UNBOUNDED)
            continue
        try:
            quanta.append(int(token))
        except ValueError as exc:
            raise ValidationError(f"Invalid quantum {part.strip()!r} in {text!r}") from exc
    return tuple(quanta)


def format_quanta(quanta: Tuple[Quantum, ...]) -> str:
    return ", ".join(str(q) for q in quanta)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Route log records to stderr through Rich. Only the CLI calls this.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValidationError(f"Unknown log level {level!r}")

    root = logging.getLogger()
    root.setLevel(numeric)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
