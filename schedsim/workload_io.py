from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Mapping

from rich.errors import StyleSyntaxError
from rich.style import Style

from .errors import ValidationError
from .models import Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValidationError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except UnicodeDecodeError as exc:
            raise ValidationError(f"{path}: not UTF-8 ({exc})") from exc
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise ValidationError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, from_text=False) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            for row in csv.DictReader(f):
                processes.append(_process_from_mapping(row, from_text=True))
        except UnicodeDecodeError as exc:
            raise ValidationError(f"{path}: not UTF-8 ({exc})") from exc
    return processes


def _to_int(value, from_text: bool) -> int:
    # CSV cells are always text; JSON must carry real integers
    if from_text and isinstance(value, str):
        return int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"not an integer: {value!r}")
    return value


def _check_color(color, mapping: Mapping) -> None:
    if not isinstance(color, str):
        raise ValidationError(f"Process color must be a string: {mapping!r}")
    try:
        Style.parse(color)
    except StyleSyntaxError as exc:
        raise ValidationError(f"Invalid color {color!r}: {exc}") from exc


def _process_from_mapping(mapping: Mapping, from_text: bool) -> Process:
    if not isinstance(mapping, Mapping):
        raise ValidationError(f"Invalid process entry: {mapping!r}")

    # "pid" is accepted for workloads written for older tools
    raw_id = mapping.get("id", mapping.get("pid"))
    if not isinstance(raw_id, str):
        raise ValidationError(f"Process id must be a string: {mapping!r}")
    try:
        arrival_time = _to_int(mapping["arrival_time"], from_text)
        burst_time = _to_int(mapping["burst_time"], from_text)
        priority_val = mapping.get("priority")
        priority = _to_int(priority_val, from_text) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid process entry: {mapping!r}") from exc

    color = mapping.get("color") or None
    if color is not None:
        _check_color(color, mapping)

    return Process(
        id=raw_id.strip(),
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
        color=color,
    )
