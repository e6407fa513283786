from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Any

from .io import dump_json


def log_event(log_path: str | Path | None, event: str, **fields: Any) -> None:
    """Append one JSON line describing ``event`` to ``log_path``. No-op without a path."""
    if log_path is None:
        return
    payload: dict[str, Any] = {
        "ts": _dt.datetime.now(_dt.timezone.utc).isoformat(timespec="seconds"),
        "event": event,
        **fields,
    }
    p = Path(log_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(dump_json(payload) + "\n")
