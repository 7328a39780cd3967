"""Runtime helpers for counting how often booking functions execute."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, Optional, Union

_LOCK = threading.RLock()
_COUNTS: Dict[str, int] = {}


def t(func_name: str) -> None:
    """Record the provided function name each time it runs."""
    if not func_name:
        return

    with _LOCK:
        _COUNTS[func_name] = _COUNTS.get(func_name, 0) + 1


def snapshot() -> Dict[str, int]:
    """Return a copy of the counts collected so far in this process."""
    with _LOCK:
        return dict(_COUNTS)


def reset() -> None:
    with _LOCK:
        _COUNTS.clear()


def save_counts(path: Union[str, Path]) -> Optional[Path]:
    """Merge the in-memory counts into ``path`` and write it atomically.

    Counts already present in the file are added to, so several runs of the
    bot accumulate into one report. Returns the written path, or ``None`` if
    nothing was recorded or the file could not be written.
    """
    target = Path(path)
    with _LOCK:
        if not _COUNTS:
            return None

        merged: Dict[str, int] = {}
        if target.exists():
            try:
                with target.open("r", encoding="utf-8") as handle:
                    existing = json.load(handle)
            except (OSError, ValueError):
                existing = {}
            if isinstance(existing, dict):
                for name, raw_count in existing.items():
                    try:
                        merged[str(name)] = max(int(raw_count), 0)
                    except (TypeError, ValueError):
                        continue

        for name, count in _COUNTS.items():
            merged[name] = merged.get(name, 0) + count

        tmp_path: Optional[Path] = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                "w", encoding="utf-8", dir=target.parent, delete=False
            ) as handle:
                json.dump(merged, handle, sort_keys=True, indent=2)
                handle.write("\n")
                handle.flush()
                tmp_path = Path(handle.name)
            tmp_path.replace(target)
        except OSError:
            if tmp_path is not None:
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
            return None

    return target
