"""
Persisted campaign progress: the highest unlocked level.
"""

import json
from pathlib import Path
from typing import Optional, Union

from .levels import MAX_LEVELS


class ProgressStore:
    """
    Stores the highest unlocked level as a small JSON document.

    With no path the value lives in memory only (headless runs, agents).
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, max_levels: int = MAX_LEVELS):
        self.path = Path(path) if path is not None else None
        self.max_levels = max_levels
        self._unlocked = self._read()

    @property
    def unlocked_levels(self) -> int:
        return self._unlocked

    def _clamp(self, value: int) -> int:
        return max(1, min(self.max_levels, int(value)))

    def _read(self) -> int:
        if self.path is None or not self.path.exists():
            return 1
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            return self._clamp(data.get("unlocked_levels", 1))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"[Progress] Could not read {self.path} ({e}), starting from level 1")
            return 1

    def _write(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump({"unlocked_levels": self._unlocked}, f)

    def unlock(self, level: int) -> bool:
        """
        Raise the unlocked level. Never lowers it.

        Returns:
            True if a new level was unlocked (and written)
        """
        level = self._clamp(level)
        if level <= self._unlocked:
            return False
        self._unlocked = level
        self._write()
        print(f"[Progress] Level {level} unlocked")
        return True

    def reset(self) -> None:
        """Lock everything but level 1."""
        self._unlocked = 1
        if self.path is not None and self.path.exists():
            self.path.unlink()
        print("[Progress] Progress reset")
