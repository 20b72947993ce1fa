# logfiles.py - per-prefix .history and .errors files
from __future__ import annotations

import os
from typing import List, Sequence

HISTORY_EXT = ".history"
ERRORS_EXT = ".errors"

# characters that are not allowed in a file name on at least one platform
DISALLOWED = '<>:"/\\|?*'


def log_basename(prefix: Sequence[str]) -> str:
    text = " ".join(prefix)
    return "".join("_" if c in DISALLOWED or ord(c) < 32 else c for c in text)


class SessionLogs:
    """History and error logs shared by every session started with the same prefix."""

    def __init__(self, directory: str, prefix: Sequence[str]):
        self.directory = os.path.expanduser(directory)
        base = log_basename(prefix)
        self.history_path = os.path.join(self.directory, base + HISTORY_EXT)
        self.errors_path = os.path.join(self.directory, base + ERRORS_EXT)

    def _append(self, path: str, line: str):
        os.makedirs(self.directory, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def record_history(self, line: str):
        self._append(self.history_path, line)

    def record_error(self, line: str):
        self._append(self.errors_path, line)

    def load_history(self) -> List[str]:
        if not os.path.exists(self.history_path):
            return []
        with open(self.history_path, "r", encoding="utf-8") as f:
            return [entry.rstrip("\n") for entry in f if entry.rstrip("\n")]
