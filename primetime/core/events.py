from __future__ import annotations

from typing import IO, Any, Dict
from pathlib import Path
import json


class JsonlEventLog:
    """Append-only JSONL log for a run.

    Every record gets a running `seq` so interleaved notes and folds keep
    their order when read back. Each write is flushed.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._fh: IO[str] = self.path.open("a", encoding="utf-8")
        self._seq = 0

    def write(self, record: Dict[str, Any]) -> None:
        json.dump({"seq": self._seq, **record}, self._fh, ensure_ascii=False)
        self._fh.write("\n")
        self._fh.flush()
        self._seq += 1

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()
