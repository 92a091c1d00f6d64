from __future__ import annotations

import json
import traceback
import uuid
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

_TRACEBACK_LIMIT = 8000


class BuildLogger:
    """
    Event log for one site build, written as JSONL next to the rendered pages.

    Every line has ts, level, event and build_id. Events about a single page also
    carry `post_id` at the top level so a build log can be filtered per page.
    """

    def __init__(self, path: str | Path, *, build_id: str | None = None) -> None:
        self._path = Path(path)
        self.build_id = (build_id or "").strip() or uuid.uuid4().hex[:12]
        self.counts: Counter[str] = Counter()
        self._fp: TextIO | None = None
        self._started = False

    @classmethod
    def open(cls, path: str | Path, *, build_id: str | None = None) -> "BuildLogger":
        log = cls(path, build_id=build_id)
        log._reopen()
        return log

    def __enter__(self) -> "BuildLogger":
        self._reopen()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def info(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self._emit("INFO", event, url, data)

    def warning(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self._emit("WARN", event, url, data)

    def error(self, event: str, *, url: str | None = None, **data: Any) -> None:
        self._emit("ERROR", event, url, data)

    def exception(self, event: str, *, exc: BaseException, **data: Any) -> None:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        data["error"] = {
            "type": type(exc).__name__,
            "message": str(exc),
            "traceback": tb[-_TRACEBACK_LIMIT:],
        }
        self._emit("ERROR", event, None, data)

    def _reopen(self) -> None:
        if self._fp is not None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        # A build log starts empty; reopening within the same build appends.
        mode = "a" if self._started else "w"
        self._fp = self._path.open(mode, encoding="utf-8", newline="\n")
        self._started = True

    def _emit(self, level: str, event: str, url: str | None, data: dict[str, Any]) -> None:
        self.counts[level] += 1

        record: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "build_id": self.build_id,
        }
        if url:
            record["url"] = url
        if "post_id" in data:
            record["post_id"] = data.pop("post_id")
        if "error" in data:
            record["error"] = data.pop("error")
        if data:
            record["data"] = data

        self._reopen()
        assert self._fp is not None
        self._fp.write(json.dumps(record, ensure_ascii=False, sort_keys=True, default=str) + "\n")
        self._fp.flush()
