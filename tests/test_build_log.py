from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from wp_static.build_log import BuildLogger


def _records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestBuildLogger(unittest.TestCase):
    def test_writes_jsonl_records(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "logs" / "build.log"
            with BuildLogger.open(path, build_id="b1") as log:
                log.info("page_written", post_id="7", path="posts/7.html")
                log.warning("posts_format_mismatch", url="https://wp.test/latest-posts")

            first, second = _records(path)

            self.assertEqual(first["event"], "page_written")
            self.assertEqual(first["level"], "INFO")
            self.assertEqual(first["build_id"], "b1")
            self.assertEqual(first["post_id"], "7")
            self.assertEqual(first["data"], {"path": "posts/7.html"})

            self.assertEqual(second["level"], "WARN")
            self.assertEqual(second["url"], "https://wp.test/latest-posts")
            self.assertNotIn("data", second)
            self.assertNotIn("post_id", second)

    def test_counts_events_per_level(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with BuildLogger.open(Path(td) / "build.log") as log:
                log.info("build_started")
                log.warning("page_skipped", post_id="..")
                log.warning("posts_item_invalid")

            self.assertEqual(log.counts["INFO"], 1)
            self.assertEqual(log.counts["WARN"], 2)
            self.assertEqual(log.counts["ERROR"], 0)

    def test_exception_records_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "build.log"
            with BuildLogger.open(path) as log:
                try:
                    raise ValueError("bad page")
                except ValueError as e:
                    log.exception("build_failed", exc=e)

            (record,) = _records(path)
            self.assertEqual(record["level"], "ERROR")
            self.assertEqual(record["error"]["type"], "ValueError")
            self.assertEqual(record["error"]["message"], "bad page")
            self.assertIn("bad page", record["error"]["traceback"])

    def test_new_build_truncates_previous_log(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "build.log"
            path.write_text("stale\n", encoding="utf-8")

            log = BuildLogger.open(path)
            log.info("build_started")
            log.close()
            log.info("build_completed")

            self.assertEqual(
                [r["event"] for r in _records(path)], ["build_started", "build_completed"]
            )


if __name__ == "__main__":
    unittest.main()
