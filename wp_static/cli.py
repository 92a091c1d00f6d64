from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from .build_log import BuildLogger
from .config import config_sha256, load_config, resolve_source_settings
from .config_schema import AppConfig
from .errors import ConfigError, FetchError, RenderError
from .queries import PostQueries
from .site import build_site
from .wp_client import EventLogger, WordPressPostSource


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wp_static")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def _common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--config",
            required=True,
            help="Path to YAML config file.",
        )
        sub.add_argument(
            "--offline",
            action="store_true",
            help="Use a small built-in post set instead of the WordPress API.",
        )

    build = subparsers.add_parser(
        "build",
        help="Render the index and every post page into an output directory.",
    )
    _common(build)
    build.add_argument(
        "--out",
        required=True,
        help="Output directory for HTML pages and build.log.",
    )
    build.add_argument(
        "--strict",
        action="store_true",
        help="Fail the build when posts cannot be fetched instead of rendering an empty site.",
    )
    build.set_defaults(_handler=_cmd_build)

    list_cmd = subparsers.add_parser(
        "list",
        help="Print posts sorted by title.",
    )
    _common(list_cmd)
    list_cmd.set_defaults(_handler=_cmd_list)

    show = subparsers.add_parser(
        "show",
        help="Print one post as JSON.",
    )
    _common(show)
    show.add_argument("post_id", help="WordPress post ID.")
    show.set_defaults(_handler=_cmd_show)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _make_queries(
    cfg: AppConfig, args: argparse.Namespace, *, logger: EventLogger | None = None
) -> PostQueries:
    if bool(getattr(args, "offline", False)):
        from .offline import OfflinePostSource

        return PostQueries(OfflinePostSource())

    settings = resolve_source_settings(cfg)
    return PostQueries(WordPressPostSource(settings, logger=logger))


def _cmd_build(args: argparse.Namespace) -> int:
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    log_path = out_dir / "build.log"
    with BuildLogger.open(log_path) as log:
        log.info(
            "build_started",
            config_path=str(args.config),
            out_dir=str(out_dir),
            offline=bool(args.offline),
            strict=bool(args.strict),
        )

        try:
            cfg = load_config(args.config)
            queries = _make_queries(cfg, args, logger=log)
            log.info("config_loaded", config_sha256=config_sha256(cfg))

            result = build_site(
                queries,
                cfg.site,
                out_dir,
                logger=log,
                strict=bool(args.strict),
            )

            log.info(
                "build_completed",
                pages=result.pages_written,
                skipped=list(result.skipped_ids),
                warnings=log.counts["WARN"],
            )
        except Exception as e:
            log.exception("build_failed", exc=e)
            raise

    print(f"pages_written={result.pages_written}")
    print(f"index={result.index_path}")
    print(f"build_log={log_path}")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    queries = _make_queries(cfg, args)

    for post in queries.list_sorted():
        print(f"{post.id}\t{post.date}\t{post.title}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    queries = _make_queries(cfg, args)

    detail = queries.find_by_id(args.post_id)
    if detail is None:
        _eprint(f"Post not found: {args.post_id}")
        return 4

    print(json.dumps(detail.to_dict(), indent=2, ensure_ascii=False, sort_keys=True))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    load_dotenv(Path.cwd() / ".env")

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except (FetchError, RenderError) as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
