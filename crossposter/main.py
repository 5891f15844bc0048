"""Command-line entrypoint for the article crossposter.

Commands:
1) post     - clean, parse, sanitize and publish an article to dev.to and/or Medium
2) preview  - show the processed article without publishing
3) list     - list articles from a platform
4) fetch    - fetch a single dev.to article by id
5) config   - manage the configuration file
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional

from dotenv import load_dotenv

from .errors import CrossPosterError
from .models import Article, ArticleState, ContentFormat, Platform
from .orchestrator import Orchestrator
from .platforms import create_client
from .utils.config_loader import Config, config_path, describe_config, init_config, load_config
from .utils.logging import configure_logging, get_logger
from .utils.pipeline_config import RuntimeConfig

logger = get_logger("crossposter.cli")


def _platform_list(value: str) -> List[Platform]:
    try:
        return [Platform.parse(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _tag_list(value: str) -> List[str]:
    return [t.strip() for t in value.split(",") if t.strip()]


def _enum_arg(parse: Callable[[str], object]) -> Callable[[str], object]:
    def convert(value: str) -> object:
        try:
            return parse(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from None

    return convert


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", help="Path to a markdown file or a dev.to article URL")
    parser.add_argument(
        "--clean-ai",
        action="store_true",
        help="Strip emoji, typographic punctuation and invisible characters",
    )
    parser.add_argument(
        "--tags",
        type=_tag_list,
        default=None,
        help="Override tags from frontmatter (comma-separated)",
    )
    parser.add_argument("--canonical", default=None, help="Set the canonical URL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crossposter",
        description="Cross-post markdown articles to dev.to and Medium",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the configuration file (YAML); defaults to $CROSSPOSTER_CONFIG or ~/.config",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    post = sub.add_parser("post", help="Post an article to one or more platforms")
    _add_source_options(post)
    post.add_argument(
        "-t",
        "--to",
        dest="platforms",
        type=_platform_list,
        required=True,
        help="Target platforms (comma-separated: devto,medium)",
    )
    post.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and show what would be posted without contacting the platforms",
    )
    post.add_argument(
        "--format",
        dest="content_format",
        type=_enum_arg(ContentFormat.parse),
        default=ContentFormat.MARKDOWN,
        help="Content format for Medium (markdown or html)",
    )
    post.add_argument(
        "--truncate-tags",
        action="store_true",
        help="Drop tags beyond each platform's limit (with a warning) instead of failing",
    )

    preview = sub.add_parser("preview", help="Preview processed content without posting")
    _add_source_options(preview)

    listing = sub.add_parser(
        "list",
        help="List articles from a platform",
        description=(
            "dev.to supports pagination and filtering by state. "
            "Medium returns at most 10 recent articles via RSS, without pagination or state filtering."
        ),
    )
    listing.add_argument("--from", dest="platform", type=_enum_arg(Platform.parse), required=True)
    listing.add_argument("--page", type=int, default=None, help="Page number (dev.to only, default: 1)")
    listing.add_argument("--per-page", type=int, default=None, help="Articles per page (dev.to only, default: 30)")
    listing.add_argument(
        "--state",
        type=_enum_arg(ArticleState.parse),
        default=None,
        help="published, unpublished or all (dev.to only, default: published)",
    )

    fetch = sub.add_parser("fetch", help="Fetch a single article by id (dev.to only)")
    fetch.add_argument("id", help="Article id")
    fetch.add_argument("--from", dest="platform", type=_enum_arg(Platform.parse), required=True)

    config = sub.add_parser("config", help="Manage configuration")
    config.add_argument("action", choices=["init", "show", "path"])

    return parser


def render_article(article: Article) -> str:
    lines = [
        f"Title: {article.title}",
        f"Tags: {', '.join(article.tags) if article.tags else '(none)'}",
        f"Canonical URL: {article.canonical_url or '(none)'}",
        f"Published: {article.published}",
        f"Cover image: {article.cover_image or '(none)'}",
        f"Description: {article.description or '(none)'}",
        "",
        "-" * 40,
        article.content,
    ]
    return "\n".join(lines).rstrip("\n") + "\n"


def _client_provider(config: Config, *, dry_run: bool, runtime: RuntimeConfig):
    return lambda platform: create_client(platform, config, dry_run=dry_run, runtime=runtime)


def _run_post(args: argparse.Namespace, config: Config, runtime: RuntimeConfig) -> int:
    orch = Orchestrator(
        _client_provider(config, dry_run=args.dry_run, runtime=runtime),
        clean_ai=args.clean_ai,
        tag_overrides=args.tags,
        canonical_url=args.canonical,
        truncate_tags=args.truncate_tags,
        content_format=args.content_format,
        dry_run=args.dry_run,
        max_workers=runtime.max_workers,
    )
    report = orch.run(args.input, args.platforms)
    sys.stdout.write(report.to_text())
    return 0 if report.ok else 1


def _run_preview(args: argparse.Namespace, config: Config, runtime: RuntimeConfig) -> int:
    orch = Orchestrator(
        _client_provider(config, dry_run=False, runtime=runtime),
        clean_ai=args.clean_ai,
        tag_overrides=args.tags,
        canonical_url=args.canonical,
    )
    sys.stdout.write(render_article(orch.prepare(args.input)))
    return 0


def _run_list(args: argparse.Namespace, config: Config, runtime: RuntimeConfig) -> int:
    client = create_client(args.platform, config, runtime=runtime)
    if args.platform is Platform.DEVTO:
        summaries = client.list_articles(
            page=args.page or 1,
            per_page=args.per_page or 30,
            state=args.state or ArticleState.PUBLISHED,
        )
    else:
        # Medium rejects any pagination or state option that was given
        summaries = client.list_articles(page=args.page, per_page=args.per_page, state=args.state)
    if not summaries:
        sys.stdout.write("No articles found.\n")
        return 0
    for s in summaries:
        tags = f" [{', '.join(s.tags)}]" if s.tags else ""
        sys.stdout.write(f"{s.id}  {s.published_at or '-'}  {s.title}{tags}\n    {s.url}\n")
    return 0


def _run_fetch(args: argparse.Namespace, config: Config, runtime: RuntimeConfig) -> int:
    client = create_client(args.platform, config, runtime=runtime)
    sys.stdout.write(render_article(client.fetch_article(args.id)))
    return 0


def _run_config(args: argparse.Namespace, config_file: Optional[str]) -> int:
    if args.action == "path":
        sys.stdout.write(f"{config_file or config_path()}\n")
        return 0
    if args.action == "init":
        path, created = init_config(config_file)
        if created:
            sys.stdout.write(
                f"Created config file at: {path}\n"
                "API keys and tokens are stored in PLAIN TEXT in this file; "
                "it is readable by your user account only.\n"
            )
        else:
            sys.stdout.write(f"Config file already exists at: {path}\n")
        return 0
    sys.stdout.write(describe_config(load_config(config_file)))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        if args.command == "config":
            return _run_config(args, args.config)

        config = load_config(args.config)
        runtime = RuntimeConfig()
        handlers = {
            "post": _run_post,
            "preview": _run_preview,
            "list": _run_list,
            "fetch": _run_fetch,
        }
        return handlers[args.command](args, config, runtime)
    except (CrossPosterError, OSError, UnicodeDecodeError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        sys.stderr.write(f"Error: {exc}\n")
        return 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
