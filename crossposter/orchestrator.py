from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .errors import CrossPosterError
from .models import Article, ContentFormat, Platform
from .output.report import PublishOutcome, PublishReport
from .platforms.base import PlatformClient
from .processors import (
    clean_ai_artifacts,
    is_devto_url,
    parse_devto_url,
    parse_markdown,
    sanitize_for_platform,
    truncate_tags_to_limit,
)
from .utils.logging import get_logger

logger = get_logger("crossposter.orchestrator")

ClientProvider = Callable[[Platform], PlatformClient]


class Orchestrator:
    """Runs one article through the pipeline and publishes it per platform.

    ``client_for`` is called lazily, once per platform, so a platform with
    missing credentials fails on its own without affecting the others.
    """

    def __init__(
        self,
        client_for: ClientProvider,
        *,
        clean_ai: bool = False,
        tag_overrides: Optional[Sequence[str]] = None,
        canonical_url: Optional[str] = None,
        truncate_tags: bool = False,
        content_format: ContentFormat = ContentFormat.MARKDOWN,
        dry_run: bool = False,
        max_workers: int = 4,
    ) -> None:
        self._client_for = client_for
        self._clients: Dict[Platform, PlatformClient] = {}
        self.clean_ai = clean_ai
        self.tag_overrides = list(tag_overrides) if tag_overrides is not None else None
        self.canonical_url = canonical_url
        self.truncate_tags = truncate_tags
        self.content_format = content_format
        self.dry_run = dry_run
        self.max_workers = max_workers

    def client(self, platform: Platform) -> PlatformClient:
        if platform not in self._clients:
            self._clients[platform] = self._client_for(platform)
        return self._clients[platform]

    def load_article(self, source: str) -> Article:
        """Build the article from a dev.to URL or a local markdown file."""
        if is_devto_url(source):
            article_id = parse_devto_url(source)
            logger.info("Fetching dev.to article %s", article_id)
            article = self.client(Platform.DEVTO).fetch_article(article_id)
            if self.clean_ai:
                article.title = clean_ai_artifacts(article.title)
                article.content = clean_ai_artifacts(article.content)
                if article.description:
                    article.description = clean_ai_artifacts(article.description)
            return article

        path = Path(source)
        logger.info("Reading article from %s", path)
        document = path.read_text(encoding="utf-8")
        if self.clean_ai:
            document = clean_ai_artifacts(document)
        return parse_markdown(document)

    def apply_overrides(self, article: Article) -> Article:
        if self.tag_overrides is not None:
            article.tags = list(self.tag_overrides)
        if self.canonical_url:
            article.canonical_url = self.canonical_url
        return article

    def prepare(self, source: str) -> Article:
        return self.apply_overrides(self.load_article(source))

    def publish_to(self, article: Article, platform: Platform) -> Optional[str]:
        """Sanitize a private copy of ``article`` for ``platform`` and publish it."""
        candidate = article.copy()
        if self.truncate_tags:
            truncate_tags_to_limit(candidate, platform)
        sanitize_for_platform(candidate, platform)
        return self.client(platform).publish_article(candidate, self.content_format)

    def run(self, source: str, platforms: Iterable[Platform]) -> PublishReport:
        targets: List[Platform] = list(dict.fromkeys(platforms))
        if not targets:
            return PublishReport()

        try:
            article = self.prepare(source)
        except (CrossPosterError, OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to prepare %s: %s", source, exc)
            return PublishReport([PublishOutcome(platform=p, error=exc) for p in targets])

        logger.info("Publishing '%s' to %s", article.title, ", ".join(p.display_name for p in targets))
        outcomes: Dict[Platform, PublishOutcome] = {}
        runnable: List[Platform] = []
        # Clients are created here, before any worker thread touches the cache
        for p in targets:
            try:
                self.client(p)
            except CrossPosterError as exc:
                logger.error("Cannot publish to %s: %s", p.display_name, exc)
                outcomes[p] = PublishOutcome(platform=p, error=exc)
            else:
                runnable.append(p)

        if runnable:
            workers = max(1, min(self.max_workers, len(runnable)))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_map = {executor.submit(self.publish_to, article, p): p for p in runnable}
                for fut in as_completed(future_map):
                    p = future_map[fut]
                    try:
                        url = fut.result()
                        outcomes[p] = PublishOutcome(platform=p, url=url, dry_run=self.dry_run)
                    except CrossPosterError as exc:
                        logger.error("Publishing to %s failed: %s", p.display_name, exc)
                        outcomes[p] = PublishOutcome(platform=p, error=exc)
                    except Exception as exc:  # noqa: BLE001 - one platform must not abort the others
                        logger.exception("Unexpected error publishing to %s: %s", p.display_name, exc)
                        outcomes[p] = PublishOutcome(platform=p, error=exc)

        report = PublishReport([outcomes[p] for p in targets])
        logger.info(
            "Publishing finished: succeeded=%d, failed=%d",
            len(report.succeeded),
            len(report.failed),
        )
        return report
