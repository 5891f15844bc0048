from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models import Platform


def error_chain(exc: BaseException) -> List[str]:
    """Messages of ``exc`` and its causes, outermost first."""
    messages: List[str] = []
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        messages.append(str(current) or type(current).__name__)
        if current.__cause__ is not None or current.__suppress_context__:
            current = current.__cause__
        else:
            current = current.__context__
    return messages


@dataclass(slots=True)
class PublishOutcome:
    platform: Platform
    url: Optional[str] = None
    error: Optional[BaseException] = None
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_text(self) -> str:
        name = self.platform.display_name
        if self.error is not None:
            chain = error_chain(self.error)
            lines = [f"[FAILED] {name}: {chain[0]}"]
            lines.extend(f"    caused by: {msg}" for msg in chain[1:])
            return "\n".join(lines)
        if self.dry_run:
            return f"[DRY-RUN] {name}: validated, not published"
        return f"[OK] {name}: {self.url}"


@dataclass(slots=True)
class PublishReport:
    outcomes: List[PublishOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[PublishOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[PublishOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_text(self) -> str:
        lines = ["Publish Summary", ""]
        lines.extend(o.to_text() for o in self.outcomes)
        lines.append("")
        lines.append(f"Succeeded: {len(self.succeeded)}  Failed: {len(self.failed)}")
        return "\n".join(lines) + "\n"
