from __future__ import annotations

import os
from dataclasses import dataclass, field


# Read when an instance is created, after main() has loaded .env
@dataclass(slots=True)
class RuntimeConfig:
    http_timeout: float = field(default_factory=lambda: float(os.getenv("CROSSPOSTER_HTTP_TIMEOUT", "30")))
    max_workers: int = field(default_factory=lambda: int(os.getenv("CROSSPOSTER_MAX_WORKERS", "4")))
    user_agent: str = field(
        default_factory=lambda: os.getenv("CROSSPOSTER_USER_AGENT", "article-crossposter/0.1.0")
    )
