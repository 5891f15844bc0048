from __future__ import annotations

from typing import Optional

import requests

from ..models import Platform
from ..utils.config_loader import Config
from ..utils.pipeline_config import RuntimeConfig
from .base import PlatformClient
from .devto import DevToClient
from .medium import MediumClient


def create_client(
    platform: Platform,
    config: Config,
    *,
    dry_run: bool = False,
    session: Optional[requests.Session] = None,
    runtime: Optional[RuntimeConfig] = None,
) -> PlatformClient:
    """Create the client for ``platform`` from the loaded configuration.

    Raises ``ConfigError`` when the platform's credentials are missing and
    ``dry_run`` is off.
    """
    if platform is Platform.DEVTO:
        return DevToClient(api_key=config.devto.api_key, session=session, runtime=runtime, dry_run=dry_run)
    if platform is Platform.MEDIUM:
        return MediumClient(
            access_token=config.medium.access_token,
            user_id=config.medium.user_id,
            username=config.medium.username,
            session=session,
            runtime=runtime,
            dry_run=dry_run,
        )

    raise ValueError(f"Unsupported platform '{platform}'")
