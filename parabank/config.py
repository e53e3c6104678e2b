"""Shared configuration for the ParaBank suite.

Every value can be overridden from the environment:

- PARABANK_BASE_URL: site origin (default https://parabank.parasoft.com)
- PARABANK_HEADLESS: run Chrome headless ("true"/"1")
- PARABANK_TIMEOUT: HTTP and element-wait timeout in seconds
- PARABANK_INTERCEPT_TIMEOUT: how long to wait for an intercepted response
- PARABANK_TRANSACTION_TIMEOUT_MS: server-side timeout for transaction search
- PARABANK_PASSWORD: password used for generated users
- PARABANK_ARTIFACTS_DIR: where failure screenshots and HTML are written
"""
from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urljoin


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"true", "1", "yes"}


class ParaBankConfig:
    """Configuration loaded from the process environment."""

    def __init__(self) -> None:
        self.base_url: str = os.getenv("PARABANK_BASE_URL", "https://parabank.parasoft.com").rstrip("/")
        self.headless: bool = _env_bool("PARABANK_HEADLESS", "true")
        self.timeout: float = float(os.getenv("PARABANK_TIMEOUT", "30"))
        self.intercept_timeout: float = float(os.getenv("PARABANK_INTERCEPT_TIMEOUT", "30"))
        self.transaction_timeout_ms: int = int(os.getenv("PARABANK_TRANSACTION_TIMEOUT_MS", "30000"))
        self.default_password: str = os.getenv("PARABANK_PASSWORD", "Password123")
        self.artifacts_dir: Path = Path(os.getenv("PARABANK_ARTIFACTS_DIR", "test-results"))

    @property
    def site_url(self) -> str:
        return f"{self.base_url}/parabank"

    @property
    def rest_url(self) -> str:
        """Root of the JSON services consumed by the HTTP probe."""
        return f"{self.site_url}/services/bank"

    def url(self, path: str) -> str:
        """Absolute URL for a page under the ParaBank site, e.g. ``url("register.htm")``."""
        return urljoin(self.site_url + "/", path.lstrip("/"))


settings = ParaBankConfig()
