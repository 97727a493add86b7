"""
Settings — Default configuration values and the ServiceConfig value object.

This module provides the DEFAULT_SETTINGS dict used as fallback values when
environment variables are not set, plus load_config() which builds a
ServiceConfig from a .env file and the process environment.

Configuration precedence (highest to lowest):
  1. Explicit reconfiguration on the service handle (with_endpoint(), ...)
  2. Environment variables (optionally loaded from a .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  EBAY_IAF_TOKEN          OAuth user/application token sent as X-EBAY-API-IAF-TOKEN
  EBAY_SHOPPING_ENDPOINT  "production", "sandbox" or a full URL (e.g. a local test server)
  EBAY_SITE_ID            Numeric site id, see constants.SiteID (default: "0", eBay US)
  EBAY_TIMEOUT            Per-request timeout in seconds (default: 10)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    ENDPOINT_PRODUCTION,
    ENDPOINT_SANDBOX,
    SHOPPING_API_VERSION,
    SiteID,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "EBAY_IAF_TOKEN": "",
    "EBAY_SHOPPING_ENDPOINT": "production",
    "EBAY_SITE_ID": SiteID.US.value,
    "EBAY_TIMEOUT": 10.0,
}

ENDPOINT_ALIASES = {
    "production": ENDPOINT_PRODUCTION,
    "sandbox": ENDPOINT_SANDBOX,
}


@dataclass(frozen=True)
class ServiceConfig:
    """Transport settings shared by every request built from one service handle.

    Instances are immutable; the service replaces its config on reconfiguration,
    so requests that were already constructed keep the snapshot they were built with.

    Attributes:
        token: IAF token attached to every call.
        endpoint: Shopping API URL the requests are POSTed to.
        site_id: Marketplace the call targets.
        timeout: Per-request timeout in seconds.
        version: API version header value (fixed).
    """

    token: str = ""
    endpoint: str = ENDPOINT_PRODUCTION
    site_id: SiteID = SiteID.US
    timeout: float = 10.0
    version: str = SHOPPING_API_VERSION

    def __post_init__(self):
        # Accept raw strings like "77" but reject values outside the catalog
        object.__setattr__(self, "site_id", SiteID(self.site_id))

    def __repr__(self) -> str:
        token_state = "set" if self.token else "empty"
        return (
            f"ServiceConfig(endpoint={self.endpoint!r}, site_id={self.site_id.value!r}, "
            f"timeout={self.timeout!r}, version={self.version!r}, token={token_state})"
        )


def resolve_endpoint(value: str) -> str:
    """Map the "production" / "sandbox" keywords to URLs; anything else is a URL."""
    return ENDPOINT_ALIASES.get(value.strip().lower(), value.strip())


def load_config(env_file: Optional[str] = "./.env") -> ServiceConfig:
    """Build a ServiceConfig from a .env file and the process environment.

    Args:
        env_file: Path to a .env file. If the file exists it is loaded via
                  python-dotenv (without overriding variables that are already
                  set). Pass None to read the environment only.

    Returns:
        A ServiceConfig populated from the environment with DEFAULT_SETTINGS fallbacks.

    Raises:
        ValueError: If EBAY_SITE_ID is not a known site or EBAY_TIMEOUT is not a number.
    """
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug("Loaded configuration from: %s", env_file)
        else:
            logger.debug("%s not found, using defaults/environment", env_file)

    token = os.getenv("EBAY_IAF_TOKEN", DEFAULT_SETTINGS["EBAY_IAF_TOKEN"])
    endpoint = resolve_endpoint(
        os.getenv("EBAY_SHOPPING_ENDPOINT", DEFAULT_SETTINGS["EBAY_SHOPPING_ENDPOINT"])
    )
    site_id = os.getenv("EBAY_SITE_ID", DEFAULT_SETTINGS["EBAY_SITE_ID"])
    raw_timeout = os.getenv("EBAY_TIMEOUT", str(DEFAULT_SETTINGS["EBAY_TIMEOUT"]))

    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(f"EBAY_TIMEOUT must be a number of seconds, got {raw_timeout!r}")

    return ServiceConfig(token=token, endpoint=endpoint, site_id=site_id, timeout=timeout)
