"""Configuration loaded from the process environment and optional .env files."""

import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from .providers.deepseek import DEEPSEEK_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger(__name__)

API_KEY_VAR = "DEEPSEEK_API_KEY"
DEFAULT_TIMEOUT_MS = 15000


def env_file_locations() -> List[str]:
    """Candidate .env paths, most specific first."""
    # 1. Directory of the main entry point
    main_dir = os.path.dirname(os.path.abspath(sys.argv[0]))
    # 2. Its parent (entry point inside a subdirectory)
    parent_dir = os.path.dirname(main_dir)
    # 3. Current working directory
    cwd = os.getcwd()
    # 4. Package directory
    package_dir = os.path.dirname(os.path.abspath(__file__))

    return [
        os.path.join(main_dir, ".env"),
        os.path.join(parent_dir, ".env"),
        os.path.join(cwd, ".env"),
        os.path.join(package_dir, ".env"),
    ]


def load_env_file() -> Optional[str]:
    """Load the first .env file found.

    Returns:
        The path that was loaded, or None if no file exists.
    """
    for env_path in env_file_locations():
        if os.path.exists(env_path):
            logger.info(f"Loading .env from {env_path}")
            load_dotenv(env_path)
            return env_path

    logger.info("No .env file found in expected locations")
    return None


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the chat core."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: str = DEEPSEEK_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_MS / 1000
    debug: bool = False

    @property
    def has_credential(self) -> bool:
        """A blank key counts as missing."""
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables.

        KINDERSCHUTZ_TIMEOUT is given in milliseconds.
        """
        api_key = os.getenv(API_KEY_VAR)
        if api_key and api_key.strip():
            logger.info(f"{API_KEY_VAR} found (length: {len(api_key)})")
        else:
            logger.warning(f"{API_KEY_VAR} missing or empty")

        raw_timeout = os.getenv("KINDERSCHUTZ_TIMEOUT", str(DEFAULT_TIMEOUT_MS))
        try:
            timeout = float(raw_timeout) / 1000
        except ValueError:
            logger.warning(f"Invalid KINDERSCHUTZ_TIMEOUT {raw_timeout!r}, using default")
            timeout = DEFAULT_TIMEOUT_MS / 1000
        if timeout <= 0:
            logger.warning(f"Non-positive KINDERSCHUTZ_TIMEOUT {raw_timeout!r}, using default")
            timeout = DEFAULT_TIMEOUT_MS / 1000

        return cls(
            api_key=api_key,
            model=os.getenv("KINDERSCHUTZ_MODEL") or DEFAULT_MODEL,
            base_url=os.getenv("KINDERSCHUTZ_BASE_URL") or DEEPSEEK_BASE_URL,
            timeout=timeout,
            debug=bool(os.getenv("KINDERSCHUTZ_DEBUG")),
        )
