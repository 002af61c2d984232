# =============================================================================
# core/config.py  —  Runtime Settings
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the server's configuration ONCE at startup and freezes it into a
#   Settings value.  Components receive the pieces they need through their
#   constructors; nothing else in core/ reads os.environ.
#
# ENVIRONMENT VARIABLES (a .env file in the working directory is loaded first):
#   WEATHER_API_KEY   OpenWeatherMap key.  Missing/empty → demo mode.
#   DOCS_DIR          Documentation directory (default: <project>/docs).
#   WEATHER_API_URL   Provider endpoint (default: OpenWeatherMap current weather).
#   WEATHER_TIMEOUT   Seconds for the outbound call (default: network default).
#   LOG_LEVEL         DEBUG / INFO / WARNING ... (default: INFO).
# =============================================================================

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DOCS_DIR = PROJECT_ROOT / "docs"
DEFAULT_WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the server configuration."""

    docs_dir: Path = DEFAULT_DOCS_DIR
    weather_api_key: Optional[str] = None
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    weather_timeout: Optional[float] = None
    log_level: str = "INFO"

    @property
    def demo_mode(self) -> bool:
        return not self.weather_api_key


def settings_from_env(env: Mapping[str, str]) -> Settings:
    """Build Settings from an environment-style mapping.

    Blank values are treated as unset, so ``WEATHER_API_KEY=`` in a .env
    file still selects demo mode.
    """
    timeout = env.get("WEATHER_TIMEOUT", "").strip()
    try:
        weather_timeout = float(timeout) if timeout else None
    except ValueError:
        raise ValueError(f"WEATHER_TIMEOUT must be a number of seconds, got {timeout!r}") from None

    return Settings(
        docs_dir=Path(env.get("DOCS_DIR", "").strip() or DEFAULT_DOCS_DIR),
        weather_api_key=env.get("WEATHER_API_KEY", "").strip() or None,
        weather_api_url=env.get("WEATHER_API_URL", "").strip() or DEFAULT_WEATHER_API_URL,
        weather_timeout=weather_timeout,
        log_level=(env.get("LOG_LEVEL", "").strip() or "INFO").upper(),
    )


def load_settings() -> Settings:
    """Load .env (searched from the working directory up) into the process
    environment, then snapshot it.  Variables already set win over .env."""
    load_dotenv(find_dotenv(usecwd=True))
    return settings_from_env(os.environ)
