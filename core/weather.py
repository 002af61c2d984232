# =============================================================================
# core/weather.py  —  Weather Gateway
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Answers "what's the weather in <city>?" as text, either from fixed
#   placeholder data or from the OpenWeatherMap current-weather endpoint.
#
# DATA SOURCE TOGGLE:
#   The gateway is constructed with the provider credential.  No key means
#   DEMO MODE: the same placeholder observation every time, plus setup
#   instructions, and zero network calls.  With a key it is LIVE MODE.
#
# LIVE MODE, STEP BY STEP:
#   1. One GET to  <api_url>?q=<city, url-encoded>&appid=<key>&units=metric
#   2. 404            → guidance on how to phrase the location
#   3. other non-2xx  → GatewayError(status) → "Error fetching weather ..."
#   4. DNS / timeout / reset / bad JSON → "Error fetching weather ..."
#   5. 2xx            → WeatherObservation → formatted text
#
#   get_weather() never raises.  Every failure ends up as text for the caller.
#   No retries, no caching.  The timeout is the network default unless one is
#   configured explicitly.
# =============================================================================

import json
import logging
import math
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Optional

from core.config import DEFAULT_WEATHER_API_URL
from core.errors import GatewayError
from core.models import WeatherObservation

logger = logging.getLogger(__name__)

SIGNUP_URL = "https://openweathermap.org/api"

# Placeholder returned in demo mode, whatever the city.
DEMO_OBSERVATION = WeatherObservation(
    city="",
    country="",
    temperature_c=16,
    description="Partly cloudy",
    humidity_pct=72,
    wind_speed_ms=2.1,
    pressure_hpa=1013,
)


# =============================================================================
# Message constructors
# =============================================================================
# All caller-facing text lives here so tests can check structure (which
# lines, which values) without depending on the surrounding prose.
# =============================================================================
def observation_lines(observation: WeatherObservation) -> list[str]:
    """The bullet lines describing an observation."""
    lines = [
        f"- Temperature: {observation.temperature_c}°C",
        f"- Condition: {observation.description}",
        f"- Humidity: {observation.humidity_pct}%",
        f"- Wind: {observation.wind_speed_ms} m/s",
    ]
    if observation.pressure_hpa is not None:
        lines.append(f"- Pressure: {observation.pressure_hpa} hPa")
    return lines


def current_weather_message(observation: WeatherObservation) -> str:
    header = f"Current weather in {observation.city}, {observation.country}:"
    return "\n".join([header, *observation_lines(observation)])


def setup_required_message(city: str) -> str:
    return "\n".join([
        "🌤️ Weather Service Setup Required",
        "",
        f"To get live weather data for {city}, I need an OpenWeatherMap API key.",
        "",
        "**Quick Setup:**",
        f"1. Get a free API key: {SIGNUP_URL}",
        "2. Set WEATHER_API_KEY in the server's environment (or in a .env file",
        "   next to the server) or pass it through your MCP client configuration",
        "3. Restart the server",
        "",
        f"**For demo purposes, here's sample weather data for {city}:**",
        *observation_lines(DEMO_OBSERVATION),
        "",
        "*This is simulated data. Set up your API key for real-time weather!* 🔑",
    ])


def location_not_found_message(city: str) -> str:
    return "\n".join([
        f'Could not find weather data for "{city}".',
        "",
        "**Tips for better results:**",
        '- Use full city names: "Madison, Wisconsin" instead of "Madison, WI"',
        '- Include country: "Amsterdam, NL" or "Brussels, BE"',
        '- For US cities: "City, State, US" (e.g., "Madison, Wisconsin, US")',
        "- Avoid state abbreviations like WI, CA, NY - use full names",
        "",
        "Try rephrasing your query with the full location name!",
    ])


def fetch_failed_message(city: str, reason: str) -> str:
    return f"Error fetching weather for {city}: {reason}"


# =============================================================================
# Payload normalization
# =============================================================================
def _round_half_up(value: float) -> int:
    """Nearest whole number, halves rounded up (11.5 → 12, -0.5 → 0)."""
    # Compare the fraction directly: value + 0.5 can itself round up to the
    # next integer (0.49999999999999994 + 0.5 == 1.0).
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def parse_observation(payload: dict) -> WeatherObservation:
    """Normalize an OpenWeatherMap current-weather payload.

    Raises KeyError/IndexError/TypeError when a required field is missing.
    """
    return WeatherObservation(
        city=payload["name"],
        country=payload["sys"]["country"],
        temperature_c=_round_half_up(payload["main"]["temp"]),
        description=payload["weather"][0]["description"],
        humidity_pct=payload["main"]["humidity"],
        wind_speed_ms=payload["wind"]["speed"],
    )


@dataclass(frozen=True)
class WeatherReport:
    """What get_weather hands back: caller-facing text, plus the observation
    it describes when there is one (demo placeholder or live data)."""

    text: str
    observation: Optional[WeatherObservation] = None
    demo: bool = False


class WeatherGateway:
    """Current-weather lookups with demo-mode fallback."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: str = DEFAULT_WEATHER_API_URL,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or None
        self.api_url = api_url
        self.timeout = timeout

    @property
    def demo_mode(self) -> bool:
        return self.api_key is None

    def get_weather(self, city: str) -> WeatherReport:
        """Return a weather report (or guidance) for ``city``."""
        if self.demo_mode:
            logger.info("No weather API key configured; returning demo data for %r", city)
            return WeatherReport(setup_required_message(city), DEMO_OBSERVATION, demo=True)

        try:
            payload = self._fetch(city)
            if payload is None:
                return WeatherReport(location_not_found_message(city))
            observation = parse_observation(payload)
        except GatewayError as exc:
            logger.warning("Weather provider returned HTTP %d for %r", exc.status, city)
            return WeatherReport(fetch_failed_message(city, str(exc)))
        except urllib.error.URLError as exc:
            logger.warning("Weather request for %r failed: %s", city, exc.reason)
            return WeatherReport(fetch_failed_message(city, str(exc.reason)))
        except OSError as exc:
            # Timeouts and connection resets surface as bare OSErrors.
            logger.warning("Weather request for %r failed: %s", city, exc)
            return WeatherReport(fetch_failed_message(city, str(exc) or type(exc).__name__))
        except ValueError as exc:
            logger.warning("Weather provider sent invalid JSON for %r", city)
            return WeatherReport(fetch_failed_message(city, f"invalid response from weather provider ({exc})"))
        except (KeyError, IndexError, TypeError) as exc:
            logger.warning("Weather provider payload for %r is missing %s", city, exc)
            return WeatherReport(fetch_failed_message(city, "unexpected response from weather provider"))

        return WeatherReport(current_weather_message(observation), observation)

    def build_url(self, city: str) -> str:
        query = urllib.parse.urlencode(
            {"q": city, "appid": self.api_key, "units": "metric"},
            quote_via=urllib.parse.quote,
        )
        return f"{self.api_url}?{query}"

    def _fetch(self, city: str) -> Optional[dict]:
        """Issue the single outbound request.

        Returns the decoded payload, or None when the provider answers 404.
        """
        request = urllib.request.Request(self.build_url(city), headers={"Accept": "application/json"})
        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            with urllib.request.urlopen(request, **kwargs) as response:
                body = response.read()
        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                logger.info("Weather provider has no match for %r", city)
                return None
            raise GatewayError(exc.code) from exc

        return json.loads(body.decode("utf-8"))
