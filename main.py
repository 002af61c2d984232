# =============================================================================
# main.py  —  Entry Point for the Docs MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py            (or the installed `docs-mcp-server` command)
#
# WHAT HAPPENS:
#   1. Settings are read once: .env first, then the process environment
#   2. Logging is pointed at stderr
#   3. The core components are built from those settings
#   4. The MCP server is bound to stdin/stdout and runs until the client
#      disconnects
#   5. Any error that escapes the server loop is logged and the process
#      exits with status 1
#
# MCP CLIENT CONFIGURATION (e.g. .vscode/mcp.json):
#   {
#     "servers": {
#       "docs": {
#         "command": "python",
#         "args": ["main.py"],
#         "env": { "WEATHER_API_KEY": "${input:weatherApiKey}" }
#       }
#     }
#   }
# =============================================================================

import logging
import sys

import anyio

from core.config import Settings, load_settings
from core.documents import DocumentStore
from core.weather import WeatherGateway
from tools.dispatcher import Dispatcher
from tools.mcp_server import configure_logging, create_server, serve

logger = logging.getLogger("docs_mcp")


def build_dispatcher(settings: Settings) -> Dispatcher:
    """Wire the core components together from ``settings``."""
    store = DocumentStore(settings.docs_dir)
    weather = WeatherGateway(
        api_key=settings.weather_api_key,
        api_url=settings.weather_api_url,
        timeout=settings.weather_timeout,
    )
    return Dispatcher(store=store, weather=weather)


def main() -> None:
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        if settings.demo_mode:
            logger.info("WEATHER_API_KEY not set; get_weather will return demo data")
        server = create_server(build_dispatcher(settings))
        anyio.run(serve, server)
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.error("Server error: %s", exc, exc_info=True)
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
