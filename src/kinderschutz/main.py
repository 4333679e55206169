"""
Stdio host for the KinderSchutz chat core.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional

from . import __version__
from .client import RemoteCompletionClient
from .config import Settings, load_env_file
from .json_rpc import InvalidParamsError, JsonRpcServer
from .models import Turn
from .providers import DeepSeekProvider
from .resolver import ResponseResolver
from .services.cache import PatternCache

logger = logging.getLogger(__name__)

SERVER_NAME = "kinderschutz-chat"


def build_resolver(settings: Settings) -> ResponseResolver:
    """Wire provider, client, cache and resolver for one process."""
    provider = DeepSeekProvider(
        api_key=settings.api_key or "",
        model=settings.model,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
    client = RemoteCompletionClient(provider, timeout=settings.timeout)
    return ResponseResolver(client=client, cache=PatternCache(max_size=100))


def parse_history(raw: Any) -> List[Turn]:
    """Convert a wire-format message history into Turns."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidParamsError("messageHistory must be a list")

    turns = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise InvalidParamsError(f"messageHistory[{index}] must be an object")
        try:
            turns.append(Turn.from_dict(item))
        except ValueError as e:
            raise InvalidParamsError(f"messageHistory[{index}]: {e}")
    return turns


class KinderSchutzServer:
    """JSON-RPC host exposing the response resolver."""

    def __init__(self, settings: Optional[Settings] = None, server: Optional[JsonRpcServer] = None):
        if settings is None:
            load_env_file()
            settings = Settings.from_env()
        self.settings = settings
        self.resolver = build_resolver(settings)

        self.server = server or JsonRpcServer(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up JSON-RPC handlers."""
        self.server.register_handler("initialize", self.handle_initialize)
        self.server.register_handler("chat/send", self.handle_chat_send)
        self.server.register_handler("chat/stats", self.handle_stats)

    def handle_initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Handle initialization request."""
        # Reload environment variables in case they changed
        load_env_file()
        settings = Settings.from_env()
        if settings != self.settings:
            logger.info("Settings changed, rebuilding resolver")
            self.resolver.client.close()
            self.settings = settings
            self.resolver = build_resolver(settings)

        return {
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "model": self.settings.model,
            "credentialConfigured": self.settings.has_credential,
        }

    def handle_chat_send(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Resolve one user message.

        Params:
            message: The user's message (required, non-blank).
            messageHistory: Earlier turns as [{"sender", "text", "isError"?}].
        """
        message = params.get("message")
        if not isinstance(message, str) or not message.strip():
            raise InvalidParamsError("Message is required")

        history = parse_history(params.get("messageHistory"))
        result = self.resolver.resolve_with_origin(message, history)
        return {"response": result.text, "source": result.origin.value}

    def handle_stats(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self.resolver.get_stats()

    def run(self):
        """Run the stdio server."""
        logger.info(f"Starting KinderSchutz chat server v{__version__}")
        try:
            self.server.run()
        finally:
            self.resolver.client.close()


def configure_logging(debug: bool = False) -> str:
    """Log to stderr and a rotating file; returns the log file path."""
    log_dir = os.path.expanduser("~/.kinderschutz/logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "kinderschutz-chat.log")

    handlers: list[logging.Handler] = [
        logging.StreamHandler(sys.stderr),
        RotatingFileHandler(
            log_file,
            mode="a",
            encoding="utf-8",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        ),
    ]

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return log_file


def main():
    """Main entry point."""
    log_file = configure_logging(debug=bool(os.getenv("KINDERSCHUTZ_DEBUG")))
    logger.info(f"Logging to file: {log_file}")

    try:
        server = KinderSchutzServer()
        server.run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
