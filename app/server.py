"""Process-lifetime server bootstrap.

Owns the uvicorn server and the listening port. The application itself is
built by `app.main.create_app()` and knows nothing about either.
"""

import uvicorn
from fastapi import FastAPI

from app.core.config import Config, get_config
from app.core.logging import get_logger

logger = get_logger(__name__)


class UploadRelayServer:
    """Run the relay under uvicorn with explicit start/stop.

    Example:
        >>> server = UploadRelayServer()
        >>> server.start()  # blocks until stop() is called or a signal arrives
    """

    def __init__(self, app: FastAPI | None = None, config: Config | None = None) -> None:
        """Initialize the server.

        Args:
            app: ASGI application, defaults to app.main.app
            config: Settings providing host and port
        """
        if app is None:
            from app.main import app as default_app

            app = default_app

        self.config = config or get_config()
        self._server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=self.config.host,
                port=self.config.port,
                log_config=None,
            )
        )

    @property
    def started(self) -> bool:
        """Whether uvicorn has finished starting up."""
        return self._server.started

    def start(self) -> None:
        """Serve until stop() is called."""
        logger.info("Upload relay listening", host=self.config.host, port=self.config.port)
        self._server.run()

    def stop(self) -> None:
        """Ask the running server to shut down."""
        logger.info("Stopping upload relay")
        self._server.should_exit = True


def run() -> None:
    """Start the relay on the configured port."""
    UploadRelayServer().start()


__all__ = ["UploadRelayServer", "run"]
