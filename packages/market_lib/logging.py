# packages/market_lib/logging.py

import sys
from pathlib import Path
from loguru import logger as _logger  # Aliased to avoid conflict

DEFAULT_APP_NAME = "cryptostats"


class LogManager:
    # Pass 'debug' flag directly to decouple from settings
    def __init__(self, service_name: str, debug: bool = False, log_dir: Path | None = None):
        self.service_name = service_name
        self.debug = debug
        self.log_dir = log_dir or Path(__file__).resolve().parents[2] / "logs"
        self._configure()

    def _configure(self):
        _logger.remove()

        self.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = self.log_dir / f"{self.service_name}.json.log"

        # Library code may log before anything binds a context
        _logger.configure(extra={"app": DEFAULT_APP_NAME, "context": "-"})

        # Console Handler
        _logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[context]}</cyan> | <level>{message}</level>",
            level="DEBUG" if self.debug else "INFO",
            colorize=True,
        )

        # File Handler (uses the passed-in debug flag)
        _logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            level="DEBUG" if self.debug else "INFO",
            serialize=True,
            enqueue=True,
        )

    def get_logger(self, context_name: str):
        return _logger.bind(app=self.service_name, context=context_name)


def get_logger(context_name: str):
    """Bound logger for library code that was not handed one by its caller."""
    return _logger.bind(app=DEFAULT_APP_NAME, context=context_name)
