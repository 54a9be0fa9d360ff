"""OPNsense MCP Logger - Cross-platform, self-cleaning logging utility."""

import logging
import platform
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from opnmcp.core.config import settings


class OPNMCPLogger:
    """
    Cross-platform logging utility.

    Features:
    - Console output on stderr (stdout carries the MCP stdio stream)
    - Cross-platform log directory handling
    - Self-cleaning with size-based rotation
    """

    def __init__(self, name: str = "opnmcp"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        self._setup_handlers()

    def _get_log_dir(self) -> Path:
        """Cross-platform log directory discovery."""
        if platform.system() == "Windows":
            # Windows: %LOCALAPPDATA%\opnmcp\logs
            base_dir = Path.home() / "AppData/Local/opnmcp"
        else:
            # Linux/macOS: XDG state directory
            base_dir = Path.home() / ".local/state/opnmcp"

        log_dir = base_dir / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    def _setup_handlers(self):
        """Set up console and rotating file handlers."""
        # Prevent double logging if handlers already exist
        if self.logger.handlers:
            return

        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        # 1. Console Handler (stderr, never stdout)
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
        self.logger.addHandler(console_handler)

        # 2. Rotating File Handler
        try:
            log_file = self._get_log_dir() / "server.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)  # File gets more detail
            self.logger.addHandler(file_handler)
        except (OSError, PermissionError) as e:
            # If file logging fails, continue with console only
            self.logger.warning(f"Could not set up file logging: {e}")
            self.logger.info("Continuing with console logging only")


def set_console_level(level: str) -> None:
    """Change the console handler level (used by the CLI --log-level flag)."""
    numeric = getattr(logging, level.upper(), logging.INFO)
    for handler in logger.handlers:
        if not isinstance(handler, RotatingFileHandler):
            handler.setLevel(numeric)


# Global instance - use this logger or a child of it (opnmcp.<area>)
logger = OPNMCPLogger().logger
