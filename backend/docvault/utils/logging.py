# backend/docvault/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_DIR = settings.LOG_PATH

# Colour for the console, plain text for files
console_formatter = logging.Formatter(
    '\033[1;36m%(asctime)s\033[0m - \033[1;33m%(name)s\033[0m - \033[1;35m%(levelname)s\033[0m [\033[1;34m%(module)s:%(lineno)d\033[0m] - %(message)s'
)
file_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)


class DocVaultLogger:
    """Component logger that keeps caller-supplied extras off reserved LogRecord attributes"""

    reserved_attrs = frozenset({
        'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
        'funcName', 'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'message', 'msg', 'name', 'pathname', 'process', 'processName',
        'relativeCreated', 'stack_info', 'thread', 'threadName', 'taskName'
    })

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"docvault.{name}")
        self.logger.setLevel(settings.LOG_LEVEL.upper())
        self.setup_handlers(name)

    def setup_handlers(self, name: str):
        if self.logger.handlers:
            return

        file_handler = RotatingFileHandler(
            LOG_DIR / f"{name}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

    def _sanitize_extra(self, extra):
        if extra is None:
            return None
        return {
            (f"extra_{key}" if key in self.reserved_attrs else key): value
            for key, value in extra.items()
        }

    def debug(self, msg, extra=None, exc_info=None):
        self.logger.debug(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self.logger.info(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self.logger.warning(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self.logger.error(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self.logger.critical(msg, extra=self._sanitize_extra(extra), exc_info=exc_info)

# Create loggers for different components
api_logger = DocVaultLogger("api")
db_logger = DocVaultLogger("database")
service_logger = DocVaultLogger("service")
auth_logger = DocVaultLogger("auth")

__all__ = ["DocVaultLogger", "api_logger", "db_logger", "service_logger", "auth_logger"]
