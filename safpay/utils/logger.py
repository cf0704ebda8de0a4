"""
Logging Configuration
Centralized logging setup for the payment gateway
"""

import logging
import os
import sys
import time
from logging.handlers import RotatingFileHandler


def _log_dir() -> str:
    return os.getenv('LOG_DIR', 'logs')


def _ensure_log_dir(log_dir: str) -> bool:
    if os.path.exists(log_dir):
        return True
    try:
        os.makedirs(log_dir)
    except OSError:
        return False
    return True


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        # Console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)

        # File handler (if logs directory exists or can be created)
        log_dir = _log_dir()
        if _ensure_log_dir(log_dir):
            file_handler = RotatingFileHandler(
                os.path.join(log_dir, 'payment-gateway.log'),
                maxBytes=10485760,  # 10MB
                backupCount=10
            )
            file_handler.setLevel(logging.INFO)

            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        console_formatter = logging.Formatter(
            '%(levelname)s - %(name)s - %(message)s'
        )
        console_handler.setFormatter(console_formatter)

        logger.addHandler(console_handler)

    return logger


class RequestLogger:
    """Middleware to log all requests as 'METHOD URL STATUS N.NN ms'"""

    def __init__(self, app=None):
        self.app = app
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialize request logging"""

        @app.before_request
        def start_timer():
            from flask import g
            g.request_started_at = time.perf_counter()

        @app.after_request
        def log_response(response):
            from flask import g, request
            started = g.get('request_started_at')
            elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
            get_logger('request').info(
                '%s %s %s %.2f ms',
                request.method,
                request.full_path.rstrip('?'),
                response.status_code,
                elapsed_ms,
            )
            return response
