"""
Logging configuration for the vacuum packaging controller.

Adds:
- Service-specific loggers with dedicated log files and formatters
- Env-driven log level selection via `LOG_LEVEL` / `LOG_LEVEL_<SERVICE>` and `set_log_level()`
- Standard operator markers for success/warn/failure (✅, ⚠️, ❌) with ASCII fallback
- Log rotation per service
"""
import logging
import logging.handlers
import os
import threading
from pathlib import Path
from typing import Dict, Optional

# Operator-facing log markers (emojis), with optional ASCII fallback via LOG_MARKERS_ASCII=true
ASCII_FALLBACK = os.getenv("LOG_MARKERS_ASCII", "false").lower() in {"1", "true", "yes"}
OK_MARK = "OK" if ASCII_FALLBACK else "✅"
WARN_MARK = "WARN" if ASCII_FALLBACK else "⚠️"
FAIL_MARK = "FAIL" if ASCII_FALLBACK else "❌"

LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

_service_loggers: Dict[str, logging.Logger] = {}
_logger_lock = threading.RLock()

# Service definitions with their log file names and default levels
SERVICE_CONFIGS = {
    "machine_control": {"file": "machine_control.log", "level": "INFO"},
    "process_flow": {"file": "process_flow.log", "level": "INFO"},
    "step_flow": {"file": "step_flow.log", "level": "INFO"},
    "validation": {"file": "validation.log", "level": "INFO"},
}

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def _get_log_level_from_env(level_str: Optional[str] = None) -> int:
    """Map LOG_LEVEL env var to logging level."""
    if level_str is None:
        level_str = os.getenv("LOG_LEVEL", "INFO")
    return _LEVELS.get(level_str.upper(), logging.INFO)


def _safe_int_env(key: str, default: int, minimum: int) -> int:
    try:
        value = int(os.getenv(key, str(default)))
    except (ValueError, TypeError):
        return default
    return value if value >= minimum else default


def _create_service_logger(service_name: str, config: dict) -> logging.Logger:
    """Create a service-specific logger with its own file handler and rotation."""
    logger = logging.getLogger(f"vacpack.{service_name}")

    if logger.handlers:
        return logger

    level_str = os.getenv(
        f"LOG_LEVEL_{service_name.upper()}",
        os.getenv("LOG_LEVEL", config.get("level", "INFO")),
    )
    level = _get_log_level_from_env(level_str)
    logger.setLevel(level)

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    formatter = logging.Formatter(
        f"%(asctime)s - [{service_name.upper()}] - %(levelname)s - %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        LOG_DIR / config["file"],
        maxBytes=_safe_int_env(f"LOG_MAX_BYTES_{service_name.upper()}", 10485760, 1),
        backupCount=_safe_int_env(f"LOG_BACKUP_COUNT_{service_name.upper()}", 5, 0),
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)
    logger.addHandler(file_handler)

    return logger


def get_service_logger(service_name: str) -> logging.Logger:
    """Get or create a service-specific logger (thread-safe)."""
    with _logger_lock:
        if service_name in _service_loggers:
            return _service_loggers[service_name]

        if service_name not in SERVICE_CONFIGS:
            # Unknown services get a plain logger that propagates to the root
            logger = logging.getLogger(f"vacpack.{service_name}")
        else:
            logger = _create_service_logger(service_name, SERVICE_CONFIGS[service_name])
        _service_loggers[service_name] = logger
        return logger


def set_log_level(level_str: str, service_name: Optional[str] = None) -> None:
    """Adjust log level at runtime for one service or all of them (thread-safe)."""
    level = _get_log_level_from_env(level_str)

    with _logger_lock:
        if service_name:
            targets = [_service_loggers[service_name]] if service_name in _service_loggers else []
        else:
            targets = list(_service_loggers.values())

        for logger in targets:
            logger.setLevel(level)
            for h in logger.handlers:
                h.setLevel(level)


def list_service_loggers() -> Dict[str, str]:
    """List all created service loggers and their current levels (thread-safe)."""
    with _logger_lock:
        return {
            service: logging.getLevelName(logger.level)
            for service, logger in _service_loggers.items()
        }


def get_process_flow_logger() -> logging.Logger:
    """Get the process flow logger."""
    return get_service_logger("process_flow")


def get_step_flow_logger() -> logging.Logger:
    """Get the step flow logger."""
    return get_service_logger("step_flow")


def get_validation_logger() -> logging.Logger:
    """Get the settings validation logger."""
    return get_service_logger("validation")


# Default logger instance
logger = get_service_logger("machine_control")
