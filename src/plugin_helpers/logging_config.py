"""
Centralized logging configuration for code embedding the helpers.

The helpers themselves only emit records through module-level loggers; this
module wires those records to handlers:
- Console output on stdout
- Optional file output to logs/{service_name}.log (fresh file on each start)
- DEBUG level only while the PLUGIN_HELPERS_DEBUG flag is set

Handlers installed by the embedding application are left in place; only the
handlers added here are replaced on reconfiguration.
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import List, Optional

from plugin_helpers.input_sources import InputType
from plugin_helpers.validation import validate_boolean_input, validate_string_input

DEBUG_FLAG_ENV = "PLUGIN_HELPERS_DEBUG"
LOG_DIR_ENV = "PLUGIN_HELPERS_LOG_DIR"
LOG_APPEND_ENV = "PLUGIN_HELPERS_LOG_APPEND"

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_TECHNICAL_FORMAT = "%(asctime)s%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_OWNER_ATTRIBUTE = "_plugin_helpers_handler"


def debug_enabled() -> bool:
    """Return True when debug diagnostics were requested through the environment."""
    return validate_boolean_input(InputType.ENV, DEBUG_FLAG_ENV, False)


def owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    """Return the handlers on *logger* that setup_logging installed."""
    return [handler for handler in logger.handlers if getattr(handler, _OWNER_ATTRIBUTE, False)]


def _mark_owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNER_ATTRIBUTE, True)
    return handler


def _remove_owned_handlers(logger: logging.Logger) -> None:
    """Detach and close the handlers we installed, logging any close errors."""
    for handler in owned_handlers(logger):
        logger.removeHandler(handler)
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)


def _should_skip_logging_configuration(root_logger: logging.Logger, service_name: Optional[str]) -> bool:
    handlers = owned_handlers(root_logger)
    if not handlers:
        return False

    has_console = any(not isinstance(handler, logging.FileHandler) for handler in handlers)
    if not service_name:
        has_file = True
    else:
        has_file = any(isinstance(handler, logging.FileHandler) for handler in handlers)
    return has_console and has_file


def _build_console_handler(user_friendly: bool, debug: bool) -> logging.Handler:
    if user_friendly:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    if user_friendly and not debug:
        console_handler.setLevel(logging.WARNING)
    else:
        console_handler.setLevel(logging.DEBUG)

    return _mark_owned(console_handler)


def _resolve_logs_dir(logs_dir: Optional[Path]) -> Path:
    if logs_dir is not None:
        return logs_dir
    configured = validate_string_input(InputType.ENV, LOG_DIR_ENV).strip()
    return Path(configured).expanduser() if configured else Path.cwd() / "logs"


def _configure_file_handler(service_name: Optional[str], logs_dir: Path) -> Optional[logging.Handler]:
    if not service_name:
        return None

    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if validate_boolean_input(InputType.ENV, LOG_APPEND_ENV, False) else "w"

    file_handler = logging.handlers.WatchedFileHandler(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_TECHNICAL_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.DEBUG)
    return _mark_owned(file_handler)


def setup_logging(service_name: Optional[str] = None, user_friendly: bool = False, logs_dir: Optional[Path] = None):
    """Configure logging for the application"""

    with _config_lock:
        root_logger = logging.getLogger()

        if _should_skip_logging_configuration(root_logger, service_name):
            return

        _remove_owned_handlers(root_logger)

        debug = debug_enabled()
        root_logger.addHandler(_build_console_handler(user_friendly, debug))

        file_handler = _configure_file_handler(service_name, _resolve_logs_dir(logs_dir))
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)


__all__ = ["DEBUG_FLAG_ENV", "LOG_APPEND_ENV", "LOG_DIR_ENV", "debug_enabled", "owned_handlers", "setup_logging"]
