"""
pixelcart logging

Per-module loggers with a single global configuration. Frame-level tracing
(one line per entity per frame) is available at TRACE level and is off by
default; it is far too chatty for a 30 FPS loop otherwise.

Usage:
    from pixelcart.logging import get_logger

    log = get_logger('cart')
    log.info("Cart loaded: %s", name)
    log.frame(frame, "enemy at %.1f", x)   # TRACE, only when frame tracing is on

Configuration:
    Environment variables:
        PIXELCART_LOG_LEVEL=DEBUG        # Global default level
        PIXELCART_LOG_CART=TRACE         # Module-specific level
        PIXELCART_LOG_FRAMES=1           # Enable per-frame tracing

    Or programmatically:
        from pixelcart.logging import configure_logging
        configure_logging(level='DEBUG', modules={'renderer': 'INFO'})
"""

import os
import sys
from enum import IntEnum
from functools import lru_cache
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Even more verbose than DEBUG
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100      # Disable logging


_ENV_PREFIX = 'PIXELCART_LOG_'

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'frames': False,         # Per-frame entity tracing
}


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.upper(), LogLevel.INFO)


def _format_message(module: str, level: str, msg: str) -> str:
    """Format a log message."""
    return f"[{module}] {level}: {msg}"


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    frames: bool = False,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
        frames: Enable per-frame entity tracing
    """
    _config['default_level'] = _level_from_string(level)

    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod] = _level_from_string(mod_level)

    _config['frames'] = frames


def _load_env_config() -> None:
    """Load configuration from environment variables.

    PIXELCART_LOG_LEVEL sets the default, PIXELCART_LOG_FRAMES toggles frame
    tracing, and any other PIXELCART_LOG_<MODULE> sets that module's level.
    """
    if 'PIXELCART_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['PIXELCART_LOG_LEVEL'])

    reserved = ('PIXELCART_LOG_LEVEL', 'PIXELCART_LOG_FRAMES')
    for key, value in os.environ.items():
        if key.startswith(_ENV_PREFIX) and key not in reserved:
            module_name = key[len(_ENV_PREFIX):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    _config['frames'] = os.environ.get('PIXELCART_LOG_FRAMES', '').lower() in ('1', 'true', 'yes')


# Load env config on import
_load_env_config()


class CartLogger:
    """
    Logger for a specific module.

    Provides standard log levels plus frame tracing for the entity loop.
    """

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        if self._module_key in _config['module_levels']:
            return _config['module_levels'][self._module_key]
        return _config['default_level']

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check if message at given level would be logged."""
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return

        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"

        print(_format_message(self.module, level_name, msg), file=sys.stderr)

    def debug(self, msg: str, *args) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        """Log at CRITICAL level."""
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def frame(self, frame: int, msg: str, *args) -> None:
        """
        Log a per-frame trace line.

        Only logs if frame tracing is enabled and the module is at TRACE.
        """
        if not _config['frames']:
            return
        self._log(LogLevel.TRACE, f'F{frame:05d}', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> CartLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.

    Args:
        module: Module name (e.g., 'cart', 'renderer', 'entities')

    Returns:
        CartLogger instance for the module
    """
    return CartLogger(module)


def disable_logging() -> None:
    """Disable all logging."""
    _config['default_level'] = LogLevel.OFF
    _config['frames'] = False
