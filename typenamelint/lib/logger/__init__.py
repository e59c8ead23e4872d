"""
TypeNameLint Logger Module

统一日志模块，日志文件默认存储在 ~/.typenamelint/logs/ 目录下
（可通过 TYPENAMELINT_LOG_DIR 覆盖）。

Usage:
    from typenamelint.lib.logger import get_logger, LogContext

    logger = get_logger("typenamelint", verbose=True)
    logger.info("Starting type name check")

    with LogContext(logger, "manifest_loading"):
        logger.debug("Loading manifest...")
"""
from .python_logger import (
    TypeNameLintLogger,
    get_logger,
    reset_session,
)
from .context import LogContext
from .utils import cleanup_old_logs
from .constants import get_logs_dir

__all__ = [
    'TypeNameLintLogger',
    'get_logger',
    'LogContext',
    'reset_session',
    'cleanup_old_logs',
    'get_logs_dir',
]
