"""
TypeNameLint Python Logger

每个命名日志器在一次运行（会话）内写入同一个文件：
    <logs_dir>/<name>_YYYYMMDD_HHMMSS.log

控制台输出（stderr, INFO 及以上）由调用方显式开启，例如 CLI 的 --verbose。
"""
import logging
import sys
from datetime import datetime
from typing import Dict, Optional, Sequence

from .constants import (
    DATE_FORMAT,
    LOG_FORMAT,
    LOG_FORMAT_DETAILED,
    LOG_TIMESTAMP_FORMAT,
    ensure_logs_dir,
)


class TypeNameLintLogger:
    """会话日志器：文件处理器常驻，控制台处理器按需挂载"""

    _instances: Dict[str, "TypeNameLintLogger"] = {}
    _session_id: Optional[str] = None

    def __init__(self, name: str, log_file: Optional[str] = None, verbose: bool = False):
        self.name = name
        self.logger = logging.getLogger(f"typenamelint.{name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self._console: Optional[logging.Handler] = None

        self.log_file = log_file or self._session_log_file()
        file_handler = logging.FileHandler(self.log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT_DETAILED, DATE_FORMAT))
        self.logger.addHandler(file_handler)

        self.set_verbose(verbose)

    def _session_log_file(self) -> str:
        if TypeNameLintLogger._session_id is None:
            TypeNameLintLogger._session_id = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        return str(ensure_logs_dir() / f"{self.name}_{TypeNameLintLogger._session_id}.log")

    @property
    def verbose(self) -> bool:
        return self._console is not None

    def set_verbose(self, enabled: bool):
        """挂载或移除 stderr 控制台处理器"""
        if enabled and self._console is None:
            self._console = logging.StreamHandler(sys.stderr)
            self._console.setLevel(logging.INFO)
            self._console.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            self.logger.addHandler(self._console)
        elif not enabled and self._console is not None:
            self.logger.removeHandler(self._console)
            self._console = None

    def close(self):
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
        self._console = None

    def debug(self, msg: str, *args, **kwargs):
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self.logger.error(msg, *args, **kwargs)

    def log_separator(self, title: str = ""):
        """会话分隔线"""
        self.info(f"{'=' * 20} {title} {'=' * 20}" if title else "=" * 60)

    def log_list(self, title: str, items: Sequence, level: str = "debug", max_items: int = 20):
        """
        逐行记录列表，超过 max_items 的部分只记录数量

        Args:
            title: 列表标题
            items: 列表项
            level: 日志级别名
            max_items: 最多逐行记录的条数
        """
        log = getattr(self, level, self.debug)
        log(f"{title} ({len(items)} items):")
        for i, item in enumerate(items[:max_items]):
            log(f"  [{i}] {item}")
        if len(items) > max_items:
            log(f"  ... and {len(items) - max_items} more")


def get_logger(name: str, log_file: Optional[str] = None,
               verbose: Optional[bool] = None) -> TypeNameLintLogger:
    """
    获取日志记录器（每个名称一个实例）

    Args:
        name: 日志记录器名称，如 'typenamelint'
        log_file: 首次创建时使用的日志文件路径
        verbose: 非 None 时开启/关闭控制台输出（对已存在的实例同样生效）
    """
    instance = TypeNameLintLogger._instances.get(name)
    if instance is None:
        instance = TypeNameLintLogger(name, log_file, verbose=bool(verbose))
        TypeNameLintLogger._instances[name] = instance
    elif verbose is not None:
        instance.set_verbose(verbose)
    return instance


def reset_session():
    """关闭所有日志器并开始新的会话"""
    for instance in TypeNameLintLogger._instances.values():
        instance.close()
    TypeNameLintLogger._session_id = None
    TypeNameLintLogger._instances.clear()
