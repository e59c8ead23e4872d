"""
TypeNameLint Logger Context

阶段计时上下文：记录一个处理阶段（配置加载、清单加载、规则检查）的耗时与结果。
"""
import time
import traceback
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .python_logger import TypeNameLintLogger


class LogContext:
    """阶段计时上下文

    Usage:
        with LogContext(logger, "manifest_loading") as phase:
            types = load_manifest(path)
        logger.info(f"took {phase.elapsed:.3f}s")
    """

    def __init__(self, logger: "TypeNameLintLogger", context_name: str, level: str = "debug"):
        """
        Args:
            logger: TypeNameLintLogger 实例
            context_name: 阶段名称
            level: 开始/完成消息的日志级别（失败固定为 error）
        """
        self.logger = logger
        self.context_name = context_name
        self.level = level
        self.elapsed: Optional[float] = None
        self._started: Optional[float] = None

    def _log(self, msg: str):
        getattr(self.logger, self.level, self.logger.debug)(f"[{self.context_name}] {msg}")

    def __enter__(self) -> "LogContext":
        self._started = time.perf_counter()
        self._log("Started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self._log(f"Completed in {self.elapsed:.3f}s")
            return False

        self.logger.error(f"[{self.context_name}] Failed after {self.elapsed:.3f}s: "
                          f"{exc_type.__name__}: {exc_val}")
        self.logger.debug("".join(traceback.format_tb(exc_tb)).rstrip())
        # 异常继续向上传播，由调用方决定退出码
        return False
