"""
TypeNameLint Logger Utilities

会话日志保留策略
"""
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from .constants import LOG_RETENTION_DAYS, LOG_TIMESTAMP_FORMAT, get_logs_dir

# 会话日志文件名: <logger>_YYYYMMDD_HHMMSS.log
_SESSION_LOG_NAME = re.compile(r"^.+_(\d{8}_\d{6})\.log$")


def _session_timestamp(log_file: Path) -> Optional[datetime]:
    match = _SESSION_LOG_NAME.match(log_file.name)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), LOG_TIMESTAMP_FORMAT)
    except ValueError:
        return None


def cleanup_old_logs(max_days: int = LOG_RETENTION_DAYS, logs_dir: Optional[Path] = None) -> int:
    """删除超过保留期的会话日志

    文件名不符合会话日志格式的文件不会被删除。

    Args:
        max_days: 保留天数
        logs_dir: 日志目录，默认取 get_logs_dir()

    Returns:
        删除的文件数量
    """
    logs_dir = logs_dir or get_logs_dir()
    if not logs_dir.is_dir():
        return 0

    cutoff = datetime.now() - timedelta(days=max_days)
    deleted = 0
    for log_file in logs_dir.glob("*.log"):
        started = _session_timestamp(log_file)
        if started is not None and started < cutoff:
            log_file.unlink()
            deleted += 1
    return deleted
