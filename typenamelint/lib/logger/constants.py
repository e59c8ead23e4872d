"""
TypeNameLint Logger Constants

日志模块路径常量定义（内部使用，零依赖）
只使用 Python 标准库，不导入任何业务模块。
"""
import os
from pathlib import Path


# ==================== 全局目录 ====================

# 全局根目录 ~/.typenamelint
GLOBAL_DIR = Path.home() / '.typenamelint'

# 默认日志目录 ~/.typenamelint/logs/
LOGS_DIR = GLOBAL_DIR / 'logs'


# ==================== 日志格式 ====================

LOG_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# 日志输出格式
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
LOG_FORMAT_DETAILED = "%(asctime)s [%(levelname)s] [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ==================== 日志配置 ====================

# 日志保留天数
LOG_RETENTION_DAYS = 7

# 日志目录覆盖（测试与 CI 使用）
ENV_LOG_DIR = "TYPENAMELINT_LOG_DIR"


# ==================== 工具函数 ====================

def get_logs_dir() -> Path:
    """获取日志目录（环境变量 TYPENAMELINT_LOG_DIR 优先）"""
    override = os.environ.get(ENV_LOG_DIR)
    return Path(override) if override else LOGS_DIR


def ensure_logs_dir() -> Path:
    """确保日志目录存在"""
    logs_dir = get_logs_dir()
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir
