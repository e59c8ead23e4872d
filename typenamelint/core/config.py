"""
Configuration Module - 配置文件解析和管理
"""
import copy
import yaml
from pathlib import Path
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field

from .reporter import Severity
from ..lib.logger import get_logger


class ConfigError(ValueError):
    """配置值非法"""


@dataclass
class RuleConfig:
    """规则配置"""
    enabled: bool = True
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PerformanceConfig:
    """性能配置"""
    # 是否启用并行检查
    parallel: bool = True
    # 最大工作线程数（0 表示自动：min(32, cpu_count * 2)）
    max_workers: int = 0


@dataclass
class LintConfig:
    """完整的 Lint 配置"""
    # 存在 >= fail_on 级别的违规时是否返回非 0
    fail_on_findings: bool = True
    fail_on: Severity = Severity.HIGH

    # 类型过滤（fnmatch 模式，匹配完整名或简单名）
    excluded_types: List[str] = field(default_factory=list)

    # 规则配置
    rules: Dict[str, RuleConfig] = field(default_factory=dict)

    # 自定义规则目录（空表示不加载）
    custom_rules_path: str = ""

    # 性能配置
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def _require_mapping(value: Any, key: str) -> Dict[str, Any]:
    """空值视为空字典，其他非字典值报错"""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _require_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _require_int(value: Any, key: str) -> int:
    # bool 是 int 的子类，需单独排除
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


class ConfigLoader:
    """配置加载器"""

    DEFAULT_CONFIG = {
        "fail_on_findings": True,
        "fail_on": "high",
        "excluded_types": [],
        "rules": {
            "use_correct_prefix": {
                "enabled": True,
                "params": {}
            }
        },
        "custom_rules": {
            "path": ""
        },
        "performance": {
            "parallel": True,
            "max_workers": 0
        }
    }

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}
        self.logger = get_logger("typenamelint")

    def load(self) -> LintConfig:
        """加载配置文件"""
        self.logger.debug(f"Loading config from: {self.config_path}")

        # 从默认配置开始（深拷贝）
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            self.logger.debug("Config file exists, loading user config")
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = yaml.safe_load(f) or {}
            if not isinstance(user_config, dict):
                raise ConfigError(f"{self.config_path}: config root must be a mapping")
            self._merge_config(self._config, user_config)
            self.logger.debug(f"Merged {len(user_config)} user config keys")
        else:
            self.logger.debug("No config file found, using defaults only")

        config = self._build_lint_config()
        enabled = sum(1 for r in config.rules.values() if r.enabled)
        self.logger.debug(f"Config built: {enabled}/{len(config.rules)} rules enabled")
        return config

    def _merge_config(self, base: Dict, override: Dict):
        """递归合并配置"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def _build_lint_config(self) -> LintConfig:
        """构建 LintConfig 对象"""
        rules = {}
        for rule_id, rule_cfg in _require_mapping(self._config.get("rules"), "rules").items():
            if isinstance(rule_cfg, bool):
                # 简写: use_correct_prefix: false
                rules[rule_id] = RuleConfig(enabled=rule_cfg)
                continue
            rule_cfg = _require_mapping(rule_cfg, f"rules.{rule_id}")
            rules[rule_id] = RuleConfig(
                enabled=_require_bool(rule_cfg.get("enabled", True), f"rules.{rule_id}.enabled"),
                params=_require_mapping(rule_cfg.get("params"), f"rules.{rule_id}.params")
            )

        fail_on_raw = self._config.get("fail_on", "high")
        try:
            fail_on = Severity.parse(fail_on_raw)
        except ValueError:
            raise ConfigError(f"Unknown fail_on level: {fail_on_raw!r}") from None

        excluded_types = self._config.get("excluded_types") or []
        if not isinstance(excluded_types, list):
            raise ConfigError("'excluded_types' must be a list of patterns")

        custom_rules = _require_mapping(self._config.get("custom_rules"), "custom_rules")
        custom_rules_path = custom_rules.get("path") or ""
        if not isinstance(custom_rules_path, str):
            raise ConfigError("'custom_rules.path' must be a string")

        performance_cfg = _require_mapping(self._config.get("performance"), "performance")
        performance = PerformanceConfig(
            parallel=_require_bool(performance_cfg.get("parallel", True), "performance.parallel"),
            max_workers=_require_int(performance_cfg.get("max_workers", 0), "performance.max_workers")
        )

        return LintConfig(
            fail_on_findings=_require_bool(self._config.get("fail_on_findings", True), "fail_on_findings"),
            fail_on=fail_on,
            excluded_types=[str(p) for p in excluded_types],
            rules=rules,
            custom_rules_path=custom_rules_path,
            performance=performance
        )

    def get_raw_config(self) -> Dict[str, Any]:
        """获取原始配置字典"""
        return self._config
