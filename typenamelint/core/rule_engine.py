"""
Rule Engine Module - 类型规则引擎

支持:
- 内置规则 / 自定义规则加载
- 类型排除模式
- 多类型并行检查（输出顺序与输入一致）
"""
import fnmatch
import importlib.util
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .config import RuleConfig
from .metadata import TypeDescriptor
from .reporter import Finding
from ..lib.logger import get_logger
from ..rules import TypeRule, get_all_rules
from ..rules.base_rule import CheckOutcome


def _looks_like_rule_class(attr) -> bool:
    """类对象是否提供 metadata 与 evaluate（不要求继承）"""
    return (isinstance(attr, type) and
            getattr(attr, "metadata", None) is not None and
            callable(getattr(attr, "evaluate", None)))


class RuleEngine:
    """规则引擎 - 管理和执行类型规则"""

    def __init__(self, parallel: bool = True, max_workers: int = 0):
        """
        Args:
            parallel: 是否启用并行执行
            max_workers: 最大工作线程数（0 表示自动：min(32, cpu_count * 2)）
        """
        self.rules: List[TypeRule] = []
        self.parallel = parallel
        self.max_workers = max_workers
        self.logger = get_logger("typenamelint")
        self.logger.debug(f"RuleEngine initialized: parallel={parallel}, max_workers={max_workers}")

    def register(self, rule) -> None:
        """注册规则实例"""
        if not isinstance(rule, TypeRule):
            raise TypeError(f"{rule!r} does not implement TypeRule (metadata + evaluate)")
        rule_id = rule.metadata.identifier
        if any(r.metadata.identifier == rule_id for r in self.rules):
            raise ValueError(f"Rule identifier already registered: {rule_id}")
        self.rules.append(rule)
        self.logger.debug(f"Registered rule: {rule_id}")

    def load_builtin_rules(self, rules_config: Optional[Dict[str, RuleConfig]] = None):
        """加载内置规则"""
        rules_config = rules_config or {}
        self.logger.debug("Loading builtin rules...")

        loaded_count = 0
        for rule_class in get_all_rules():
            rule_id = rule_class.metadata.identifier
            config = rules_config.get(rule_id, RuleConfig())

            if config.enabled:
                self.register(rule_class())
                loaded_count += 1
            else:
                self.logger.debug(f"Skipped disabled rule: {rule_id}")

        self.logger.info(f"Loaded {loaded_count} builtin rules")

    def load_custom_rules(self, custom_rules_path: str):
        """加载自定义 Python 规则（目录下的 *.py）"""
        rules_dir = Path(custom_rules_path)
        self.logger.debug(f"Loading custom rules from: {rules_dir}")

        if not rules_dir.is_dir():
            self.logger.debug("Custom rules directory does not exist")
            return

        loaded_count = 0
        for py_file in sorted(rules_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue

            try:
                loaded_count += self._load_rules_from_file(py_file)
                self.logger.debug(f"Loaded custom rules from: {py_file.name}")
            except Exception as e:
                self.logger.warning(f"Failed to load custom rule {py_file}: {e}")

        self.logger.info(f"Loaded {loaded_count} custom rules")

    def _load_rules_from_file(self, file_path: Path) -> int:
        """从文件加载规则，返回加载数量"""
        spec = importlib.util.spec_from_file_location(f"typenamelint_custom_{file_path.stem}", file_path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        count = 0
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            # 只加载在该文件中定义的规则，跳过被 import 进来的内置规则
            if _looks_like_rule_class(attr) and attr.__module__ == module.__name__:
                try:
                    self.register(attr())
                except ValueError as e:
                    self.logger.warning(f"Skipped custom rule {attr_name} in {file_path.name}: {e}")
                    continue
                count += 1
        return count

    def evaluate_type(self, type_descriptor: TypeDescriptor) -> Dict[str, CheckOutcome]:
        """
        对单个类型执行所有规则

        Returns:
            {rule_identifier: CheckOutcome}
        """
        outcomes = {}
        for rule in self.rules:
            rule_id = rule.metadata.identifier
            try:
                outcomes[rule_id] = rule.evaluate(type_descriptor)
            except Exception as e:
                self.logger.warning(f"Rule {rule_id} failed on {type_descriptor.full_name}: {e}")
        return outcomes

    def check_type(self, type_descriptor: TypeDescriptor) -> List[Finding]:
        """对单个类型执行所有规则检查，返回违规列表（规则注册顺序）"""
        findings = []
        for outcome in self.evaluate_type(type_descriptor).values():
            findings.extend(outcome.findings)
        return findings

    def is_excluded(self, type_descriptor: TypeDescriptor, excluded: Iterable[str]) -> bool:
        """类型完整名或简单名是否匹配排除模式"""
        return any(fnmatch.fnmatchcase(type_descriptor.full_name, p) or
                   fnmatch.fnmatchcase(type_descriptor.name, p)
                   for p in excluded)

    def check_types(self, types: Sequence[TypeDescriptor], excluded: Iterable[str] = ()) -> List[Finding]:
        """
        对多个类型执行检查（支持并行）

        Args:
            types: 类型列表
            excluded: 排除模式
        Returns:
            所有违规（按输入类型顺序）
        """
        excluded = list(excluded)
        candidates = [t for t in types if not self.is_excluded(t, excluded)]
        skipped = len(types) - len(candidates)
        if skipped:
            self.logger.info(f"Excluded {skipped} types by pattern")

        self.logger.info(f"Checking {len(candidates)} types with {len(self.rules)} rules (parallel={self.parallel})")

        if not self.parallel or len(candidates) <= 1:
            per_type = [self.check_type(t) for t in candidates]
        else:
            per_type = self._check_types_parallel(candidates)

        all_findings = [f for findings in per_type for f in findings]
        self.logger.info(f"Total findings: {len(all_findings)}")
        return all_findings

    def _check_types_parallel(self, types: List[TypeDescriptor]) -> List[List[Finding]]:
        """并行检查类型，按输入下标回填结果"""
        results: List[List[Finding]] = [[] for _ in types]

        workers = self.max_workers
        if workers <= 0:
            workers = min(32, (os.cpu_count() or 1) * 2)
        workers = min(workers, len(types))

        self.logger.debug(f"Starting parallel check with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.check_type, t): i for i, t in enumerate(types)}

            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    self.logger.error(f"Failed to check {types[index].full_name}: {e}")

        return results
