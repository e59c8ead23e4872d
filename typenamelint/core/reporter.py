"""
Reporter Module - 检查结果记录与输出
"""
import hashlib
import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..lib.logger import get_logger


class _OrderedLevel(Enum):
    """按声明顺序比较大小的枚举（先声明的级别更低）"""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str):
        """从字符串解析级别（大小写不敏感）"""
        return cls(str(value).strip().lower())


class Severity(_OrderedLevel):
    """严重级别: LOW < MEDIUM < HIGH < CRITICAL"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Confidence(_OrderedLevel):
    """置信度: LOW < NORMAL < HIGH < TOTAL"""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    TOTAL = "total"


@dataclass
class Finding:
    """命名违规记录"""
    type_name: str
    severity: Severity
    confidence: Confidence
    message: str
    rule_id: str
    parameter_name: Optional[str] = None  # 仅泛型参数违规时设置
    sub_type: Optional[str] = None  # 规则子类型（稳定标识，区分同一规则的不同违规）
    _finding_id: Optional[str] = field(default=None, repr=False, compare=False)

    @property
    def finding_id(self) -> str:
        """
        违规唯一标识（懒计算，缓存结果）

        组成：hash(type_name + rule_id + sub_type + parameter_name)
        """
        if self._finding_id is None:
            sub_type = self.sub_type or "default"
            id_input = f"{self.type_name}:{self.rule_id}:{sub_type}:{self.parameter_name or ''}"
            self._finding_id = hashlib.md5(id_input.encode()).hexdigest()[:16]
        return self._finding_id

    def to_text(self) -> str:
        """
        单行文本格式
        格式: Acme.CPhone: medium: message [rule_id]
        """
        return f"{self.type_name}: {self.severity.value}: {self.message} [{self.rule_id}]"

    def to_dict(self) -> dict:
        """唯一序列化入口"""
        result = {
            "type_name": self.type_name,
            "severity": self.severity.value,
            "confidence": self.confidence.value,
            "message": self.message,
            "rule_id": self.rule_id,
            "finding_id": self.finding_id,
        }
        if self.parameter_name is not None:
            result["parameter_name"] = self.parameter_name
        if self.sub_type:
            result["sub_type"] = self.sub_type
        return result

    @classmethod
    def from_dict(cls, d: dict) -> 'Finding':
        """唯一反序列化入口"""
        return cls(
            type_name=d.get("type_name", ""),
            severity=Severity.parse(d.get("severity", "medium")),
            confidence=Confidence.parse(d.get("confidence", "normal")),
            message=d.get("message", ""),
            rule_id=d.get("rule_id", ""),
            parameter_name=d.get("parameter_name"),
            sub_type=d.get("sub_type"),
        )


class Reporter:
    """报告生成器（违规的汇总点）"""

    def __init__(self):
        self.findings: List[Finding] = []
        self.logger = get_logger("typenamelint")

    def add_finding(self, finding: Finding):
        """添加违规记录"""
        self.findings.append(finding)
        self.logger.debug(f"Added finding: {finding.rule_id} on {finding.type_name}")

    def add_findings(self, findings: List[Finding]):
        """批量添加违规记录"""
        self.findings.extend(findings)

    def deduplicate(self):
        """去重：相同 finding_id 只保留第一个"""
        seen = set()
        unique = []
        for f in self.findings:
            if f.finding_id not in seen:
                seen.add(f.finding_id)
                unique.append(f)
        self.findings = unique

    def sort(self):
        """按类型名排序（稳定排序，同一类型内保持上报顺序）"""
        self.findings.sort(key=lambda f: f.type_name)

    def report(self, fail_on: Severity = Severity.HIGH) -> int:
        """
        输出报告

        Args:
            fail_on: 导致失败的最低严重级别
        Returns:
            返回码：存在 >= fail_on 的违规返回 1，否则返回 0
        """
        self.deduplicate()
        self.sort()

        for f in self.findings:
            print(f.to_text())

        return 1 if self.has_failures(fail_on) else 0

    def has_failures(self, fail_on: Severity) -> bool:
        """是否存在 >= fail_on 级别的违规"""
        return any(f.severity >= fail_on for f in self.findings)

    def get_summary(self) -> dict:
        """获取统计摘要"""
        summary = {"total": len(self.findings)}
        for severity in Severity:
            summary[severity.value] = sum(1 for f in self.findings if f.severity == severity)
        summary["types_affected"] = len(set(f.type_name for f in self.findings))
        return summary

    def to_json_dict(self, extra: Optional[dict] = None) -> dict:
        """输出 JSON 数据结构"""
        data = {
            "summary": self.get_summary(),
            "findings": [f.to_dict() for f in self.findings]
        }
        if extra:
            data.update(extra)
        return data

    def to_json(self, extra: Optional[dict] = None) -> str:
        """输出 JSON 格式报告"""
        return json.dumps(self.to_json_dict(extra=extra), indent=2, ensure_ascii=False)

    def print_summary(self):
        """打印摘要到 stderr（不影响 stdout 解析）"""
        summary = self.get_summary()
        print(f"\n{'='*50}", file=sys.stderr)
        print("TypeNameLint Summary:", file=sys.stderr)
        print(f"  Total findings: {summary['total']}", file=sys.stderr)
        for severity in reversed(list(Severity)):
            print(f"  {severity.value.capitalize()}: {summary[severity.value]}", file=sys.stderr)
        print(f"  Types affected: {summary['types_affected']}", file=sys.stderr)
        print(f"{'='*50}\n", file=sys.stderr)
