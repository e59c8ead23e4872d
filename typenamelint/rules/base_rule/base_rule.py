"""
Base Rule - 类型规则契约

规则不需要继承任何基类，只要满足 TypeRule 协议即可被引擎加载：
- metadata: RuleMetadata 静态注册信息
- evaluate(type_descriptor) -> CheckOutcome
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Protocol, Tuple, runtime_checkable

from ...core.metadata import GenericParameterDescriptor, TypeDescriptor
from ...core.reporter import Confidence, Finding, Severity


class FindingType(NamedTuple):
    """
    违规类型定义（sub_type + message + severity + confidence 绑定）

    Attributes:
        id: sub_type 标识（稳定，用于系统匹配/去重）
        message: 用户可读描述（可包含 {var} 占位符）
        severity: 违规级别
        confidence: 置信度
    """
    id: str
    message: str
    severity: Severity
    confidence: Confidence = Confidence.HIGH


@dataclass(frozen=True)
class RuleMetadata:
    """规则静态注册信息"""
    identifier: str                    # 规则唯一标识符，如 "use_correct_prefix"
    title: str                         # 规则名称
    problem: str = ""                  # 问题描述
    solution: str = ""                 # 修复建议
    compatibility: Tuple[str, ...] = field(default_factory=tuple)  # 兼容的外部规则标识
    default_severity: Severity = Severity.MEDIUM
    default_confidence: Confidence = Confidence.NORMAL


class RuleResult(Enum):
    """单个类型的检查结论"""
    DOES_NOT_APPLY = "does_not_apply"
    SUCCESS = "success"
    SUCCESS_WITH_FINDINGS = "success_with_findings"


@dataclass(frozen=True)
class CheckOutcome:
    """单个类型的检查结果：适用性 + 有序违规列表"""
    applicable: bool
    findings: Tuple[Finding, ...] = ()

    @classmethod
    def not_applicable(cls) -> 'CheckOutcome':
        return cls(applicable=False)

    @property
    def result(self) -> RuleResult:
        if not self.applicable:
            return RuleResult.DOES_NOT_APPLY
        if self.findings:
            return RuleResult.SUCCESS_WITH_FINDINGS
        return RuleResult.SUCCESS


@runtime_checkable
class TypeRule(Protocol):
    """类型规则协议：每个类型调用一次 evaluate"""

    metadata: RuleMetadata

    def evaluate(self, type_descriptor: TypeDescriptor) -> CheckOutcome:
        ...


def create_finding(metadata: RuleMetadata, type_descriptor: TypeDescriptor,
                   finding_type: FindingType,
                   parameter: Optional[GenericParameterDescriptor] = None,
                   **message_vars: str) -> Finding:
    """
    创建违规记录（一次性确定所有属性）

    Args:
        metadata: 规则注册信息
        type_descriptor: 被检查的类型
        finding_type: 违规类型（包含 sub_type、message 模板、severity、confidence）
        parameter: 违规的泛型参数（仅泛型参数检查时传入）
        message_vars: message 模板中的变量替换
    Returns:
        Finding 对象
    """
    message = finding_type.message
    if message_vars:
        message = message.format(**message_vars)

    return Finding(
        type_name=type_descriptor.full_name,
        severity=finding_type.severity,
        confidence=finding_type.confidence,
        message=message,
        rule_id=metadata.identifier,
        parameter_name=parameter.name if parameter is not None else None,
        sub_type=finding_type.id,
    )
