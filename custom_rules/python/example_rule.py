"""
示例自定义规则

这个文件展示如何编写自定义类型规则。
在配置中设置 custom_rules.path 指向此目录，其中的规则会被自动加载。

使用步骤:
1. 定义 metadata（RuleMetadata）
2. 实现 evaluate(type_descriptor) -> CheckOutcome
3. 无需继承任何基类
"""
from typenamelint.core.metadata import TypeDescriptor
from typenamelint.core.reporter import Confidence, Severity
from typenamelint.rules.base_rule import CheckOutcome, FindingType, RuleMetadata, create_finding


class NoUnderscoreInTypeNameRule:
    """
    类型名下划线检查

    检测类型名中的下划线（如 Phone_Call），
    建议使用 PascalCase。
    """

    metadata = RuleMetadata(
        identifier="no_underscore_in_type_name",
        title="No Underscore In Type Name",
        problem="Type names should use PascalCase without underscores.",
        solution="Remove the underscores from the type name.",
        default_severity=Severity.LOW,
        default_confidence=Confidence.NORMAL,
    )

    UNDERSCORE = FindingType(
        "underscore",
        "The '{name}' type name contains an underscore.",
        Severity.LOW,
        Confidence.NORMAL,
    )

    def evaluate(self, type_descriptor: TypeDescriptor) -> CheckOutcome:
        if type_descriptor.is_compiler_generated:
            return CheckOutcome.not_applicable()

        findings = []
        if "_" in type_descriptor.name:
            findings.append(create_finding(self.metadata, type_descriptor, self.UNDERSCORE,
                                           name=type_descriptor.name))
        return CheckOutcome(applicable=True, findings=tuple(findings))
