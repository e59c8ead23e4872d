"""
Use Correct Prefix Rule - 类型名前缀检查

接口名必须以 'I' 加另一个大写字母开头；其他类型名不应使用 MFC 风格的 'C' 前缀；
泛型参数应为单个大写字母或以 'T' 开头。

Bad:
    interface Phone
    class CPhone : Phone
    class Call<Mechanism>

Good:
    interface IPhone
    class Phone : IPhone
    class Call<TMechanism>
"""
from ...core.metadata import TypeDescriptor
from ...core.reporter import Confidence, Severity
from ..base_rule import CheckOutcome, FindingType, RuleMetadata, create_finding


# SubType 定义
class SubType:
    """use_correct_prefix 规则的子类型"""
    INTERFACE_PREFIX = FindingType(
        "interface_prefix",
        "The '{name}' interface name doesn't have the required 'I' prefix. According to existing "
        "naming conventions, all interface names should begin with the 'I' letter followed by "
        "another capital letter.",
        Severity.CRITICAL,
        Confidence.HIGH,
    )
    TYPE_PREFIX = FindingType(
        "type_prefix",
        "The '{name}' type name starts with 'C' prefix but, according to existing naming "
        "conventions, type names should not have any specific prefix.",
        Severity.MEDIUM,
        Confidence.HIGH,
    )
    GENERIC_PARAMETER_PREFIX = FindingType(
        "generic_parameter_prefix",
        "The generic parameter '{name}' should be prefixed with 'T' or be a single, "
        "uppercased letter.",
        Severity.HIGH,
        Confidence.HIGH,
    )


def is_correct_type_name(name: str) -> bool:
    """类型名不能形如 C<大写><小写>...（如 CPhone）"""
    if len(name) < 3:
        return True
    return not (name[0] == 'C' and name[1].isupper() and name[2].islower())


def is_correct_interface_name(name: str) -> bool:
    """接口名必须形如 I<大写>...（如 IPhone）"""
    if len(name) < 3:
        return False
    return name[0] == 'I' and name[1].isupper()


def is_incorrect_generic_parameter_name(name: str) -> bool:
    """
    泛型参数名是否需要上报

    单个大写字母（T、K、V）通过；单个小写字母不通过；多字符名必须以 'T' 开头。
    """
    return (len(name) > 1 and name[0] != 'T') or name[:1].islower()


class UseCorrectPrefixRule:
    """类型名前缀检查"""

    metadata = RuleMetadata(
        identifier="use_correct_prefix",
        title="Use Correct Prefix",
        problem="This type starts with an incorrect prefix or does not start with the required one. "
                "All interface names should start with the 'I' letter, followed by another capital "
                "letter. All other type names should not have any specific prefix.",
        solution="Rename the type to have the correct prefix.",
        compatibility=(
            "Microsoft.Naming:CA1715:IdentifiersShouldHaveCorrectPrefix",
            "Microsoft.Naming:CA1722:IdentifiersShouldNotHaveIncorrectPrefix",
        ),
        default_severity=Severity.MEDIUM,
        default_confidence=Confidence.HIGH,
    )

    def evaluate(self, type_descriptor: TypeDescriptor) -> CheckOutcome:
        if type_descriptor.is_compiler_generated:
            return CheckOutcome.not_applicable()

        findings = []
        name = type_descriptor.name

        if type_descriptor.is_interface:
            if not is_correct_interface_name(name):
                findings.append(create_finding(self.metadata, type_descriptor,
                                               SubType.INTERFACE_PREFIX, name=name))
        elif not is_correct_type_name(name):
            findings.append(create_finding(self.metadata, type_descriptor,
                                           SubType.TYPE_PREFIX, name=name))

        # 泛型参数通常是 T、V、K 这样的单字母；更长的名字应以 'T' 开头，如 TEventArgs
        for parameter in type_descriptor.generic_parameters:
            if is_incorrect_generic_parameter_name(parameter.name):
                findings.append(create_finding(self.metadata, type_descriptor,
                                               SubType.GENERIC_PARAMETER_PREFIX,
                                               parameter=parameter, name=parameter.name))

        return CheckOutcome(applicable=True, findings=tuple(findings))

    def __repr__(self):
        return f"<{self.__class__.__name__} identifier={self.metadata.identifier}>"
