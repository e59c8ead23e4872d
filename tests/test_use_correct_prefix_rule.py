"""Name classification and finding policy of the prefix rule."""

import pytest

from typenamelint.core.metadata import GenericParameterDescriptor, TypeDescriptor
from typenamelint.core.reporter import Confidence, Severity
from typenamelint.rules import RuleResult, TypeRule, UseCorrectPrefixRule
from typenamelint.rules.naming_rules.use_correct_prefix_rule import (
    is_correct_interface_name,
    is_correct_type_name,
    is_incorrect_generic_parameter_name,
)


def _type(name, interface=False, generated=False, params=(), namespace=""):
    return TypeDescriptor(
        name=name,
        is_interface=interface,
        is_compiler_generated=generated,
        generic_parameters=tuple(GenericParameterDescriptor(p) for p in params),
        namespace=namespace,
    )


@pytest.mark.parametrize("name", ["", "C", "Cb", "CA", "Ix"])
def test_short_type_names_are_accepted(name: str) -> None:
    assert is_correct_type_name(name)


@pytest.mark.parametrize("name", ["CAbc", "CPhone", "CXmlReader"])
def test_hungarian_class_prefix_is_rejected(name: str) -> None:
    assert not is_correct_type_name(name)


@pytest.mark.parametrize("name", ["Cat", "CAD", "Phone", "CB1", "cPhone", "CPHONE", "C_b"])
def test_other_type_names_are_accepted(name: str) -> None:
    assert is_correct_type_name(name)


@pytest.mark.parametrize("name", ["", "I", "Ix", "IP"])
def test_short_interface_names_are_rejected(name: str) -> None:
    assert not is_correct_interface_name(name)


@pytest.mark.parametrize("name", ["IPhone", "IODevice", "IEnumerable"])
def test_interface_names_with_prefix_are_accepted(name: str) -> None:
    assert is_correct_interface_name(name)


@pytest.mark.parametrize("name", ["Iphone", "Aphone", "Phone", "iPhone", "I1Phone"])
def test_interface_names_without_prefix_are_rejected(name: str) -> None:
    assert not is_correct_interface_name(name)


@pytest.mark.parametrize("name", ["T", "K", "V", "TKey", "TMechanism", "Tx"])
def test_generic_parameter_names_accepted(name: str) -> None:
    assert not is_incorrect_generic_parameter_name(name)


@pytest.mark.parametrize("name", ["t", "k", "Mechanism", "tKey", "Key", "KV"])
def test_generic_parameter_names_flagged(name: str) -> None:
    assert is_incorrect_generic_parameter_name(name)


def test_rule_satisfies_type_rule_protocol() -> None:
    rule = UseCorrectPrefixRule()
    assert isinstance(rule, TypeRule)
    assert rule.metadata.identifier == "use_correct_prefix"
    assert "Microsoft.Naming:CA1715:IdentifiersShouldHaveCorrectPrefix" in rule.metadata.compatibility


def test_class_with_c_prefix_yields_one_medium_finding() -> None:
    outcome = UseCorrectPrefixRule().evaluate(_type("CPhone", namespace="Acme"))

    assert outcome.result is RuleResult.SUCCESS_WITH_FINDINGS
    assert len(outcome.findings) == 1
    finding = outcome.findings[0]
    assert finding.severity is Severity.MEDIUM
    assert finding.confidence is Confidence.HIGH
    assert finding.type_name == "Acme.CPhone"
    assert finding.parameter_name is None
    assert finding.sub_type == "type_prefix"
    assert finding.message.startswith("The 'CPhone' type name starts with 'C' prefix")


def test_plain_class_yields_success() -> None:
    outcome = UseCorrectPrefixRule().evaluate(_type("Phone"))
    assert outcome.result is RuleResult.SUCCESS
    assert outcome.findings == ()


def test_interface_without_prefix_yields_critical_finding() -> None:
    outcome = UseCorrectPrefixRule().evaluate(_type("Phone", interface=True))

    assert len(outcome.findings) == 1
    finding = outcome.findings[0]
    assert finding.severity is Severity.CRITICAL
    assert finding.confidence is Confidence.HIGH
    assert "'Phone' interface name doesn't have the required 'I' prefix" in finding.message


def test_interface_with_prefix_yields_success() -> None:
    assert UseCorrectPrefixRule().evaluate(_type("IPhone", interface=True)).findings == ()


def test_interface_is_not_checked_against_class_rule() -> None:
    # 'CPhone' as an interface fails the interface rule only
    outcome = UseCorrectPrefixRule().evaluate(_type("CPhone", interface=True))
    assert [f.sub_type for f in outcome.findings] == ["interface_prefix"]


def test_generic_parameter_findings() -> None:
    rule = UseCorrectPrefixRule()

    bad = rule.evaluate(_type("Call`1", params=["Mechanism"]))
    assert len(bad.findings) == 1
    assert bad.findings[0].severity is Severity.HIGH
    assert bad.findings[0].confidence is Confidence.HIGH
    assert bad.findings[0].parameter_name == "Mechanism"
    assert "'Mechanism'" in bad.findings[0].message

    assert rule.evaluate(_type("Call`1", params=["TMechanism"])).findings == ()


def test_every_generic_parameter_checked_in_declaration_order() -> None:
    outcome = UseCorrectPrefixRule().evaluate(
        _type("CMap`4", params=["Key", "T", "value", "t"])
    )

    assert [f.sub_type for f in outcome.findings] == [
        "type_prefix",
        "generic_parameter_prefix",
        "generic_parameter_prefix",
        "generic_parameter_prefix",
    ]
    assert [f.parameter_name for f in outcome.findings[1:]] == ["Key", "value", "t"]


def test_compiler_generated_type_does_not_apply() -> None:
    outcome = UseCorrectPrefixRule().evaluate(
        _type("CPhone", interface=False, generated=True, params=["bad"])
    )
    assert outcome.result is RuleResult.DOES_NOT_APPLY
    assert outcome.findings == ()


def test_evaluation_is_idempotent() -> None:
    rule = UseCorrectPrefixRule()
    descriptor = _type("Phone", interface=True, params=["Mechanism", "x"])

    first = rule.evaluate(descriptor)
    second = rule.evaluate(descriptor)

    assert first == second
    assert [f.finding_id for f in first.findings] == [f.finding_id for f in second.findings]
