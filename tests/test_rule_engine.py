"""Rule loading and type evaluation in the engine."""

from pathlib import Path

import pytest

from typenamelint.core.config import RuleConfig
from typenamelint.core.metadata import GenericParameterDescriptor, TypeDescriptor
from typenamelint.core.reporter import Severity
from typenamelint.core.rule_engine import RuleEngine
from typenamelint.rules import CheckOutcome, RuleMetadata, RuleResult, UseCorrectPrefixRule

EXAMPLE_RULES_DIR = Path(__file__).resolve().parent.parent / "custom_rules" / "python"


def _types():
    return [
        TypeDescriptor("IPhone", is_interface=True, namespace="Acme"),
        TypeDescriptor("Phone", is_interface=True, namespace="Acme"),
        TypeDescriptor("CPhone", namespace="Acme"),
        TypeDescriptor("Call`1", namespace="Acme",
                       generic_parameters=(GenericParameterDescriptor("Mechanism"),)),
        TypeDescriptor("<>c__DisplayClass1", is_compiler_generated=True),
    ] + [
        TypeDescriptor(f"CType{i}x", generic_parameters=(GenericParameterDescriptor("k"),))
        for i in range(20)
    ]


class ExplodingRule:
    metadata = RuleMetadata(identifier="exploding", title="Exploding")

    def evaluate(self, type_descriptor):
        raise RuntimeError("boom")


class NotARule:
    def check(self, type_descriptor):
        return []


def test_builtin_rules_loaded_when_enabled() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules({})
    assert [r.metadata.identifier for r in engine.rules] == ["use_correct_prefix"]


def test_disabled_rule_is_skipped() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules({"use_correct_prefix": RuleConfig(enabled=False)})

    assert engine.rules == []
    assert engine.check_types(_types()) == []


def test_end_to_end_findings() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules()

    findings = engine.check_types(_types()[:5])

    assert [(f.type_name, f.severity) for f in findings] == [
        ("Acme.Phone", Severity.CRITICAL),
        ("Acme.CPhone", Severity.MEDIUM),
        ("Acme.Call`1", Severity.HIGH),
    ]
    assert findings[2].parameter_name == "Mechanism"


def test_parallel_output_matches_sequential_order() -> None:
    sequential = RuleEngine(parallel=False)
    sequential.load_builtin_rules()
    parallel = RuleEngine(parallel=True, max_workers=4)
    parallel.load_builtin_rules()

    expected = sequential.check_types(_types())
    actual = parallel.check_types(_types())

    assert actual == expected
    assert len(actual) == 3 + 20 * 2


def test_excluded_patterns_match_full_or_simple_name() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules()

    findings = engine.check_types(_types()[:5], excluded=["Acme.Phone", "CP*"])

    assert [f.type_name for f in findings] == ["Acme.Call`1"]


def test_evaluate_type_returns_outcome_per_rule() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules()

    outcomes = engine.evaluate_type(TypeDescriptor("<Module>", is_compiler_generated=True))

    assert outcomes["use_correct_prefix"].result is RuleResult.DOES_NOT_APPLY


def test_failing_rule_does_not_abort_other_rules() -> None:
    engine = RuleEngine(parallel=False)
    engine.register(ExplodingRule())
    engine.load_builtin_rules()

    findings = engine.check_types([TypeDescriptor("CPhone")])

    assert [f.sub_type for f in findings] == ["type_prefix"]


def test_register_rejects_objects_without_rule_contract() -> None:
    engine = RuleEngine()
    with pytest.raises(TypeError):
        engine.register(NotARule())


def test_register_rejects_duplicate_identifier() -> None:
    engine = RuleEngine(parallel=False)
    engine.register(UseCorrectPrefixRule())

    with pytest.raises(ValueError, match="use_correct_prefix"):
        engine.register(UseCorrectPrefixRule())

    assert len(engine.rules) == 1
    assert len(engine.check_type(TypeDescriptor("CPhone"))) == 1


def test_custom_rules_loaded_from_directory() -> None:
    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules()
    engine.load_custom_rules(str(EXAMPLE_RULES_DIR))

    assert [r.metadata.identifier for r in engine.rules] == [
        "use_correct_prefix",
        "no_underscore_in_type_name",
    ]

    findings = engine.check_types([TypeDescriptor("CPhone_Call")])
    assert [f.rule_id for f in findings] == ["use_correct_prefix", "no_underscore_in_type_name"]


def test_broken_custom_rule_file_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "broken.py").write_text("raise ImportError('nope')\n", encoding="utf-8")
    (tmp_path / "_private.py").write_text("raise SystemExit(1)\n", encoding="utf-8")
    (tmp_path / "good.py").write_text(
        "from typenamelint.rules import CheckOutcome, RuleMetadata\n"
        "\n"
        "class AlwaysFine:\n"
        "    metadata = RuleMetadata(identifier='always_fine', title='Always Fine')\n"
        "\n"
        "    def evaluate(self, type_descriptor):\n"
        "        return CheckOutcome(applicable=True)\n",
        encoding="utf-8",
    )

    engine = RuleEngine(parallel=False)
    engine.load_custom_rules(str(tmp_path))

    assert [r.metadata.identifier for r in engine.rules] == ["always_fine"]
    assert engine.evaluate_type(TypeDescriptor("Phone"))["always_fine"] == CheckOutcome(applicable=True)


def test_missing_custom_rules_directory_is_ignored(tmp_path: Path) -> None:
    engine = RuleEngine()
    engine.load_custom_rules(str(tmp_path / "absent"))
    assert engine.rules == []


def test_custom_rule_reusing_builtin_identifier_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "shadow.py").write_text(
        "from typenamelint.rules import CheckOutcome, RuleMetadata\n"
        "\n"
        "class ShadowPrefixRule:\n"
        "    metadata = RuleMetadata(identifier='use_correct_prefix', title='Shadow')\n"
        "\n"
        "    def evaluate(self, type_descriptor):\n"
        "        return CheckOutcome(applicable=True)\n",
        encoding="utf-8",
    )

    engine = RuleEngine(parallel=False)
    engine.load_builtin_rules()
    engine.load_custom_rules(str(tmp_path))

    assert [type(r) for r in engine.rules] == [UseCorrectPrefixRule]
    findings = engine.check_type(TypeDescriptor("CPhone"))
    assert [f.sub_type for f in findings] == ["type_prefix"]
