"""Rule registry tests."""

from __future__ import annotations

import pytest

from side_effects_lint.rules import build_rule_set, default_rule_set, list_rule_info

PRIORITY = [
    "service_init",
    "global_assignment",
    "event_listener",
    "global_define_property",
    "global_mutation",
    "top_level_call",
]


def test_default_rule_set_keeps_priority_order() -> None:
    rule_set = default_rule_set()
    assert rule_set.rule_ids == PRIORITY
    assert [rule.rule_id for rule in rule_set.ignore_rules][-1] == "blank"


def test_enable_list_is_reordered_by_priority() -> None:
    rule_set = build_rule_set(enabled_rule_ids=["top_level_call", "service_init"])
    assert rule_set.rule_ids == ["service_init", "top_level_call"]


def test_disable_wins_over_enable() -> None:
    rule_set = build_rule_set(
        enabled_rule_ids=["global_assignment", "top_level_call"],
        disabled_rule_ids=["top_level_call"],
    )
    assert rule_set.rule_ids == ["global_assignment"]


def test_unknown_rule_ids_raise() -> None:
    with pytest.raises(ValueError, match="Unknown rule ids: nope"):
        build_rule_set(disabled_rule_ids=["nope"])


def test_custom_sdk_namespaces_replace_defaults() -> None:
    rule_set = build_rule_set(sdk_namespaces=["Sentry"])
    service_rule = rule_set.side_effect_rules[0]
    assert service_rule.matches("Sentry.init({ dsn });")
    assert not service_rule.matches("firebase.initializeApp(config);")


def test_empty_sdk_namespaces_rejected() -> None:
    with pytest.raises(ValueError, match="sdk_namespaces"):
        build_rule_set(sdk_namespaces=[])


def test_namespaces_are_escaped() -> None:
    rule_set = build_rule_set(sdk_namespaces=["a.b"])
    service_rule = rule_set.side_effect_rules[0]
    assert service_rule.matches("a.b.start();")
    assert not service_rule.matches("axb.start();")


def test_list_rule_info_numbers_priorities() -> None:
    info = list_rule_info()
    assert [item.rule_id for item in info] == PRIORITY
    assert [item.priority for item in info] == [1, 2, 3, 4, 5, 6]
    assert all(item.reason for item in info)
