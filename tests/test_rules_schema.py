import pytest
from pydantic import ValidationError

from engine.rules_schema import DEFAULT_RULES, RuleSet, load_rules


def test_defaults():
    rules = load_rules()
    assert rules == DEFAULT_RULES
    assert (rules.min_bid, rules.max_bid, rules.target_score) == (7, 13, 31)
    assert rules.all_pass_policy == "redeal"
    assert rules.invalid_bid_policy == "skip"
    assert rules.ai.discount == pytest.approx(0.85)
    assert rules.ai.min_confidence == 5
    assert rules.ai.default_trump == "spades"


def test_rejects_inverted_bid_range():
    with pytest.raises(ValidationError):
        RuleSet(min_bid=10, max_bid=8)


def test_rejects_unknown_values():
    with pytest.raises(ValidationError):
        RuleSet(all_pass_policy="shuffle")
    with pytest.raises(ValidationError):
        RuleSet.model_validate({"ai": {"default_trump": "stars"}})
    with pytest.raises(ValidationError):
        RuleSet.model_validate({"ai": {"discount": 0}})


def test_load_rules_from_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text('{"target_score": 41, "all_pass_policy": "force_minimum", "ai": {"min_confidence": 4}}')
    rules = load_rules(path)
    assert rules.target_score == 41
    assert rules.all_pass_policy == "force_minimum"
    assert rules.ai.min_confidence == 4
    assert rules.ai.default_trump == "spades"
