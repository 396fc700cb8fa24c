import json
import pytest

from drivers.policy import (
    AssignmentConfig,
    HardConstraintKey,
    SoftRuleKey,
    default_assignment_config,
)
from drivers.policy_store import STORAGE_KEY, AssignmentPolicyStore, PolicyStoreError

def test_default_config_values():
    config = default_assignment_config()

    assert config.auto_assign_scheduled is True
    assert config.auto_assign_express is True
    for key in HardConstraintKey:
        assert config.hard_constraints.get(key).enabled
    assert config.soft_rules.get(SoftRuleKey.REGION_SCORE).weight == 0.4
    assert config.soft_rules.get(SoftRuleKey.LOAD_BALANCE_SCORE).weight == 0.4
    assert config.soft_rules.get(SoftRuleKey.FAIRNESS_SCORE).weight == 0.2

def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        default_assignment_config().with_soft_rule(SoftRuleKey.FAIRNESS_SCORE, weight=-1.0)

def test_weights_need_not_sum_to_one():
    config = default_assignment_config().with_soft_rule("regionScore", weight=7.5)
    config.validate()
    assert config.soft_rules.region_score.weight == 7.5

def test_updates_return_new_config():
    original = default_assignment_config()

    changed = original.with_hard_constraint(HardConstraintKey.REGION_MATCH, False).with_auto_assign(express=False)

    assert original.hard_constraints.region_match.enabled is True
    assert original.auto_assign_express is True
    assert changed.hard_constraints.region_match.enabled is False
    assert changed.auto_assign_express is False
    assert changed.auto_assign_scheduled is True

def test_dict_round_trip():
    config = (
        default_assignment_config()
        .with_hard_constraint("slotCapacity", False)
        .with_soft_rule("loadBalanceScore", enabled=False, weight=0.9)
        .with_auto_assign(scheduled=False)
    )

    assert AssignmentConfig.from_dict(config.to_dict()) == config

def test_from_dict_merges_partial_data_over_defaults():
    config = AssignmentConfig.from_dict({
        "autoAssignExpress": False,
        "hardConstraints": {"activeDriver": {"enabled": False}},
        "softRules": {"fairnessScore": {"enabled": True}},  # no weight -> 0
        "somethingElse": 123,
    })

    assert config.auto_assign_express is False
    assert config.auto_assign_scheduled is True
    assert config.hard_constraints.active_driver.enabled is False
    assert config.hard_constraints.region_match.enabled is True
    assert config.soft_rules.fairness_score.weight == 0.0
    assert config.soft_rules.region_score.weight == 0.4

# --- Policy store ---

def test_store_missing_file_gives_defaults(tmp_path):
    store = AssignmentPolicyStore(tmp_path / "nope.json")
    assert store.load() == default_assignment_config()

def test_store_save_then_load(tmp_path):
    store = AssignmentPolicyStore(tmp_path / "policy" / "assignment.json")
    config = default_assignment_config().with_hard_constraint("regionMatch", False)

    store.save(config)

    assert store.load() == config
    document = json.loads(store.path.read_text())
    assert document[STORAGE_KEY]["hardConstraints"]["regionMatch"] == {"enabled": False}

def test_store_corrupt_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "assignment.json"
    path.write_text("{not json")

    config = AssignmentPolicyStore(path).load()

    assert config == default_assignment_config()
    assert "Failed to load assignment config" in caplog.text

def test_store_update(tmp_path):
    store = AssignmentPolicyStore(tmp_path / "assignment.json")

    updated = store.update(lambda c: c.with_soft_rule("regionScore", weight=1.0))

    assert updated.soft_rules.region_score.weight == 1.0
    assert store.load() == updated

def test_store_path_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("ASSIGNMENT_CONFIG_PATH", str(tmp_path / "from_env.json"))
    assert AssignmentPolicyStore().path == tmp_path / "from_env.json"

@pytest.mark.parametrize("weight", [float("nan"), float("inf")])
def test_non_finite_weight_rejected(weight):
    with pytest.raises(ValueError):
        AssignmentConfig.from_dict({"softRules": {"regionScore": {"enabled": True, "weight": weight}}})

def test_store_nan_weight_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "assignment.json"
    # json accepts the NaN literal
    path.write_text('{"%s": {"softRules": {"regionScore": {"enabled": true, "weight": NaN}}}}' % STORAGE_KEY)

    config = AssignmentPolicyStore(path).load()

    assert config == default_assignment_config()
    assert "Failed to load assignment config" in caplog.text

def test_store_failed_save_leaves_no_temp_file(tmp_path):
    target = tmp_path / "assignment.json"
    target.mkdir()  # replace onto a directory fails

    with pytest.raises(PolicyStoreError):
        AssignmentPolicyStore(target).save(default_assignment_config())

    assert [p.name for p in tmp_path.iterdir()] == ["assignment.json"]
