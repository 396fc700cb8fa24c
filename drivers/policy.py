"""
Purpose: Central configuration for automatic driver assignment.
What it does:

Stores the operator-tunable assignment policy:

- global toggles (auto-assign scheduled jobs / express jobs)
- hard constraints (filter layer), each with an `enabled` flag
- soft rules (scoring layer), each with `enabled` + relative `weight`

Defaults:

regionScore = 0.4, loadBalanceScore = 0.4, fairnessScore = 0.2

Rule: No scoring logic here. Just parameters, so behaviour can be tuned
without rewriting code. The config is frozen and passed by value into every
scoring call; "changing" it means building a new one with the helpers below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class HardConstraintKey(str, Enum):
    ACTIVE_DRIVER = "activeDriver"    # must be active
    WORKING_HOURS = "workingHours"    # must be within driver's work hours
    REGION_MATCH = "regionMatch"      # pickup region must be covered by the driver
    VEHICLE_MATCH = "vehicleMatch"    # vehicle must be suitable
    SLOT_CAPACITY = "slotCapacity"    # driver must have free capacity in that slot


class SoftRuleKey(str, Enum):
    REGION_SCORE = "regionScore"            # prefer primary region over secondary
    LOAD_BALANCE_SCORE = "loadBalanceScore" # prefer less-loaded drivers
    FAIRNESS_SCORE = "fairnessScore"        # prefer drivers with fewer jobs today


# Wire key -> dataclass field name
_HARD_FIELDS: Dict[HardConstraintKey, str] = {
    HardConstraintKey.ACTIVE_DRIVER: "active_driver",
    HardConstraintKey.WORKING_HOURS: "working_hours",
    HardConstraintKey.REGION_MATCH: "region_match",
    HardConstraintKey.VEHICLE_MATCH: "vehicle_match",
    HardConstraintKey.SLOT_CAPACITY: "slot_capacity",
}

_SOFT_FIELDS: Dict[SoftRuleKey, str] = {
    SoftRuleKey.REGION_SCORE: "region_score",
    SoftRuleKey.LOAD_BALANCE_SCORE: "load_balance_score",
    SoftRuleKey.FAIRNESS_SCORE: "fairness_score",
}


@dataclass(frozen=True)
class RuleConfig:
    enabled: bool = True


@dataclass(frozen=True)
class SoftRuleConfig:
    """
    `weight` is a relative importance. Weights are not required to sum to 1.
    """
    enabled: bool = True
    weight: float = 0.0


@dataclass(frozen=True)
class HardConstraints:
    active_driver: RuleConfig = field(default_factory=RuleConfig)
    working_hours: RuleConfig = field(default_factory=RuleConfig)
    region_match: RuleConfig = field(default_factory=RuleConfig)
    vehicle_match: RuleConfig = field(default_factory=RuleConfig)
    slot_capacity: RuleConfig = field(default_factory=RuleConfig)

    def get(self, key: HardConstraintKey | str) -> RuleConfig:
        return getattr(self, _HARD_FIELDS[HardConstraintKey(key)])


@dataclass(frozen=True)
class SoftRules:
    region_score: SoftRuleConfig = field(default_factory=lambda: SoftRuleConfig(True, 0.4))
    load_balance_score: SoftRuleConfig = field(default_factory=lambda: SoftRuleConfig(True, 0.4))
    fairness_score: SoftRuleConfig = field(default_factory=lambda: SoftRuleConfig(True, 0.2))

    def get(self, key: SoftRuleKey | str) -> SoftRuleConfig:
        return getattr(self, _SOFT_FIELDS[SoftRuleKey(key)])


@dataclass(frozen=True)
class AssignmentConfig:
    """
    Configurable assignment behaviour.

    Notes:
    - A disabled hard constraint is a no-op (always passes), not a stricter filter.
    - A disabled soft rule contributes exactly 0 to every candidate's score.
    """

    # --- Global toggles ---
    # If False, scheduled jobs always go to manual assignment.
    auto_assign_scheduled: bool = True
    # If False, express (ad-hoc) jobs always go to manual assignment.
    auto_assign_express: bool = True

    # --- Filter layer ---
    hard_constraints: HardConstraints = field(default_factory=HardConstraints)

    # --- Scoring layer ---
    soft_rules: SoftRules = field(default_factory=SoftRules)

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        for f in fields(self.soft_rules):
            rule = getattr(self.soft_rules, f.name)
            if not math.isfinite(rule.weight) or rule.weight < 0:
                raise ValueError(f"{f.name} weight must be a finite number >= 0")

    # --- Immutable updates ---

    def with_hard_constraint(self, key: HardConstraintKey | str, enabled: bool) -> AssignmentConfig:
        name = _HARD_FIELDS[HardConstraintKey(key)]
        hard = replace(self.hard_constraints, **{name: RuleConfig(enabled=enabled)})
        return replace(self, hard_constraints=hard)

    def with_soft_rule(
        self,
        key: SoftRuleKey | str,
        *,
        enabled: Optional[bool] = None,
        weight: Optional[float] = None,
    ) -> AssignmentConfig:
        name = _SOFT_FIELDS[SoftRuleKey(key)]
        current: SoftRuleConfig = getattr(self.soft_rules, name)
        rule = SoftRuleConfig(
            enabled=current.enabled if enabled is None else enabled,
            weight=current.weight if weight is None else weight,
        )
        updated = replace(self, soft_rules=replace(self.soft_rules, **{name: rule}))
        updated.validate()
        return updated

    def with_auto_assign(
        self,
        *,
        scheduled: Optional[bool] = None,
        express: Optional[bool] = None,
    ) -> AssignmentConfig:
        return replace(
            self,
            auto_assign_scheduled=self.auto_assign_scheduled if scheduled is None else scheduled,
            auto_assign_express=self.auto_assign_express if express is None else express,
        )

    # --- Wire format (camelCase, same shape the admin settings screen persists) ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "autoAssignScheduled": self.auto_assign_scheduled,
            "autoAssignExpress": self.auto_assign_express,
            "hardConstraints": {
                key.value: {"enabled": self.hard_constraints.get(key).enabled}
                for key in HardConstraintKey
            },
            "softRules": {
                key.value: {
                    "enabled": self.soft_rules.get(key).enabled,
                    "weight": self.soft_rules.get(key).weight,
                }
                for key in SoftRuleKey
            },
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssignmentConfig:
        """
        Merge a (possibly partial) persisted config over the defaults.

        Missing keys keep their default; a rule object that is present replaces
        the default rule as a whole (a rule without `weight` gets weight 0).
        Unknown keys are ignored.
        """
        config = default_assignment_config()

        config = config.with_auto_assign(
            scheduled=_optional_bool(data.get("autoAssignScheduled")),
            express=_optional_bool(data.get("autoAssignExpress")),
        )

        hard_data = data.get("hardConstraints") or {}
        for key in HardConstraintKey:
            rule = hard_data.get(key.value)
            if isinstance(rule, Mapping):
                config = config.with_hard_constraint(key, bool(rule.get("enabled", False)))

        soft_data = data.get("softRules") or {}
        for key in SoftRuleKey:
            rule = soft_data.get(key.value)
            if isinstance(rule, Mapping):
                weight = rule.get("weight")
                config = config.with_soft_rule(
                    key,
                    enabled=bool(rule.get("enabled", False)),
                    weight=float(weight) if weight is not None else 0.0,
                )

        config.validate()
        return config


def _optional_bool(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


def default_assignment_config() -> AssignmentConfig:
    """
    Convenience factory for the default policy.
    """
    c = AssignmentConfig()
    c.validate()
    return c
