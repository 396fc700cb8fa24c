"""
Purpose: Ranking model (the "who is best" layer).
Takes a job, the candidate drivers and the assignment policy.
Runs the hard-constraint filter per driver, then scores every driver that
passed as a weighted sum of soft rules:

- regionScore:      1.0 primary / 0.7 secondary / 0.8 island-wide / 0.2 otherwise
- loadBalanceScore: 1 - min(1, jobs_today / max_jobs_per_day)
- fairnessScore:    1 / (1 + jobs_today)

Output: one score record per driver, in input order (rejected ones included).
Scores are only comparable within one call (same job, same config).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from drivers.models import Driver, RegionCode
from drivers.policy import AssignmentConfig, SoftRuleConfig, SoftRuleKey
from jobs.models import Job
from .candidate_filter import (
    AssignmentFailureReason,
    ConstraintResults,
    evaluate_hard_constraints,
)
from .context import AssignmentContext


@dataclass(frozen=True)
class ScoreComponents:
    """
    Weighted soft-rule values. A disabled rule is exactly 0.
    """
    region_score: float = 0.0
    load_balance_score: float = 0.0
    fairness_score: float = 0.0

    def total(self) -> float:
        return self.region_score + self.load_balance_score + self.fairness_score


@dataclass(frozen=True)
class AssignmentCandidateScore:
    """
    Result for one driver candidate. If `rejected`, total_score and every
    component are 0 and `rejection_reason` says which constraint failed first.
    """
    driver_id: str
    total_score: float
    components: ScoreComponents
    hard_constraints: ConstraintResults
    rejected: bool = False
    rejection_reason: Optional[AssignmentFailureReason] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "driverId": self.driver_id,
            "totalScore": self.total_score,
            "components": {
                SoftRuleKey.REGION_SCORE.value: self.components.region_score,
                SoftRuleKey.LOAD_BALANCE_SCORE.value: self.components.load_balance_score,
                SoftRuleKey.FAIRNESS_SCORE.value: self.components.fairness_score,
            },
            "hardConstraints": self.hard_constraints.to_dict(),
        }
        if self.rejected:
            data["rejected"] = True
            data["rejectionReason"] = self.rejection_reason.value if self.rejection_reason else None
        return data


# -------------------------
# Raw soft-rule values (unweighted)
# -------------------------

def region_score_raw(job: Job, driver: Driver) -> float:
    if driver.primary_region == job.pickup_region:
        return 1.0
    if job.pickup_region in driver.secondary_regions:
        return 0.7
    if driver.primary_region == RegionCode.ISLAND_WIDE:
        return 0.8
    # still possible but least preferred
    return 0.2


def load_balance_raw(jobs_today: int, max_jobs_per_day: int) -> float:
    """
    1 = completely free, 0 = fully loaded (or over).
    """
    max_jobs = max_jobs_per_day or 1
    used_fraction = min(1.0, jobs_today / max_jobs)
    return 1.0 - used_fraction


def fairness_raw(jobs_today: int) -> float:
    # 1.0, 0.5, 0.33, ...
    return 1.0 / (1 + jobs_today)


def _weighted(rule: SoftRuleConfig, raw: float) -> float:
    if not rule.enabled:
        return 0.0
    return raw * (rule.weight or 0.0)


# -------------------------
# Public entry point
# -------------------------

def score_drivers_for_job(
    job: Job,
    drivers: Sequence[Driver],
    config: AssignmentConfig,
    context: Optional[AssignmentContext] = None,
) -> List[AssignmentCandidateScore]:
    """
    Run hard constraints + soft scoring for a job over a list of drivers.

    Every driver appears exactly once in the result, in input order.
    Nothing is mutated; the same inputs always give the same output.
    """
    context = context or AssignmentContext()
    soft = config.soft_rules

    results: List[AssignmentCandidateScore] = []

    for driver in drivers:
        check = evaluate_hard_constraints(job, driver, config.hard_constraints)

        if check.rejected:
            results.append(
                AssignmentCandidateScore(
                    driver_id=driver.id,
                    total_score=0.0,
                    components=ScoreComponents(),
                    hard_constraints=check.passed,
                    rejected=True,
                    rejection_reason=check.rejection_reason,
                )
            )
            continue

        jobs_today = context.jobs_today(driver.id)

        components = ScoreComponents(
            region_score=_weighted(soft.region_score, region_score_raw(job, driver)),
            load_balance_score=_weighted(
                soft.load_balance_score,
                load_balance_raw(jobs_today, driver.max_jobs_per_day),
            ),
            fairness_score=_weighted(soft.fairness_score, fairness_raw(jobs_today)),
        )

        results.append(
            AssignmentCandidateScore(
                driver_id=driver.id,
                total_score=components.total(),
                components=components,
                hard_constraints=check.passed,
            )
        )

    return results
