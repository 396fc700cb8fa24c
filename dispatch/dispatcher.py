"""
Purpose: Orchestrator / decision pipeline (the "glue").
What it does:
Takes jobs waiting for a driver, runs filter + scoring + selection for each,
and returns a recommendation per job plus a run summary.

It only recommends. Persisting the assignment, moving the job to "assigned"
and notifying the driver belong to the caller. A job with no recommendation
should be left for manual assignment, not treated as an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from drivers.models import Driver
from drivers.policy import AssignmentConfig, default_assignment_config
from drivers.selection import pick_best_driver
from jobs.models import Job, JobStatus, JobType
from .candidate_filter import AssignmentFailureReason
from .context import AssignmentContext, count_driver_jobs_today
from .scoring import AssignmentCandidateScore, score_drivers_for_job

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentScoreDebug:
    """
    Snapshot of one scoring run, kept on the job for operators
    ("why did auto-assign pick / skip this driver?").
    """
    selected_driver_id: Optional[str]
    candidates: List[AssignmentCandidateScore] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selectedDriverId": self.selected_driver_id,
            "candidates": [c.to_dict() for c in self.candidates],
        }


@dataclass(frozen=True)
class AssignmentDecision:
    job_id: str
    driver_id: Optional[str]
    failure_reason: Optional[AssignmentFailureReason] = None
    debug: Optional[AssignmentScoreDebug] = None

    @property
    def assigned(self) -> bool:
        return self.driver_id is not None


@dataclass(frozen=True)
class AutoAssignSummary:
    total: int
    assigned: int
    failed: int


@dataclass(frozen=True)
class AutoAssignResult:
    summary: AutoAssignSummary
    decisions: List[AssignmentDecision]


def auto_assign_allowed(job: Job, config: AssignmentConfig) -> bool:
    """
    Global toggles: scheduled jobs and express (ad-hoc) jobs can each be
    switched to manual-only.
    """
    if job.job_type == JobType.AD_HOC:
        return config.auto_assign_express
    return config.auto_assign_scheduled


def _failure_reason(scores: Sequence[AssignmentCandidateScore]) -> AssignmentFailureReason:
    reasons = {s.rejection_reason for s in scores if s.rejected}
    if len(reasons) == 1:
        reason = reasons.pop()
        if reason is not None:
            return reason
    return AssignmentFailureReason.NO_ELIGIBLE_DRIVER


def recommend_driver(
    job: Job,
    drivers: Sequence[Driver],
    config: AssignmentConfig,
    context: Optional[AssignmentContext] = None,
) -> AssignmentDecision:
    """
    Score every driver for `job` and pick the best one.

    If auto-assign is switched off for this kind of job the engine is not run
    and the decision carries CONFIG_DISABLED.
    """
    if not auto_assign_allowed(job, config):
        return AssignmentDecision(
            job_id=job.id,
            driver_id=None,
            failure_reason=AssignmentFailureReason.CONFIG_DISABLED,
        )

    scores = score_drivers_for_job(job, drivers, config, context)
    best = pick_best_driver(scores)

    debug = AssignmentScoreDebug(
        selected_driver_id=best.driver_id if best else None,
        candidates=scores,
    )

    if best is None:
        return AssignmentDecision(
            job_id=job.id,
            driver_id=None,
            failure_reason=_failure_reason(scores),
            debug=debug,
        )

    return AssignmentDecision(job_id=job.id, driver_id=best.driver_id, debug=debug)


def recommend_driver_id(
    job: Job,
    drivers: Sequence[Driver],
    config: AssignmentConfig,
    context: Optional[AssignmentContext] = None,
) -> Optional[str]:
    if not drivers:
        return None
    return recommend_driver(job, drivers, config, context).driver_id


class AutoAssigner:
    """
    Walks the jobs waiting for assignment and recommends a driver for each.

    Job counts start from what is already assigned today and are bumped after
    every recommendation, so later jobs in the same run see earlier picks.
    """
    def __init__(self, config: Optional[AssignmentConfig] = None):
        self.config = config or default_assignment_config()
        self.config.validate()

    def run(
        self,
        jobs: Sequence[Job],
        drivers: Sequence[Driver],
        today: date,
        now: Optional[datetime] = None,
    ) -> AutoAssignResult:
        pending = [job for job in jobs if job.status == JobStatus.PENDING_ASSIGNMENT]

        if not pending:
            return AutoAssignResult(summary=AutoAssignSummary(0, 0, 0), decisions=[])

        counts = count_driver_jobs_today(jobs, drivers, today)

        decisions: List[AssignmentDecision] = []
        assigned = 0
        failed = 0

        for job in pending:
            context = AssignmentContext(driver_job_counts=dict(counts), now=now)
            decision = recommend_driver(job, drivers, self.config, context)
            decisions.append(decision)

            if decision.assigned:
                counts[decision.driver_id] = counts.get(decision.driver_id, 0) + 1
                assigned += 1
                logger.info("Job %s -> driver %s", job.id, decision.driver_id)
            else:
                failed += 1
                logger.info(
                    "Job %s left for manual assignment (%s)",
                    job.id,
                    decision.failure_reason.value if decision.failure_reason else None,
                )

        summary = AutoAssignSummary(total=len(pending), assigned=assigned, failed=failed)
        logger.info(
            "Auto-assign finished: %d pending, %d assigned, %d failed",
            summary.total, summary.assigned, summary.failed,
        )
        return AutoAssignResult(summary=summary, decisions=decisions)
