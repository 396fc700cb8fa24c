#Expose the high-level pipeline pieces:
#Candidate filtering (hard rules)
#Scoring / ranking (soft rules)
#Dispatcher orchestrator (recommend one job / auto-assign a batch)

from .candidate_filter import AssignmentFailureReason, evaluate_hard_constraints
from .context import AssignmentContext, count_driver_jobs_today
from .scoring import AssignmentCandidateScore, score_drivers_for_job
from .dispatcher import AutoAssigner, recommend_driver, recommend_driver_id

__all__ = [
    "AssignmentFailureReason",
    "evaluate_hard_constraints",
    "AssignmentContext",
    "count_driver_jobs_today",
    "AssignmentCandidateScore",
    "score_drivers_for_job",
    "AutoAssigner",
    "recommend_driver",
    "recommend_driver_id",
]
