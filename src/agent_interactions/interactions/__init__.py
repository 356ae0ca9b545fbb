from agent_interactions.interactions.models import (
    AskUserInteraction,
    Interaction,
    InteractionStats,
    InteractionType,
    PlanReviewInteraction,
    PlanReviewMode,
    PlanReviewStatus,
    RequiredPlanRevision,
    dump_interaction,
    interaction_adapter,
    is_pending,
)

__all__ = [
    "AskUserInteraction",
    "Interaction",
    "InteractionStats",
    "InteractionType",
    "PlanReviewInteraction",
    "PlanReviewMode",
    "PlanReviewStatus",
    "RequiredPlanRevision",
    "dump_interaction",
    "interaction_adapter",
    "is_pending",
]
