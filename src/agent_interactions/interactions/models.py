from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

InteractionType = Literal["ask_user", "plan_review"]
# Values the panel writes. Records keep whatever mode and status they were given.
PlanReviewMode = Literal["review", "summary", "progress", "walkthrough", "display"]
PlanReviewStatus = Literal[
    "pending", "approved", "recreateWithChanges", "acknowledged", "closed", "cancelled"
]


class _CamelModel(BaseModel):
    # Persisted keys are camelCase; Python code uses snake_case attributes.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequiredPlanRevision(_CamelModel):
    model_config = ConfigDict(extra="allow")

    revised_part: Any = None
    revisor_instructions: Any = None


class InteractionEnvelope(_CamelModel):
    # Unknown keys are kept so records written by newer clients survive a rewrite.
    model_config = ConfigDict(extra="allow")

    id: str
    timestamp: int


class AskUserInteraction(InteractionEnvelope):
    type: Literal["ask_user"] = "ask_user"
    question: str
    title: Any = None
    agent_name: Any = None
    response: Any = None
    attachments: Any = None
    options: Any = None
    selected_option_labels: Any = None
    is_debug: Any = None


class PlanReviewInteraction(InteractionEnvelope):
    type: Literal["plan_review"] = "plan_review"
    plan: str
    title: Any = None
    mode: Any = "review"
    status: Any = "pending"
    # Entries that are not objects are kept as they were written.
    required_revisions: list[
        Annotated[Union[RequiredPlanRevision, Any], Field(union_mode="left_to_right")]
    ] = Field(default_factory=list)


Interaction = Annotated[
    Union[AskUserInteraction, PlanReviewInteraction], Field(discriminator="type")
]

interaction_adapter: TypeAdapter[Interaction] = TypeAdapter(Interaction)


class InteractionStats(_CamelModel):
    interactions: int = 0
    pending_reviews: int = 0


def dump_interaction(record: InteractionEnvelope) -> dict[str, Any]:
    """JSON-compatible dict in the persisted (camelCase) shape. Unset optionals are omitted."""
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def is_pending(record: AskUserInteraction | PlanReviewInteraction) -> bool:
    return record.type == "plan_review" and record.status == "pending"
