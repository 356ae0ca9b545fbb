from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Sequence

from pydantic import ValidationError

from agent_interactions.export import default_export_path, write_plan_markdown
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
from agent_interactions.kv_context.interface import KeyValueContext

logger = logging.getLogger(__name__)

STORAGE_KEY = "agent-interactions.interactions"

ASK_USER_PREFIX = "ask"
PLAN_REVIEW_PREFIX = "review"

# Envelope fields are assigned once at creation.
_IMMUTABLE_FIELDS = frozenset({"id", "type", "timestamp"})


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_id(prefix: str, timestamp_ms: int) -> str:
    return f"{prefix}_{timestamp_ms}_{uuid.uuid4().hex[:12]}"


def _newest_first(records: Iterable[Interaction]) -> list[Interaction]:
    # sorted() stays stable with reverse=True, so equal timestamps keep insertion order.
    ordered = sorted(records, key=lambda record: record.timestamp, reverse=True)
    return [record.model_copy(deep=True) for record in ordered]


def _persisted_key(model_cls: type[AskUserInteraction | PlanReviewInteraction], key: str) -> str:
    field = model_cls.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


def _looks_pending(item: Any) -> bool:
    return (
        isinstance(item, Mapping)
        and item.get("type") == "plan_review"
        and item.get("status") == "pending"
    )


class InteractionStore:
    """Persisted history of ask_user prompts and plan reviews.

    The whole collection lives under one key of a ``KeyValueContext``. It is
    loaded once at construction; afterwards the in-memory list is
    authoritative and every mutation writes the full list back before
    returning. A failing write propagates to the caller, leaving the
    in-memory view ahead of durable state.

    Persisted entries that cannot be read as records are not visible through
    the API but are written back unchanged, after the readable records.
    """

    def __init__(
        self,
        context: KeyValueContext,
        *,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._context = context
        self._clock = clock or now_ms
        self._unreadable: list[Any] = []
        self._interactions: list[Interaction] = self._load()

    def _load(self) -> list[Interaction]:
        raw = self._context.get(STORAGE_KEY, [])
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring persisted interactions: expected a list, got %s", type(raw).__name__)
            return []

        records: list[Interaction] = []
        seen: set[str] = set()
        for item in raw:
            try:
                record = interaction_adapter.validate_python(item)
            except ValidationError as exc:
                logger.warning("Keeping unreadable interaction record as is: %s", exc)
                self._unreadable.append(item)
                continue
            if record.id in seen:
                logger.warning("Keeping duplicate interaction id %s as is", record.id)
                self._unreadable.append(item)
                continue
            seen.add(record.id)
            records.append(record)
        return records

    def _persist(self) -> None:
        payload = [dump_interaction(record) for record in self._interactions]
        self._context.set(STORAGE_KEY, payload + self._unreadable)

    def _find_index(self, interaction_id: str) -> int | None:
        for index, record in enumerate(self._interactions):
            if record.id == interaction_id:
                return index
        return None

    def _append(self, record: Interaction) -> str:
        self._interactions.append(record)
        self._persist()
        logger.info("Saved %s interaction %s", record.type, record.id)
        return record.id

    def save_ask_user_interaction(
        self,
        question: str,
        *,
        title: str | None = None,
        agent_name: str | None = None,
        response: str | None = None,
        attachments: Any = None,
        options: Any = None,
        selected_option_labels: Any = None,
        is_debug: bool | None = None,
    ) -> str:
        """Record a confirmation prompt and return its new ``ask_...`` id.

        Only ``question`` must be a string. Every other field is stored as given.
        """
        timestamp = self._clock()
        record = AskUserInteraction(
            id=generate_id(ASK_USER_PREFIX, timestamp),
            timestamp=timestamp,
            question=question,
            title=title,
            agent_name=agent_name,
            response=response,
            attachments=attachments,
            options=options,
            selected_option_labels=selected_option_labels,
            is_debug=is_debug,
        )
        return self._append(record)

    def save_plan_review_interaction(
        self,
        plan: str,
        *,
        title: str | None = None,
        mode: PlanReviewMode | str | None = None,
        status: PlanReviewStatus | str | None = None,
        required_revisions: Sequence[RequiredPlanRevision | Mapping[str, Any]] | None = None,
    ) -> str:
        """Record a plan submitted for review and return its new ``review_...`` id.

        ``mode`` defaults to ``review`` and ``status`` to ``pending``; given
        values are stored as they are.
        """
        timestamp = self._clock()
        record = PlanReviewInteraction(
            id=generate_id(PLAN_REVIEW_PREFIX, timestamp),
            timestamp=timestamp,
            plan=plan,
            title=title,
            mode="review" if mode is None else mode,
            status="pending" if status is None else status,
            required_revisions=list(required_revisions or []),
        )
        return self._append(record)

    def get_interaction(self, interaction_id: str) -> Interaction | None:
        index = self._find_index(interaction_id)
        if index is None:
            return None
        return self._interactions[index].model_copy(deep=True)

    def get_pending_interaction(self, interaction_id: str) -> PlanReviewInteraction | None:
        """Return the plan review only while it still awaits resolution."""
        record = self.get_interaction(interaction_id)
        if record is None or not is_pending(record):
            return None
        return record

    def update_interaction(
        self,
        interaction_id: str,
        updates: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        """Shallow-merge ``updates`` and ``fields`` into an existing record.

        Keys may use either the snake_case attribute or the persisted camelCase
        name. ``id``, ``type`` and ``timestamp`` are never overwritten. Unknown
        ids are ignored.
        """
        index = self._find_index(interaction_id)
        if index is None:
            logger.debug("Update ignored, no interaction %s", interaction_id)
            return

        current = self._interactions[index]
        model_cls = type(current)
        data = current.model_dump(by_alias=True)
        for key, value in {**(updates or {}), **fields}.items():
            persisted = _persisted_key(model_cls, key)
            if persisted in _IMMUTABLE_FIELDS:
                logger.debug("Update of %r ignored on %s", key, interaction_id)
                continue
            data[persisted] = value

        self._interactions[index] = model_cls.model_validate(data)
        self._persist()

    def delete_interaction(self, interaction_id: str) -> None:
        index = self._find_index(interaction_id)
        if index is None:
            logger.debug("Delete ignored, no interaction %s", interaction_id)
            return
        del self._interactions[index]
        self._persist()
        logger.info("Deleted interaction %s", interaction_id)

    def delete_multiple_interactions(self, interaction_ids: Iterable[str]) -> None:
        targets = set(interaction_ids)
        if not targets:
            return
        remaining = [record for record in self._interactions if record.id not in targets]
        removed = len(self._interactions) - len(remaining)
        if not removed:
            return
        self._interactions = remaining
        self._persist()
        logger.info("Deleted %d interactions", removed)

    def clear_all(self) -> None:
        """Remove every record except plan reviews still awaiting resolution."""
        kept = [record for record in self._interactions if is_pending(record)]
        removed = len(self._interactions) - len(kept)
        self._interactions = kept
        self._unreadable = [item for item in self._unreadable if _looks_pending(item)]
        self._persist()
        logger.info("Cleared %d interactions, kept %d pending reviews", removed, len(kept))

    def get_all_interactions(self) -> list[Interaction]:
        return _newest_first(self._interactions)

    def get_pending_plan_reviews(self) -> list[PlanReviewInteraction]:
        return _newest_first(record for record in self._interactions if is_pending(record))

    def get_completed_interactions(self) -> list[Interaction]:
        return _newest_first(record for record in self._interactions if not is_pending(record))

    def get_interactions_by_type(self, interaction_type: InteractionType) -> list[Interaction]:
        return _newest_first(
            record for record in self._interactions if record.type == interaction_type
        )

    def get_stats(self) -> InteractionStats:
        return InteractionStats(
            interactions=len(self._interactions),
            pending_reviews=sum(1 for record in self._interactions if is_pending(record)),
        )

    def export_plan_to_file(
        self,
        interaction_id: str,
        target_path: str | Path | None = None,
        *,
        directory: str | Path | None = None,
    ) -> Path | None:
        """Write a plan review as Markdown; ``None`` if there is no plan to export."""
        record = self.get_interaction(interaction_id)
        if not isinstance(record, PlanReviewInteraction) or not record.plan:
            return None

        path = Path(target_path) if target_path else default_export_path(directory or Path.cwd())
        write_plan_markdown(record, path)
        logger.info("Exported plan %s to %s", interaction_id, path)
        return path
