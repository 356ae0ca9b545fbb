from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from agent_interactions.interactions.models import PlanReviewInteraction, RequiredPlanRevision

DEFAULT_PLAN_TITLE = "Plan Review"


def format_timestamp(timestamp_ms: int) -> str:
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def render_plan_markdown(review: PlanReviewInteraction) -> str:
    lines = [
        f"# {review.title or DEFAULT_PLAN_TITLE}",
        "",
        f"**Mode:** {review.mode}",
        f"**Status:** {review.status}",
        f"**Date:** {format_timestamp(review.timestamp)}",
        "",
        "---",
        "",
        "",
    ]
    content = "\n".join(lines) + review.plan

    revisions = [
        revision
        for revision in review.required_revisions
        if isinstance(revision, RequiredPlanRevision)
    ]
    if revisions:
        content += "\n\n---\n\n## Comments\n\n"
        for revision in revisions:
            content += f"> {revision.revised_part}\n\n"
            content += f"{revision.revisor_instructions}\n\n"
    return content


def default_export_path(directory: str | Path, now: datetime | None = None) -> Path:
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    stamp = stamp.replace("+00:00", "Z").replace(":", "-").replace(".", "-")
    return Path(directory) / f"plan-review-{stamp}.md"


def write_plan_markdown(review: PlanReviewInteraction, target_path: str | Path) -> Path:
    path = Path(target_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_plan_markdown(review), encoding="utf-8")
    return path
