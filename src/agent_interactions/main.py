from __future__ import annotations

import argparse
import json
from typing import Sequence, get_args

from agent_interactions import build_interaction_store
from agent_interactions.config.settings import get_settings
from agent_interactions.export import format_timestamp
from agent_interactions.interactions.models import (
    Interaction,
    PlanReviewInteraction,
    PlanReviewStatus,
    dump_interaction,
)
from agent_interactions.logging_config import configure_logging
from agent_interactions.store import InteractionStore

RESOLUTION_STATUSES = [status for status in get_args(PlanReviewStatus) if status != "pending"]


def _summary(record: Interaction) -> str:
    if isinstance(record, PlanReviewInteraction):
        lines = record.plan.strip().splitlines()
        text = record.title or (lines[0] if lines else "")
        return f"[{record.status}] {text}"
    answered = "answered" if record.response is not None else "unanswered"
    return f"[{answered}] {record.title or record.question}"


def _print_records(records: list[Interaction], as_json: bool) -> None:
    if as_json:
        print(json.dumps([dump_interaction(record) for record in records], indent=2))
        return
    if not records:
        print("No interactions.")
        return
    for record in records:
        print(
            f"{record.id}  {record.type:<11}  {format_timestamp(record.timestamp)}  "
            f"{_summary(record)[:100]}"
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-interactions",
        description="Inspect and manage the persisted agent interaction history",
    )
    parser.add_argument(
        "--storage-context",
        choices=["workspace", "global"],
        help="Override the configured storage scope",
    )
    parser.add_argument(
        "--backend", choices=["file", "db", "memory"], help="Override the storage backend"
    )
    parser.add_argument("--log-level", help="Logging level (default from LOG_LEVEL)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    parser.add_argument("--list", action="store_true", help="List interactions, newest first")
    parser.add_argument(
        "--pending", action="store_true", help="With --list, only pending plan reviews"
    )
    parser.add_argument(
        "--completed", action="store_true", help="With --list, only completed interactions"
    )
    parser.add_argument(
        "--type", choices=["ask_user", "plan_review"], help="With --list, filter by type"
    )
    parser.add_argument("--show", metavar="ID", help="Show a single interaction")
    parser.add_argument("--stats", action="store_true", help="Show interaction counts")
    parser.add_argument("--delete", nargs="+", metavar="ID", help="Delete interactions")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete every interaction except pending plan reviews",
    )
    parser.add_argument("--resolve", metavar="ID", help="Resolve a pending plan review")
    parser.add_argument(
        "--status", choices=RESOLUTION_STATUSES, help="Resolution status for --resolve"
    )
    parser.add_argument(
        "--revision",
        nargs=2,
        action="append",
        metavar=("PART", "INSTRUCTIONS"),
        help="Required revision attached to --resolve (repeatable)",
    )
    parser.add_argument("--export", metavar="ID", help="Export a plan review as Markdown")
    parser.add_argument("--output", help="Target file for --export")
    return parser


def _list(store: InteractionStore, args: argparse.Namespace) -> list[Interaction]:
    if args.pending:
        return store.get_pending_plan_reviews()
    if args.completed:
        records = store.get_completed_interactions()
        if args.type:
            records = [record for record in records if record.type == args.type]
        return records
    if args.type:
        return store.get_interactions_by_type(args.type)
    return store.get_all_interactions()


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    overrides: dict[str, str] = {}
    if args.storage_context:
        overrides["storage_context"] = args.storage_context
    if args.backend:
        overrides["kv_backend"] = args.backend
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(args.log_level or settings.log_level)
    store = build_interaction_store(settings)

    if args.list or args.pending or args.completed or args.type:
        _print_records(_list(store, args), args.json)
        return

    if args.show:
        record = store.get_interaction(args.show)
        if record is None:
            raise SystemExit(f"No interaction with id {args.show}")
        print(json.dumps(dump_interaction(record), indent=2))
        return

    if args.stats:
        stats = store.get_stats()
        if args.json:
            print(json.dumps(stats.model_dump(by_alias=True)))
        else:
            print(f"Interactions: {stats.interactions}")
            print(f"Pending reviews: {stats.pending_reviews}")
        return

    if args.delete:
        before = store.get_stats().interactions
        store.delete_multiple_interactions(args.delete)
        removed = before - store.get_stats().interactions
        print(f"Deleted {removed} interaction(s) from history")
        return

    if args.clear:
        store.clear_all()
        print(f"Cleared history, {store.get_stats().pending_reviews} pending review(s) kept")
        return

    if args.resolve:
        if not args.status:
            raise SystemExit("--resolve requires --status")
        if store.get_pending_interaction(args.resolve) is None:
            raise SystemExit(f"No pending plan review with id {args.resolve}")
        updates: dict[str, object] = {"status": args.status}
        if args.revision:
            updates["required_revisions"] = [
                {"revised_part": part, "revisor_instructions": instructions}
                for part, instructions in args.revision
            ]
        store.update_interaction(args.resolve, updates)
        print(f"Resolved {args.resolve} as {args.status}")
        return

    if args.export:
        path = store.export_plan_to_file(
            args.export, args.output, directory=settings.workspace_dir
        )
        if path is None:
            raise SystemExit(f"No plan review to export with id {args.export}")
        print(f"Plan exported to {path}")
        return

    raise SystemExit(
        "Provide one of --list / --show / --stats / --delete / --clear / --resolve / --export"
    )


if __name__ == "__main__":
    main()
