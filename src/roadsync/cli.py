"""Command-line interface for roadsync."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from roadsync import (
    CONFIG_FILENAME,
    ConfigError,
    ItemKind,
    ItemLayer,
    ItemPriority,
    ItemStatus,
    ParseError,
    ProjectURLError,
    ProviderError,
    PullResult,
    PushResult,
    RemoteItem,
    Roadmap,
    RoadmapItem,
    RoadmapStore,
    RoadmapValidationError,
    RoadSync,
    RoadSyncConfig,
    StoreWriteError,
    default_board_url,
    detect_owner,
    load_config,
    scaffold_config,
    write_config,
)
from roadsync.engine.pull import slugify, unique_label
from roadsync.providers.github.mapper import parse_project_url

_DEFAULT_CONFIG = f"./{CONFIG_FILENAME}"


def _validate_board_url(value: str) -> bool | str:
    candidate = value.strip()
    if not candidate:
        return "Board URL is required"
    try:
        parse_project_url(candidate)
    except ProjectURLError:
        return "Use a full GitHub Projects URL (orgs|users)/<owner>/projects/<number>"
    return True


def _validate_start_date(value: str) -> bool | str:
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return "Use an ISO date (YYYY-MM-DD)"
    return True


def _package_version() -> str:
    try:
        return version("roadsync")
    except PackageNotFoundError:
        return "0.0.0"


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=_DEFAULT_CONFIG, help=f"Path to {CONFIG_FILENAME}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roadsync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help=f"Generate a {CONFIG_FILENAME} config and an empty roadmap")
    init_parser.add_argument(
        "--output", "-o", default=CONFIG_FILENAME, help=f"Output file path (default: {CONFIG_FILENAME})"
    )
    init_parser.add_argument("--defaults", action="store_true", help="Use defaults without prompting")

    add_parser = subparsers.add_parser("add", help="Add an item to the roadmap")
    _add_config_args(add_parser)
    add_parser.add_argument("--title", help="Item title")
    add_parser.add_argument("--label", help="Unique item label (default: derived from the title)")
    add_parser.add_argument("--description", help="Item description")
    add_parser.add_argument("--kind", choices=[kind.value for kind in ItemKind], help="Item kind (default: task)")
    add_parser.add_argument(
        "--layer", choices=[layer.value for layer in ItemLayer], help="Item layer (default: backend)"
    )
    add_parser.add_argument(
        "--priority", choices=[priority.value for priority in ItemPriority], help="Item priority (default: P3)"
    )
    add_parser.add_argument(
        "--status", choices=[status.value for status in ItemStatus], default="pending", help="Item status"
    )
    add_parser.add_argument("--start-date", help="ISO start date (default: today)")

    list_parser = subparsers.add_parser("list", help="Show roadmap items grouped by status")
    _add_config_args(list_parser)
    list_parser.add_argument(
        "--status", choices=[status.value for status in ItemStatus], help="Only show items with this status"
    )

    push_parser = subparsers.add_parser("push", help="Push roadmap items to the board")
    _add_config_args(push_parser)
    push_parser.add_argument("--dry-run", action="store_true", help="Preview mode")
    push_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    pull_parser = subparsers.add_parser("pull", help="Pull board statuses into the roadmap")
    _add_config_args(pull_parser)
    new_mode = pull_parser.add_mutually_exclusive_group()
    new_mode.add_argument("--accept-new", action="store_true", help="Import every new board item without prompting")
    new_mode.add_argument("--reject-new", action="store_true", help="Skip every new board item without prompting")
    pull_parser.add_argument("--dry-run", action="store_true", help="Preview mode")
    pull_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def _store_for(config: RoadSyncConfig) -> RoadmapStore:
    return RoadmapStore(config.store_path)


# -- push -----------------------------------------------------------------


async def _run_push(args: argparse.Namespace) -> PushResult:
    config = load_config(args.config)

    if not args.verbose:
        from roadsync.progress import RichSyncProgress

        with RichSyncProgress() as progress:
            result = await RoadSync.from_config(config, progress=progress).push(dry_run=args.dry_run)
    else:
        result = await RoadSync.from_config(config).push(dry_run=args.dry_run)

    print(_format_push_summary(result, config))
    return result


def _format_push_summary(result: PushResult, config: RoadSyncConfig) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"roadsync - push complete ({mode})",
        "",
        f"  Board:      {config.board_url}",
        f"  Roadmap:    {config.store_path}",
        "",
        f"  Created:    {result.created}",
        f"  Updated:    {result.updated}",
        f"  Unchanged:  {result.unchanged}",
        f"  Failed:     {len(result.failed)}",
    ]
    for failure in result.failed:
        lines.append(f"    - {failure.label}: {failure.reason}")

    if result.dry_run and result.changes:
        lines.append("")
        lines.append("  Planned:")
        for change in result.changes:
            fields = ", ".join(sorted(change.fields.model_dump(exclude_none=True))) if change.fields else ""
            lines.append(f"    - {change.action} {change.label} ({fields})")

    if result.warnings:
        lines.append("")
        lines.append("  Warnings:")
        lines.extend(f"    - {warning}" for warning in result.warnings)

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


# -- pull -----------------------------------------------------------------


async def _fetch_pull(args: argparse.Namespace, config: RoadSyncConfig) -> tuple[RoadSync, Roadmap, PullResult]:
    if not args.verbose:
        from roadsync.progress import RichSyncProgress

        with RichSyncProgress() as progress:
            rs = RoadSync.from_config(config, progress=progress)
            roadmap, result = await rs.pull()
    else:
        rs = RoadSync.from_config(config)
        roadmap, result = await rs.pull()
    return rs, roadmap, result


def _run_pull(args: argparse.Namespace) -> PullResult:
    config = load_config(args.config)
    rs, roadmap, result = asyncio.run(_fetch_pull(args, config))

    interactive = sys.stdin.isatty()
    accepted = _choose_new_items(result.new_from_remote, args=args, interactive=interactive)
    removed = _choose_orphans(result.orphan_local, interactive=interactive)

    rs.apply_pull(roadmap, result, accepted=accepted, removed_labels=removed, dry_run=args.dry_run)
    print(_format_pull_summary(result, config, accepted=accepted, removed=removed, dry_run=args.dry_run))
    return result


def _choose_new_items(
    candidates: list[RemoteItem], *, args: argparse.Namespace, interactive: bool
) -> list[RemoteItem]:
    if not candidates or args.reject_new:
        return []
    if args.accept_new:
        return list(candidates)
    if not interactive:
        return []

    import questionary

    selected = questionary.checkbox(
        "Import these new board items into the roadmap?",
        choices=[questionary.Choice(remote.title, value=remote.id) for remote in candidates],
    ).ask()
    if selected is None:
        raise KeyboardInterrupt
    return [remote for remote in candidates if remote.id in set(selected)]


def _choose_orphans(orphans: list[RoadmapItem], *, interactive: bool) -> set[str]:
    if not orphans or not interactive:
        return set()

    import questionary

    selected = questionary.checkbox(
        "These roadmap items are not on the board. Select any to remove locally (the rest are kept):",
        choices=[questionary.Choice(f"{item.label}: {item.title}", value=item.label) for item in orphans],
    ).ask()
    if selected is None:
        raise KeyboardInterrupt
    return set(selected)


def _format_pull_summary(
    result: PullResult,
    config: RoadSyncConfig,
    *,
    accepted: list[RemoteItem],
    removed: set[str],
    dry_run: bool,
) -> str:
    mode = "dry-run" if dry_run else "apply"

    def _fmt(values: list[str]) -> str:
        if not values:
            return "none"
        return ", ".join(values)

    lines = [
        "",
        f"roadsync - pull complete ({mode})",
        "",
        f"  Board:      {config.board_url}",
        f"  Roadmap:    {config.store_path}",
        "",
        f"  Updated:    {result.updated} ({_fmt(result.updated_labels)})",
        f"  New:        {len(result.new_from_remote)} ({len(accepted)} imported)",
        f"  Orphans:    {len(result.orphan_local)} ({len(removed)} removed)",
        f"  Failed:     {len(result.failed)}",
    ]
    for failure in result.failed:
        lines.append(f"    - {failure.label}: {failure.reason}")

    skipped = [remote.title for remote in result.new_from_remote if remote not in accepted]
    if skipped:
        lines.append("")
        lines.append(f"  Not imported: {_fmt(skipped)}")
    kept = [item.label for item in result.orphan_local if item.label not in removed]
    if kept:
        lines.append(f"  Not on board: {_fmt(kept)}")

    if result.warnings:
        lines.append("")
        lines.append("  Warnings:")
        lines.extend(f"    - {warning}" for warning in result.warnings)

    if dry_run:
        lines.append("")
        lines.append("  [dry-run] Roadmap was not written")

    lines.append("")
    return "\n".join(lines)


# -- list -----------------------------------------------------------------


def _run_list(args: argparse.Namespace) -> int:
    from rich.console import Console
    from rich.table import Table

    config = load_config(args.config)
    roadmap = _store_for(config).load()
    console = Console()

    if not roadmap.items:
        console.print(f"No items in {config.store_path}")
        return 0

    statuses = [ItemStatus(args.status)] if args.status else list(ItemStatus)
    for status in statuses:
        items = sorted(
            (item for item in roadmap.items if item.status == status),
            key=lambda item: (item.priority.rank, item.start_date, item.label),
        )
        if not items:
            continue
        table = Table(title=f"{status.value} ({len(items)})", title_justify="left")
        table.add_column("Priority")
        table.add_column("Label", style="cyan")
        table.add_column("Title")
        table.add_column("Kind")
        table.add_column("Layer")
        table.add_column("Start")
        for item in items:
            table.add_row(
                item.priority.value,
                item.label,
                item.title,
                item.kind.value,
                item.layer.value,
                item.start_date.isoformat(),
            )
        console.print(table)
    return 0


# -- add ------------------------------------------------------------------


def _run_add(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    store = _store_for(config)
    roadmap = store.load()

    if args.title is None or args.description is None:
        if not sys.stdin.isatty():
            raise ConfigError("--title and --description are required in non-interactive mode")
        _prompt_add(args, roadmap)

    title = args.title.strip()
    label = (args.label or "").strip() or unique_label(slugify(title), roadmap.labels)
    start = args.start_date or date.today().isoformat()
    if _validate_start_date(start) is not True:
        raise ConfigError(f"invalid --start-date: {start!r}")

    item = RoadmapItem(
        title=title,
        label=label,
        description=args.description.strip(),
        kind=ItemKind(args.kind or ItemKind.TASK),
        layer=ItemLayer(args.layer or ItemLayer.BACKEND),
        priority=ItemPriority(args.priority or ItemPriority.P3),
        status=ItemStatus(args.status),
        start_date=date.fromisoformat(start),
    )
    store.save(roadmap.model_copy(update={"items": [*roadmap.items, item]}))
    print(f"Added {item.label!r} to {store.path}")
    return 0


def _prompt_add(args: argparse.Namespace, roadmap: Roadmap) -> None:
    """Fill missing ``add`` arguments from interactive prompts."""
    import questionary

    if args.title is None:
        args.title = questionary.text("Title:", validate=lambda v: len(v.strip()) > 0 or "Title is required").ask()
        if args.title is None:
            raise KeyboardInterrupt
    if args.label is None:
        suggested = unique_label(slugify(args.title), roadmap.labels)
        args.label = questionary.text(
            "Label:",
            default=suggested,
            validate=lambda v: v.strip() not in roadmap.labels or "Label is already used",
        ).ask()
        if args.label is None:
            raise KeyboardInterrupt
    if args.description is None:
        args.description = questionary.text(
            "Description:", validate=lambda v: len(v.strip()) > 0 or "Description is required"
        ).ask()
        if args.description is None:
            raise KeyboardInterrupt
    if args.kind is None:
        args.kind = questionary.select("Kind:", choices=[kind.value for kind in ItemKind], default="task").ask()
        if args.kind is None:
            raise KeyboardInterrupt
    if args.layer is None:
        args.layer = questionary.select(
            "Layer:", choices=[layer.value for layer in ItemLayer], default="backend"
        ).ask()
        if args.layer is None:
            raise KeyboardInterrupt
    if args.priority is None:
        args.priority = questionary.select(
            "Priority:", choices=[priority.value for priority in ItemPriority], default="P3"
        ).ask()
        if args.priority is None:
            raise KeyboardInterrupt
    if args.start_date is None:
        args.start_date = questionary.text(
            "Start date:", default=date.today().isoformat(), validate=_validate_start_date
        ).ask()
        if args.start_date is None:
            raise KeyboardInterrupt


# -- init -----------------------------------------------------------------


def _run_init(args: argparse.Namespace) -> int:
    """Run the init wizard or defaults mode."""
    output = Path(args.output)

    if output.exists():
        if args.defaults:
            print(f"error: {output} already exists (use a different --output path)", file=sys.stderr)
            return 2
        try:
            import questionary

            if not questionary.confirm(f"{output} already exists. Overwrite?", default=False).ask():
                print("Aborted.")
                return 2
        except KeyboardInterrupt:
            print("\nAborted.")
            return 2

    if args.defaults:
        return _run_init_defaults(output)
    return _run_init_interactive(output)


def _write_init(output: Path, config: dict[str, object]) -> None:
    write_config(config, output)
    print(f"Config written to {output}")

    store = RoadmapStore(output.parent / str(config.get("store_path", "roadmap.json")))
    if store.exists():
        print(f"Keeping existing roadmap {store.path}")
        return
    project = output.resolve().parent.name or "roadmap"
    store.init(project)
    print(f"Created empty roadmap {store.path}")


def _run_init_defaults(output: Path) -> int:
    """Generate config with auto-detected defaults, no prompts."""
    board_url = default_board_url(detect_owner())
    try:
        config = scaffold_config(board_url=board_url, include_defaults=True)
        _write_init(output, config)
    except (ConfigError, StoreWriteError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3

    print("\nEdit board_url if your project is under /users/ instead of /orgs/, then run:")
    print(f"  roadsync push --config {output} --dry-run")
    return 0


def _run_init_interactive(output: Path) -> int:
    """Run the interactive wizard using questionary."""
    import questionary

    try:
        board_url = questionary.text(
            "Board URL (GitHub project URL):",
            default=default_board_url(detect_owner()),
            validate=_validate_board_url,
        ).ask()
        if board_url is None:
            raise KeyboardInterrupt

        store_path = questionary.text("Roadmap file path:", default="roadmap.json").ask()
        if store_path is None:
            raise KeyboardInterrupt

        status_field = "Status"
        max_concurrent = 4
        show_advanced = questionary.confirm("Configure advanced options?", default=False).ask()
        if show_advanced is None:
            raise KeyboardInterrupt
        if show_advanced:
            field = questionary.text("Board status field name:", default="Status").ask()
            if field is None:
                raise KeyboardInterrupt
            status_field = field.strip() or "Status"
            mc = questionary.text(
                "Max concurrent operations (1-10):", default="4", validate=lambda v: v.isdigit() and 1 <= int(v) <= 10
            ).ask()
            if mc is None:
                raise KeyboardInterrupt
            max_concurrent = int(mc)

        config = scaffold_config(
            board_url=board_url.strip(),
            store_path=store_path.strip() or "roadmap.json",
            max_concurrent=max_concurrent,
            status_field=status_field,
            include_defaults=True,
        )
        _write_init(output, config)

        print("\nNext steps:")
        print(f"  1. Add items:  roadsync add --config {output}")
        print(f"  2. Preview:    roadsync push --config {output} --dry-run")
        print(f"  3. Push:       roadsync push --config {output}")
        return 0

    except KeyboardInterrupt:
        print("\nAborted.")
        return 2
    except (ConfigError, StoreWriteError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3


# -- entry point ----------------------------------------------------------


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "push":
        result = asyncio.run(_run_push(args))
        return 0 if result.ok else 5
    if args.command == "pull":
        return 0 if _run_pull(args).ok else 5
    if args.command == "list":
        return _run_list(args)
    if args.command == "add":
        return _run_add(args)
    print(f"error: unsupported command: {args.command}", file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "init":
        return _run_init(args)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        return _dispatch(args)
    except KeyboardInterrupt:
        print("\nAborted.")
        return 2
    except (ConfigError, ParseError, RoadmapValidationError, StoreWriteError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except ProviderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover - defensive fallback
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
