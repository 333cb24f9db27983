"""Headless board commands: export, import, integrity, audit report and query."""

import logging
from pathlib import Path

from ..config import Settings
from ..repositories import FilesystemRepository
from ..services import (
    AuditService,
    ConfigService,
    IntegrityService,
    QueryService,
    TransferService,
)
from ..store import BoardStore, ImportState
from .output import console, error, header, info, line, success, warning

logger = logging.getLogger(__name__)


def open_store(settings: Settings) -> tuple[BoardStore, ConfigService]:
    """Open the board stored under the configured data directory."""
    config_service = ConfigService(settings.data_dir)
    board_config = config_service.get_board_config()
    if config_service.has_config_error:
        warning(f"{config_service.config_error} (using defaults)")

    store = BoardStore(
        FilesystemRepository(settings.data_dir),
        seed_demo=board_config.seed_demo,
    )
    store.open()
    return store, config_service


def run_export(settings: Settings, directory: Path) -> int:
    """Write the current board to an export file."""
    store, _ = open_store(settings)
    try:
        path = TransferService().write_export(store.get_state(), directory)
    except OSError as e:
        logger.warning("Export failed: %s", e)
        error(f"Export failed: {e}")
        return 1
    success(f"Exported board: {path}")
    return 0


def run_import(settings: Settings, path: Path) -> int:
    """Replace the board with a validated export file."""
    store, _ = open_store(settings)
    result = TransferService().read_import_file(path, store.get_state().audit)

    if not result.ok:
        error(f"Import rejected: {path}")
        for message in result.errors:
            line(message)
        return 1

    store.dispatch(ImportState(result.state))
    success(f"Imported {len(result.state.tasks)} task(s) from {path}")
    if result.appended:
        info(f"Repaired {len(result.appended)} duplicate or mismatched id(s)")
    return 0


def run_check(settings: Settings) -> int:
    """Print integrity issues. Exit code 1 when there are any."""
    store, config_service = open_store(settings)
    service = IntegrityService(config_service.get_board_config().placeholder_title)
    issues = service.check(store.get_state())

    if not issues:
        success("No integrity issues found")
        return 0

    header(f"{len(issues)} integrity issue(s)")
    for issue in issues:
        marker = "fixable" if issue.fixable else "manual"
        line(f"[{marker}] {issue.title}: {issue.detail} (task={issue.task_id})")
    return 1


def run_fix(settings: Settings) -> int:
    """Apply every available integrity fix in one batch."""
    store, config_service = open_store(settings)
    service = IntegrityService(config_service.get_board_config().placeholder_title)
    count = service.fix_all(store)
    if count:
        success(f"Fixed {count} task(s)")
    else:
        info("Nothing to fix")
    return 0


def run_audit_report(settings: Settings) -> int:
    """Print the audit log summary."""
    store, _ = open_store(settings)
    console.print(AuditService().summarize(store.get_state().audit), markup=False)
    return 0


def run_query(settings: Settings, expression: str) -> int:
    """List tasks matching a query, column by column."""
    store, config_service = open_store(settings)
    service = QueryService()
    query = service.parse(expression)
    for message in query.warnings:
        warning(message)

    state = store.get_state()
    board_config = config_service.get_board_config()
    total = 0
    for status in board_config.column_ids:
        tasks = service.column_view(state, status, query)
        total += len(tasks)
        header(f"{board_config.column_title(status)} ({len(tasks)})")
        for task in tasks:
            tags = " ".join(f"#{tag}" for tag in task.tags)
            line(f"[{task.priority}] {task.title} {tags}".rstrip())

    info(f"{total} matching task(s)")
    return 0
