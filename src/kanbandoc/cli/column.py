"""Handlers for 'kanbandoc column' commands."""

from kanbandoc.cli._common import (
    error,
    find_column,
    id_generator,
    load_board_or_die,
    output_json,
    output_result,
    save,
    settings,
)
from kanbandoc.cli.board import build_column_summaries, format_column_line
from kanbandoc.errors import KanbanError
from kanbandoc.model.archive import today
from kanbandoc.model.column import (
    add_column,
    archive_column,
    delete_column,
    reorder_columns,
    update_column,
)


def column_list(args) -> int:
    """List all columns."""
    _, doc = load_board_or_die(args)
    items = build_column_summaries(doc)

    if args.json:
        output_json(items)
    else:
        for c in items:
            print(format_column_line(c))

    return 0


def column_add(args) -> int:
    """Create a new column at the end of the board."""
    name, doc = load_board_or_die(args)

    doc = add_column(doc, args.title, ids=id_generator(args), color_attempts=settings(args)["color_attempts"])
    col = doc.columns[doc.column_order[-1]]

    commit = save(args, name, doc, f"Add column: {args.title}")
    output_result(
        {"id": col.id, "title": col.title, "color": col.highlight_color, "commit": commit},
        f'Created column "{col.title}" at position {len(doc.column_order)} ({commit[:7]})',
        args.json,
    )

    return 0


def column_move(args) -> int:
    """Move a column to a new position."""
    name, doc = load_board_or_die(args)
    col = find_column(doc, args.id, args.json)

    # CLI uses 1-indexed positions, model uses 0-indexed
    try:
        doc = reorder_columns(doc, doc.column_order.index(col.id), args.position - 1)
    except KanbanError as e:
        error(str(e), args.json)

    commit = save(args, name, doc, f"Move column {col.title} to position {args.position}")
    output_result(
        {"id": col.id, "position": args.position, "commit": commit},
        f"Moved column {col.title} to position {args.position} ({commit[:7]})",
        args.json,
    )

    return 0


def column_update(args) -> int:
    """Change a column's title, colour or minimized state."""
    name, doc = load_board_or_die(args)
    col = find_column(doc, args.id, args.json)

    patch = {}
    if args.title is not None:
        patch["title"] = args.title
    if args.color is not None:
        patch["highlight_color"] = args.color
    if args.minimized is not None:
        patch["minimized"] = args.minimized
    if not patch:
        error("Nothing to update; pass --title, --color, --minimized or --expanded.", args.json)

    try:
        doc = update_column(doc, col.id, patch)
    except (KanbanError, ValueError) as e:
        error(str(e), args.json)

    updated = doc.columns[col.id]
    commit = save(args, name, doc, f"Update column {updated.title}")
    output_result(
        {
            "id": updated.id,
            "title": updated.title,
            "color": updated.highlight_color,
            "minimized": updated.minimized,
            "commit": commit,
        },
        f"Updated column {updated.title} ({commit[:7]})",
        args.json,
    )

    return 0


def column_archive(args) -> int:
    """Archive every task in a column."""
    name, doc = load_board_or_die(args)
    col = find_column(doc, args.id, args.json)
    date = args.date or today()

    doc = archive_column(doc, col.id, date)

    count = len(col.tasks)
    commit = save(args, name, doc, f"Archive {count} tasks from {col.title}")
    output_result(
        {"id": col.id, "archived": count, "date": date, "commit": commit},
        f"Archived {count} tasks from {col.title} on {date} ({commit[:7]})",
        args.json,
    )

    return 0


def column_delete(args) -> int:
    """Delete a column and all of its tasks."""
    name, doc = load_board_or_die(args)
    col = find_column(doc, args.id, args.json)
    if not args.yes:
        error(f"Deleting '{col.title}' discards its {len(col.tasks)} tasks; pass --yes to confirm.", args.json)

    doc = delete_column(doc, col.id)

    commit = save(args, name, doc, f"Delete column {col.title}")
    output_result(
        {"id": col.id, "deleted": len(col.tasks), "commit": commit},
        f"Deleted column {col.title} ({commit[:7]})",
        args.json,
    )

    return 0
