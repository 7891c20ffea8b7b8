"""Handlers for 'kanbandoc task' commands."""

import sys

from kanbandoc.cli._common import (
    error,
    find_column,
    find_task,
    id_generator,
    load_board_or_die,
    output_json,
    output_result,
    save,
    task_summary,
)
from kanbandoc.errors import KanbanError
from kanbandoc.model.archive import today
from kanbandoc.model.relations import assignable_subtasks
from kanbandoc.model.task import (
    add_task,
    archive_task,
    delete_task,
    move_task_between_columns,
    set_parent,
    set_subtasks,
    update_task,
)
from kanbandoc.model.taskmap import build_task_map, find_task_column


def _label(task) -> str:
    return f"#{task.display_id} {task.content}"


def task_list(args) -> int:
    """List tasks grouped by column."""
    _, doc = load_board_or_die(args)
    columns = doc.ordered_columns()
    if args.column:
        columns = [find_column(doc, args.column, args.json)]

    if args.json:
        output_json([task_summary(doc, task) for col in columns for task in col.tasks])
    else:
        for col in columns:
            print(col.title)
            for task in col.tasks:
                done = "x" if task.completed else " "
                print(f"  [{done}] {task.display_id:>4}  {task.content}")

    return 0


def task_get(args) -> int:
    """Show one task."""
    _, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)

    if args.json:
        data = task_summary(doc, task)
        data["description"] = task.description
        output_json(data)
        return 0

    tasks = build_task_map(doc)
    col = find_task_column(doc, task.id)
    print(f"{_label(task)}  [{col.title}]")
    if task.due_date:
        print(f"due: {task.due_date}")
    if task.parent_id and task.parent_id in tasks:
        print(f"parent: {_label(tasks[task.parent_id])}")
    for sub_id in task.subtasks:
        if sub_id in tasks:
            print(f"subtask: {_label(tasks[sub_id])}")
    if task.description:
        sys.stdout.write(f"\n{task.description.rstrip()}\n")

    return 0


def task_add(args) -> int:
    """Create a task at the bottom of a column."""
    name, doc = load_board_or_die(args)
    if args.column:
        col = find_column(doc, args.column, args.json)
    else:
        ordered = doc.ordered_columns()
        if not ordered:
            error("Board has no columns.", args.json)
        col = ordered[0]

    doc = add_task(doc, col.id, args.content, ids=id_generator(args))
    task = doc.columns[col.id].tasks[-1]
    changes = {}
    if args.description:
        changes["description"] = args.description
    if args.due:
        changes["due_date"] = args.due
    if changes:
        doc = update_task(doc, task.id, **changes)

    commit = save(args, name, doc, f"Add task: {args.content}")
    output_result(
        {"id": task.id, "display_id": task.display_id, "column": {"id": col.id, "title": col.title}, "commit": commit},
        f"Created task #{task.display_id} in {col.title} ({commit[:7]})",
        args.json,
    )

    return 0


def task_move(args) -> int:
    """Move a task to a column, optionally at a position."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)
    target = find_column(doc, args.column, args.json)
    source = find_task_column(doc, task.id)

    # CLI uses 1-indexed positions, model uses 0-indexed
    position = args.position - 1 if args.position is not None else len(target.tasks)
    doc = move_task_between_columns(doc, task.id, source.id, target.id, position)

    commit = save(args, name, doc, f"Move task #{task.display_id} to {target.title}")
    output_result(
        {"id": task.id, "column": {"id": target.id, "title": target.title}, "commit": commit},
        f"Moved task #{task.display_id} to {target.title} ({commit[:7]})",
        args.json,
    )

    return 0


def task_update(args) -> int:
    """Edit a task's text, due date or completion."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)

    changes = {}
    if args.content is not None:
        changes["content"] = args.content
    if args.description is not None:
        changes["description"] = args.description
    if args.due is not None:
        changes["due_date"] = args.due or None
    if args.completed is not None:
        changes["completed"] = args.completed
    if not changes:
        error("Nothing to update.", args.json)

    doc = update_task(doc, task.id, **changes)

    commit = save(args, name, doc, f"Update task #{task.display_id}")
    output_result(
        {"id": task.id, "commit": commit},
        f"Updated task #{task.display_id} ({commit[:7]})",
        args.json,
    )

    return 0


def task_delete(args) -> int:
    """Delete a task for good."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)

    doc = delete_task(doc, task.id)

    commit = save(args, name, doc, f"Delete task #{task.display_id}")
    output_result(
        {"id": task.id, "commit": commit},
        f"Deleted task #{task.display_id} ({commit[:7]})",
        args.json,
    )

    return 0


def task_archive(args) -> int:
    """Archive a task."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)
    date = args.date or today()

    doc = archive_task(doc, task.id, date)

    commit = save(args, name, doc, f"Archive task #{task.display_id}")
    output_result(
        {"id": task.id, "date": date, "commit": commit},
        f"Archived task #{task.display_id} on {date} ({commit[:7]})",
        args.json,
    )

    return 0


def task_parent(args) -> int:
    """Set or clear a task's parent."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)
    parent = find_task(doc, args.parent, args.json) if args.parent else None

    try:
        doc = set_parent(doc, task.id, parent.id if parent else None)
    except KanbanError as e:
        error(str(e), args.json)

    text = f"under #{parent.display_id}" if parent else "with no parent"
    commit = save(args, name, doc, f"Task #{task.display_id} {text}")
    output_result(
        {"id": task.id, "parent_id": parent.id if parent else None, "commit": commit},
        f"Task #{task.display_id} now {text} ({commit[:7]})",
        args.json,
    )

    return 0


def task_subtasks(args) -> int:
    """Show a task's subtasks, or replace them with the given list (or none with --clear)."""
    name, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)
    tasks = build_task_map(doc)

    if not args.subtasks and not args.clear:
        subs = [tasks[s] for s in task.subtasks if s in tasks]
        if args.json:
            output_json([task_summary(doc, s) for s in subs])
        else:
            for sub in subs:
                print(_label(sub))
        return 0

    subtask_ids = [find_task(doc, ref, args.json).id for ref in args.subtasks or []]
    try:
        doc = set_subtasks(doc, task.id, subtask_ids)
    except KanbanError as e:
        error(str(e), args.json)

    commit = save(args, name, doc, f"Set subtasks of #{task.display_id}")
    output_result(
        {"id": task.id, "subtasks": subtask_ids, "commit": commit},
        f"Task #{task.display_id} has {len(subtask_ids)} subtasks ({commit[:7]})",
        args.json,
    )

    return 0


def task_candidates(args) -> int:
    """List tasks that could become subtasks of a task."""
    _, doc = load_board_or_die(args)
    task = find_task(doc, args.id, args.json)

    candidates = assignable_subtasks(task.id, build_task_map(doc).values(), task.subtasks)

    if args.json:
        output_json([task_summary(doc, c) for c in candidates])
    else:
        for candidate in candidates:
            print(_label(candidate))

    return 0
