"""Column mutation operations for kanbandoc boards."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from kanbandoc.errors import InvalidIndexError
from kanbandoc.ids import IdGenerator
from kanbandoc.model.archive import add_entries
from kanbandoc.model.document import BoardDocument, Column
from kanbandoc.model.relations import detach
from kanbandoc.model.task import require_column
from kanbandoc.model.templates import Template, create_columns_from_template
from kanbandoc.palette import COLOR_ATTEMPTS, is_hex_color, pick_distinct_color

logger = logging.getLogger(__name__)

COLUMN_FIELDS = frozenset({"title", "highlight_color", "minimized"})


def add_column(
    doc: BoardDocument,
    title: str,
    ids: IdGenerator | None = None,
    rng: random.Random | None = None,
    color_attempts: int = COLOR_ATTEMPTS,
) -> BoardDocument:
    """Append an empty column with a colour no other column uses."""
    ids = ids or IdGenerator()
    existing = [col.highlight_color for col in doc.columns.values()]
    col = Column(id=ids.new_id(), title=title, highlight_color=pick_distinct_color(existing, rng, color_attempts))
    columns = dict(doc.columns)
    columns[col.id] = col
    logger.debug("add column %s (%s)", col.id, title)
    return replace(doc, columns=columns, column_order=doc.column_order + (col.id,))


def reorder_columns(doc: BoardDocument, from_index: int, to_index: int) -> BoardDocument:
    """Move the column at from_index in column_order to to_index."""
    size = len(doc.column_order)
    for index in (from_index, to_index):
        if not 0 <= index < size:
            raise InvalidIndexError(f"Column index {index} out of range for {size} columns")
    if from_index == to_index:
        return doc
    order = list(doc.column_order)
    order.insert(to_index, order.pop(from_index))
    return replace(doc, column_order=tuple(order))


def delete_column(doc: BoardDocument, column_id: str) -> BoardDocument:
    """Remove a column and discard its tasks for good.

    Callers are expected to confirm with the user first; this does not ask.
    """
    col = require_column(doc, column_id)
    columns = {cid: c for cid, c in doc.columns.items() if cid != column_id}
    logger.debug("delete column %s with %d tasks", column_id, len(col.tasks))
    return replace(
        doc,
        columns=detach(columns, [task.id for task in col.tasks]),
        column_order=tuple(cid for cid in doc.column_order if cid != column_id),
    )


def update_column(doc: BoardDocument, column_id: str, patch: dict) -> BoardDocument:
    """Shallow-merge title, highlight_color and/or minimized into a column."""
    col = require_column(doc, column_id)
    unknown = set(patch) - COLUMN_FIELDS
    if unknown:
        raise ValueError(f"Cannot update column field(s): {', '.join(sorted(unknown))}")
    color = patch.get("highlight_color")
    if color is not None and not is_hex_color(color):
        raise ValueError(f"Not a hex colour: {color!r}")
    updated = replace(col, **patch)
    if updated == col:
        return doc
    columns = dict(doc.columns)
    columns[column_id] = updated
    return replace(doc, columns=columns)


def archive_column(doc: BoardDocument, column_id: str, as_of_date: str) -> BoardDocument:
    """Archive every task in a column in one step, leaving the column empty.

    Each archived copy records the column's title and colour, since the
    column may be renamed or deleted later.
    """
    col = require_column(doc, column_id)
    if not col.tasks:
        return doc
    archived = [
        replace(
            task,
            archived_at=as_of_date,
            highlight_color=col.highlight_color,
            column_title=col.title,
            parent_id=None,
            subtasks=(),
        )
        for task in col.tasks
    ]
    columns = dict(doc.columns)
    columns[column_id] = replace(col, tasks=())
    logger.debug("archive %d tasks from column %s on %s", len(archived), column_id, as_of_date)
    return replace(
        doc,
        columns=detach(columns, [task.id for task in col.tasks]),
        archive_history=add_entries(doc.archive_history, archived, as_of_date),
    )


def apply_template(
    doc: BoardDocument,
    template_name: str,
    ids: IdGenerator | None = None,
    rng: random.Random | None = None,
    templates: dict[str, Template] | None = None,
    color_attempts: int = COLOR_ATTEMPTS,
) -> BoardDocument:
    """Replace the board's columns with a template's fresh, empty columns.

    The archive, description and gradient are kept.
    """
    columns = create_columns_from_template(template_name, ids, rng, templates, color_attempts)
    return replace(doc, columns=columns, column_order=tuple(columns))
