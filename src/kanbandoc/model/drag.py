"""Turn a finished drag gesture into one document mutation."""

from __future__ import annotations

import logging

from kanbandoc.model.column import reorder_columns
from kanbandoc.model.document import BoardDocument
from kanbandoc.model.task import move_task_between_columns, move_task_within_column

logger = logging.getLogger(__name__)


def locate(doc: BoardDocument, item_id: str) -> tuple[str, int | None] | None:
    """Resolve an id to (column_id, task index).

    A column id resolves to itself with index None. A task id resolves to
    the column holding it and its position there. Unknown ids give None.
    """
    if item_id in doc.columns:
        return item_id, None
    for column_id, col in doc.columns.items():
        for i, task in enumerate(col.tasks):
            if task.id == item_id:
                return column_id, i
    return None


def resolve_drop(doc: BoardDocument, active_id: str, over_id: str) -> BoardDocument:
    """Apply the mutation implied by dropping active_id onto over_id.

    Drops that cannot be resolved leave the document unchanged rather
    than raising: the board may have changed under the pointer.
    """
    if active_id == over_id:
        return doc

    active = locate(doc, active_id)
    over = locate(doc, over_id)
    if active is None or over is None:
        logger.debug("ignoring drop of %s onto %s: unresolved id", active_id, over_id)
        return doc

    active_column, active_index = active
    over_column, over_index = over

    if active_index is None:
        # A column being dragged: land it where the target's column sits.
        if active_column == over_column:
            return doc
        order = doc.column_order
        return reorder_columns(doc, order.index(active_column), order.index(over_column))

    if active_column == over_column:
        last = len(doc.columns[active_column].tasks) - 1
        to_index = last if over_index is None else over_index
        if to_index == active_index:
            return doc
        return move_task_within_column(doc, active_column, active_index, to_index)

    dest_index = len(doc.columns[over_column].tasks) if over_index is None else over_index
    return move_task_between_columns(doc, active_id, active_column, over_column, dest_index)


class DragSession:
    """Drag lifecycle: idle until start(), then one drop() or cancel().

    Nothing touches the document until drop(); cancel() just forgets the
    dragged id.
    """

    def __init__(self) -> None:
        self.active_id: str | None = None

    @property
    def active(self) -> bool:
        return self.active_id is not None

    def start(self, active_id: str) -> None:
        self.active_id = active_id

    def drop(self, doc: BoardDocument, over_id: str | None) -> BoardDocument:
        """Finish the drag over over_id. None means dropped outside any target."""
        active_id = self.active_id
        self.active_id = None
        if active_id is None or over_id is None:
            return doc
        return resolve_drop(doc, active_id, over_id)

    def cancel(self) -> None:
        self.active_id = None
