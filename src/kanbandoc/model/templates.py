"""Named column presets for new boards."""

from __future__ import annotations

import random
from pathlib import Path

import yaml

from kanbandoc.ids import IdGenerator
from kanbandoc.model.document import Column
from kanbandoc.palette import COLOR_ATTEMPTS, is_hex_color, pick_distinct_color

# Each slot is (title, pinned colour or None for a random one).
Template = list[tuple[str, str | None]]

TEMPLATES: dict[str, Template] = {
    "1 Column": [("To Do", None)],
    "Standard 3 columns": [
        ("To Do", "#AF522B"),
        ("In Progress", "#23863D"),
        ("Done", "#3247D8"),
    ],
    "Standard 4 columns": [
        ("To Do", "#AF522B"),
        ("In Progress", "#23863D"),
        ("Done", "#3247D8"),
        ("On Hold", "#9C0029"),
    ],
    "Standard 5 columns": [
        ("To Do", None),
        ("Selected", None),
        ("In Progress", None),
        ("Testing", None),
        ("Done", None),
    ],
}


def _parse_slot(name: str, raw) -> tuple[str, str | None]:
    if isinstance(raw, str):
        return raw, None
    if isinstance(raw, dict) and isinstance(raw.get("title"), str):
        color = raw.get("color")
        if color is not None and not is_hex_color(color):
            raise ValueError(f"Template '{name}': bad colour {color!r}")
        return raw["title"], color
    raise ValueError(f"Template '{name}': column must be a title or {{title, color}}, got {raw!r}")


def load_templates(path: str | Path) -> dict[str, Template]:
    """Read extra templates from a YAML file and merge them over the builtins.

    The file is a mapping of template name to a list of columns, each
    either a plain title or a ``{title: ..., color: "#RRGGBB"}`` mapping.
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of template names")

    templates = dict(TEMPLATES)
    for name, slots in data.items():
        if not isinstance(slots, list):
            raise ValueError(f"Template '{name}': expected a list of columns")
        templates[str(name)] = [_parse_slot(str(name), slot) for slot in slots]
    return templates


def create_columns_from_template(
    template_name: str,
    ids: IdGenerator | None = None,
    rng: random.Random | None = None,
    templates: dict[str, Template] | None = None,
    color_attempts: int = COLOR_ATTEMPTS,
) -> dict[str, Column]:
    """Fresh empty columns for a named template, keyed by id in template order.

    Unknown names give an empty dict. Slots without a pinned colour get
    a random one distinct from the colours already chosen.
    """
    ids = ids or IdGenerator()
    slots = (templates or TEMPLATES).get(template_name)
    if not slots:
        return {}

    used = [color for _, color in slots if color]
    columns: dict[str, Column] = {}
    for title, color in slots:
        if color is None:
            color = pick_distinct_color(used, rng, color_attempts)
            used.append(color)
        column_id = ids.new_id()
        columns[column_id] = Column(id=column_id, title=title, highlight_color=color)
    return columns
