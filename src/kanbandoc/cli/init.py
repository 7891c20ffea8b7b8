"""Handler for 'kanbandoc init'."""

from kanbandoc.cli._common import error, id_generator, output_json, repo_path, save, settings
from kanbandoc.config import init_repo, is_git_repo
from kanbandoc.model.column import apply_template
from kanbandoc.model.document import BoardDocument
from kanbandoc.model.templates import TEMPLATES, load_templates
from kanbandoc.palette import random_gradient
from kanbandoc.store import has_board, load_board


def init_board(args) -> int:
    """Create a board from a column template."""
    path = repo_path(args)

    if not is_git_repo(path):
        init_repo(path)

    config = settings(args)
    if has_board(path, args.board, branch=config["branch"]):
        name, doc = load_board(path, args.board, branch=config["branch"])
        columns = [c.title for c in doc.ordered_columns()]
        if args.json:
            output_json({"board": args.board, "name": name, "columns": columns, "created": False})
        else:
            print(f"Board '{args.board}' already initialized at {path}")
        return 0

    templates = TEMPLATES
    if args.templates:
        try:
            templates = load_templates(args.templates)
        except (OSError, ValueError) as e:
            error(f"Cannot read templates: {e}", args.json)

    template = args.template or config["default_template"]
    if template not in templates:
        error(f"Unknown template '{template}'. Available: {', '.join(templates)}", args.json)

    doc = apply_template(
        BoardDocument(gradient_colors=random_gradient()),
        template,
        ids=id_generator(args),
        templates=templates,
        color_attempts=config["color_attempts"],
    )
    name = args.name or args.board
    commit = save(args, name, doc, f"Initialize board {name}")

    columns = [c.title for c in doc.ordered_columns()]
    if args.json:
        output_json({"board": args.board, "name": name, "columns": columns, "created": True, "commit": commit})
    else:
        print(f"Initialized board '{name}' at {path} ({commit[:7]})")
        print(f"Columns: {', '.join(columns)}")

    return 0
