"""Handler for 'kanbandoc archive' commands."""

from kanbandoc.cli._common import load_board_or_die, output_json


def archive_list(args) -> int:
    """List archived tasks, newest day first."""
    _, doc = load_board_or_die(args)

    if args.json:
        output_json(
            [
                {
                    "date": entry.date,
                    "tasks": [
                        {
                            "id": t.id,
                            "display_id": t.display_id,
                            "content": t.content,
                            "column": t.column_title,
                        }
                        for t in entry.tasks
                    ],
                }
                for entry in doc.archive_history
            ]
        )
    else:
        for entry in doc.archive_history:
            print(entry.date)
            for t in entry.tasks:
                column = f"  [{t.column_title}]" if t.column_title else ""
                print(f"  {t.display_id:>4}  {t.content}{column}")

    return 0
