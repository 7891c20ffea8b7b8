"""Entry point for kanbandoc CLI."""

import logging
import sys

from kanbandoc.cli import build_parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if args.verbose else logging.WARNING,
    )

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
