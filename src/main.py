""" Console entry point. """
import logging
import os
import sys

from shell import Shell


def configure_logging():
    level = logging.DEBUG if os.environ.get("DEBUG") else logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def main():
    configure_logging()
    raise SystemExit(Shell().run())


if __name__ == "__main__":
    main()
