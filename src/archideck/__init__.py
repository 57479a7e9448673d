# SPDX-License-Identifier: MIT

from archideck.cleanup import register_cleanup
from archideck.initialize import initialize
from archideck.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
