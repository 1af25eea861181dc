# SPDX-License-Identifier: MIT

from routinely.cleanup import register_cleanup
from routinely.initialize import initialize
from routinely.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
