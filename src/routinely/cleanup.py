# SPDX-License-Identifier: MIT

import atexit

from routinely.repository.catalog import CATALOG_REPO
from routinely.repository.configuration import CONFIGURATION_REPO
from routinely.repository.entry import ENTRY_REPO


def flush_and_sync() -> None:
    CONFIGURATION_REPO.flush()
    CATALOG_REPO.flush()
    ENTRY_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
