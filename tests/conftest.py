"""
Shared test fixtures.
"""

from pathlib import Path
from typing import Generator

import pendulum
import pytest

from routinely import configuration
from routinely.repository import catalog as catalog_repository
from routinely.repository import configuration as configuration_repository
from routinely.repository import entry as entry_repository
from routinely.view import state as view_state


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Point configuration and data paths at a temporary directory and give
    every repository singleton a fresh, unloaded instance.
    """
    original_data_path = configuration.DATA_PATH

    monkeypatch.setattr(configuration, "CONFIG_PATH", tmp_path / "config")
    monkeypatch.setattr(
        configuration, "APP_CONFIG_PATH", tmp_path / "config" / "config.yaml"
    )
    configuration.set_data_path(tmp_path / "data")

    fresh_catalog = catalog_repository.CatalogRepository()
    fresh_entries = entry_repository.EntryRepository()
    fresh_config = configuration_repository.ConfigurationRepository()

    # Patch the singletons where they are defined and where they were imported
    for module_name, attribute, fresh in [
        ("routinely.repository.catalog", "CATALOG_REPO", fresh_catalog),
        ("routinely.repository.entry", "ENTRY_REPO", fresh_entries),
        ("routinely.repository.configuration", "CONFIGURATION_REPO", fresh_config),
        ("routinely.terminal.category", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.subcategory", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.subcategory", "ENTRY_REPO", fresh_entries),
        ("routinely.terminal.field", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.field", "ENTRY_REPO", fresh_entries),
        ("routinely.terminal.entry", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.entry", "ENTRY_REPO", fresh_entries),
        ("routinely.terminal.trend", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.trend", "ENTRY_REPO", fresh_entries),
        ("routinely.terminal.trend", "CONFIGURATION_REPO", fresh_config),
        ("routinely.terminal.completion", "CATALOG_REPO", fresh_catalog),
        ("routinely.terminal.configuration", "CONFIGURATION_REPO", fresh_config),
    ]:
        monkeypatch.setattr(f"{module_name}.{attribute}", fresh)

    from routinely.service.trend import TrendQueryService

    monkeypatch.setattr(
        "routinely.terminal.trend.TREND_SERVICE",
        TrendQueryService(fresh_entries, fresh_catalog),
    )

    yield tmp_path / "data"

    configuration.set_data_path(original_data_path)


@pytest.fixture
def no_header() -> Generator[None, None, None]:
    view_state.set_show_header(False)
    yield
    view_state.set_show_header(True)


@pytest.fixture
def today() -> pendulum.Date:
    return pendulum.date(2024, 1, 5)
