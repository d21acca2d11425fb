"""Shared fixtures for termlaunch tests."""

import pytest

from termlaunch import logger, settings
from termlaunch.catalog import FLATPAK, NATIVE, make_catalog, make_entry


@pytest.fixture(autouse=True)
def restore_config():
    """Undo any change a test makes to the module-level configuration."""
    saved = dict(settings.config)
    yield
    settings.config.clear()
    settings.config.update(saved)
    logger.disable()


@pytest.fixture
def catalog():
    return make_catalog([
        make_entry("GIMP.desktop"),
        make_entry("org.mozilla.firefox.desktop", FLATPAK),
        make_entry("Files.desktop"),
        make_entry("firefox.desktop", NATIVE),
    ])
