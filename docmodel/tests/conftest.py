"""Unit tests configuration file."""

import os

import pytest

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def accounts_manifest() -> str:
    """Path of the manifest declaring markers for the sample Account and Address classes."""
    return f"{FILE_DIR}/manifest/accounts.docmodel"
