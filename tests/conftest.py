from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from componenthost.core.components import ComponentRegistry
from componenthost.core.components.builtins import BuiltInComponents
from componenthost.core.components.parser import JsonComponentParser
from componenthost.core.settings import SettingsFsPaths, SettingsStore

from .helpers.fakes import FakeStyleInjector


def _clear_handlers(name: str) -> None:
    lg = logging.getLogger(name)
    for h in list(lg.handlers):
        # leave pytest capture handlers to pytest
        if isinstance(h, RotatingFileHandler) or type(h) is logging.StreamHandler:
            lg.removeHandler(h)
            h.close()


@pytest.fixture(autouse=True)
def _isolated_componenthost_logger():
    """
    setup_logging attaches handlers to a process-wide logger; start and end
    every test without them.
    """
    _clear_handlers("componenthost")
    yield
    _clear_handlers("componenthost")


@pytest.fixture
def settings_fs(tmp_path):
    """
    Provides an isolated host root with config/ under tmp_path.
    """
    return SettingsFsPaths(root=str(tmp_path))


@pytest.fixture
def store(settings_fs):
    return SettingsStore(fs=settings_fs, logger=None).load()


@pytest.fixture
def styles():
    return FakeStyleInjector()


@pytest.fixture
def registry(store, styles):
    return ComponentRegistry(
        store=store,
        parser=JsonComponentParser(),
        builtins=BuiltInComponents(),
        style_injector=styles,
        logger=None,
    )
