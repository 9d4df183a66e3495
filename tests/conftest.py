"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

from airplane_mode.config import get_config, load_config, reset_config
from airplane_mode.core.protocols import Principal
from airplane_mode.database import init_db, reset_db
from airplane_mode.kernel.policy_gate import PolicyGate
from airplane_mode.kernel.registry import HookRegistry
from airplane_mode.services.option_service import OptionService


@pytest.fixture(autouse=True)
def isolated_db(tmp_path):
    """Use a throwaway SQLite database and config for each test."""
    reset_config()
    reset_db()

    db_path = str(tmp_path / "test.db")
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        f"database:\n  path: {db_path}\n"
        f"log:\n  dir: {tmp_path / 'logs'}\n"
        f"nonce:\n  secret: test-secret\n  lifetime: 3600\n"
    )

    os.chdir(tmp_path)
    load_config(config_file)
    init_db()
    yield tmp_path

    reset_db()
    reset_config()


@pytest.fixture
def options(isolated_db):
    svc = OptionService()
    yield svc
    svc.session.close()


@pytest.fixture
def hooks():
    return HookRegistry()


@pytest.fixture
def gate(options, hooks):
    g = PolicyGate(options, config=get_config(), hooks=hooks)
    g.create_setting()
    return g


@pytest.fixture
def admin():
    return Principal(id=1, capabilities=frozenset({"manage_options"}))


@pytest.fixture
def subscriber():
    return Principal(id=2, capabilities=frozenset({"read"}))
