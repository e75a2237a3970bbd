"""
Shared fixtures for the playground backend tests
"""

import shutil

import pytest
from fastapi.testclient import TestClient

from playground.core.config import Settings
from playground.main import create_app
from playground.sandbox.gateway import build_gateway
from playground.sandbox.workspace import WorkspaceManager


def requires(binary):
    return pytest.mark.skipif(
        shutil.which(binary) is None, reason=f"{binary} not installed"
    )


@pytest.fixture
def scratch_root(tmp_path):
    return tmp_path / "scratch"


@pytest.fixture
def workspaces(scratch_root):
    return WorkspaceManager(scratch_root)


@pytest.fixture
def settings(scratch_root):
    return Settings(
        SCRATCH_ROOT=scratch_root,
        INTERPRET_TIME_LIMIT_S=2,
        RUN_TIME_LIMIT_S=2,
    )


@pytest.fixture
def gateway(settings):
    return build_gateway(settings)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
