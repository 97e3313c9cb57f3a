"""Shared fixtures for await-run tests."""

import os
import sys

import pytest

# Ensure tests/await-run/ is on sys.path so test files can import
# the fakes unambiguously (avoids conftest module name collisions).
sys.path.insert(0, os.path.dirname(__file__))

from fake_clock import FakeClock  # noqa: E402
from fake_workflow_run_client import FakeWorkflowRunClient  # noqa: E402


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_client():
    return FakeWorkflowRunClient()


@pytest.fixture
def warned():
    return []
