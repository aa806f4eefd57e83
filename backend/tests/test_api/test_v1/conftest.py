"""Shared fixtures for API endpoint tests."""

import pytest
from fastapi.testclient import TestClient

from vulnreport.api import deps
from vulnreport.main import app
from tests.mocks.gitlab import FakeGitLab


@pytest.fixture
def fake_gitlab():
    return FakeGitLab()


@pytest.fixture
def client(fake_gitlab, job_table, cwe_catalog):
    """Test client whose GitLab calls and lookup tables are replaced by fakes."""
    app.dependency_overrides[deps.get_gitlab_service] = lambda: fake_gitlab.service()
    app.dependency_overrides[deps.get_job_table] = lambda: job_table
    app.dependency_overrides[deps.get_cwe_catalog] = lambda: cwe_catalog
    yield TestClient(app)
    app.dependency_overrides.clear()
