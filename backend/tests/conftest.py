"""
Pytest Configuration and Fixtures

Environment variables are set before any application module is imported,
so settings pick them up and logs go to a temporary directory.
"""

import os
import tempfile

os.environ.setdefault("LOGS_PATH", tempfile.mkdtemp(prefix="hrdesk-logs-"))
os.environ.setdefault("JWT_SECRET", "hrdesk-test-secret-key-with-enough-length")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("DEFAULT_TIMEZONE", "UTC")

import pytest

from hrdesk.domain.models import ActorContext
from tests.fakes import (
    ORG_ID,
    FakeHrRecordsRepository,
    FakeRoleRepository,
    FakeSettingsRepository,
    FakeStaffRepository,
    staff_doc,
)


@pytest.fixture
def staff_repo():
    return FakeStaffRepository([
        staff_doc("u-admin", "Alice Admin", "alice@example.com", role="admin"),
        staff_doc("u-john", "John Doe", "john@example.com"),
        staff_doc("u-jane", "Jane Doe", "jane.doe@example.com"),
        staff_doc("u-smith", "Jane Smith", "jane.smith@example.com"),
        staff_doc("u-clerk", "Carl Clerk", "carl@example.com", role="payroll_officer"),
        staff_doc("u-gone", "Old Timer", "old@example.com", status="archived"),
        staff_doc("u-other", "John Outsider", "outsider@example.com", organization="org-2"),
    ])


@pytest.fixture
def role_repo():
    return FakeRoleRepository()


@pytest.fixture
def records():
    return FakeHrRecordsRepository()


@pytest.fixture
def settings_repo():
    return FakeSettingsRepository({ORG_ID: "UTC"})


@pytest.fixture
def admin(staff_repo):
    return ActorContext.from_document(staff_repo.docs["u-admin"])


@pytest.fixture
def john(staff_repo):
    return ActorContext.from_document(staff_repo.docs["u-john"])
