"""
Shared fixtures for service tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from ictreg.core.storage import ObjectStorage
from ictreg.modules.students.models import Student, StudentProfile


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def mock_storage():
    """Object storage that hands back a predictable URL."""
    storage = MagicMock(spec=ObjectStorage)
    storage.store = AsyncMock(return_value="https://res.cloudinary.com/demo/image/upload/p.jpg")
    return storage


@pytest.fixture
def sample_student():
    """A registered student identity."""
    student = MagicMock(spec=Student)
    student.id = uuid4()
    student.surname = "Okafor"
    student.firstname = "Ada"
    student.middlename = ""
    student.email = "ada.okafor@example.com"
    student.phone = "08012345678"
    student.password_hash = "hashed"
    student.passport_url = "https://cdn.example.com/identity.jpg"
    student.date_registered = datetime.now(UTC)
    return student


@pytest.fixture
def sample_profile():
    """The profile belonging to sample_student."""
    profile = MagicMock(spec=StudentProfile)
    profile.id = uuid4()
    profile.email = "ada.okafor@example.com"
    profile.surname = "Okafor"
    profile.firstname = "Ada"
    profile.middlename = None
    profile.phone = "08012345678"
    profile.dob = "2004-05-01"
    profile.department = "Computer Science"
    profile.level = "ND1"
    profile.reg_no = "Reg/CS/12345"
    profile.matric_no = "CS/2024/001"
    profile.state_origin = "Enugu"
    profile.lga_origin = "Nsukka"
    profile.address = "12 Unity Road"
    profile.nok_surname = "Okafor"
    profile.nok_firstname = "Chike"
    profile.nok_phone = "08087654321"
    profile.nok_relation = "Father"
    profile.passport_url = "https://cdn.example.com/profile.jpg"
    return profile
