"""
Record Merger

Builds the composite student view from the identity, the profile and the
document bundle, and provides the in-memory filter and pagination used by
the admin listing.
"""

import math

from ictreg.modules.documents.models import DocumentBundle
from ictreg.modules.documents.schemas import DocumentBundleResponse

from .identity import full_name
from .models import Student, StudentProfile
from .schemas import StudentComposite

# Fields the identity owns; its value wins whenever it has one
IDENTITY_FIELDS = ("surname", "firstname", "middlename", "email", "phone", "passport_url")

# Fields only the profile carries
PROFILE_FIELDS = (
    "dob",
    "department",
    "level",
    "reg_no",
    "matric_no",
    "state_origin",
    "lga_origin",
    "address",
    "nok_surname",
    "nok_firstname",
    "nok_phone",
    "nok_relation",
)


def merge(
    identity: Student | None,
    profile: StudentProfile | None,
    documents: DocumentBundle | None = None,
) -> StudentComposite:
    """
    Merge one student's records into a composite.

    The identity wins for any field it has a non-empty value for; the
    profile supplies the rest. Either side may be missing, but not both.

    Raises:
        ValueError: If both identity and profile are None
    """
    if identity is None and profile is None:
        raise ValueError("merge() needs an identity or a profile")

    values: dict = {}

    for name in IDENTITY_FIELDS:
        identity_value = getattr(identity, name, None) if identity is not None else None
        profile_value = getattr(profile, name, None) if profile is not None else None
        values[name] = identity_value if identity_value else profile_value

    for name in PROFILE_FIELDS:
        values[name] = getattr(profile, name, None) if profile is not None else None

    if identity is not None:
        values["id"] = identity.id
        values["date_registered"] = identity.date_registered
        values["has_identity"] = True
    else:
        values["has_identity"] = False

    if documents is not None:
        values["documents"] = DocumentBundleResponse.model_validate(documents)

    return StudentComposite(**values)


def _normalized(value: str | None) -> str:
    return (value or "").strip().lower()


def matches_query(student: StudentComposite, q: str | None) -> bool:
    """Case-insensitive substring match over name, matric number, email and phone."""
    needle = _normalized(q)
    if not needle:
        return True

    haystack = (
        full_name(student.surname, student.firstname, student.middlename),
        student.matric_no,
        student.email,
        student.phone,
    )
    return any(needle in (value or "").lower() for value in haystack)


def matches_filters(
    student: StudentComposite,
    q: str | None = None,
    department: str | None = None,
    level: str | None = None,
) -> bool:
    """Apply the listing filters; department and level compare trimmed and lowercased."""
    if department and _normalized(student.department) != _normalized(department):
        return False
    if level and _normalized(student.level) != _normalized(level):
        return False
    return matches_query(student, q)


def paginate(
    items: list[StudentComposite],
    page: int,
    limit: int,
) -> tuple[list[StudentComposite], int, int]:
    """
    Slice an already filtered list.

    Returns:
        Tuple of (page items, total count, total pages)
    """
    total = len(items)
    total_pages = math.ceil(total / limit) if limit else 0
    start = (page - 1) * limit
    return items[start : start + limit], total, total_pages
