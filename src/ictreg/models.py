"""
Model registry.

Importing this module registers every ORM model on ``Base.metadata`` so
relationships resolve and Alembic sees the full schema.
"""

from ictreg.core.database import Base
from ictreg.modules.admins.models import Admin, AdminRole
from ictreg.modules.course_registrations.models import CourseRegistration
from ictreg.modules.courses.models import CatalogCourse, CourseCatalog
from ictreg.modules.documents.models import DocumentBundle
from ictreg.modules.payments.models import Payment
from ictreg.modules.pins.models import CoursePin, PinStatus
from ictreg.modules.results.models import Result
from ictreg.modules.students.models import Student, StudentProfile

__all__ = [
    "Base",
    "Admin",
    "AdminRole",
    "CatalogCourse",
    "CourseCatalog",
    "CoursePin",
    "CourseRegistration",
    "DocumentBundle",
    "Payment",
    "PinStatus",
    "Result",
    "Student",
    "StudentProfile",
]
