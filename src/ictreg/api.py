from fastapi import APIRouter

from ictreg.modules.admins.router import router as admins_router
from ictreg.modules.auth.router import router as auth_router
from ictreg.modules.course_registrations.router import router as course_registrations_router
from ictreg.modules.courses.router import router as courses_router
from ictreg.modules.documents.router import router as documents_router
from ictreg.modules.payments.router import router as payments_router
from ictreg.modules.pins.router import router as pins_router
from ictreg.modules.results.router import router as results_router
from ictreg.modules.students.router import profile_router
from ictreg.modules.students.router import router as students_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(students_router, prefix="/students", tags=["Students"])
api_router.include_router(profile_router, prefix="/profile", tags=["Student Profiles"])
api_router.include_router(documents_router, prefix="/documents", tags=["Documents"])

api_router.include_router(courses_router, prefix="/courses", tags=["Courses"])
api_router.include_router(pins_router, prefix="/pins", tags=["Pins"])
api_router.include_router(
    course_registrations_router,
    prefix="/course-registrations",
    tags=["Course Registrations"],
)

api_router.include_router(payments_router, prefix="/payments", tags=["Payments"])
api_router.include_router(results_router, prefix="/results", tags=["Results"])

api_router.include_router(admins_router, prefix="/admins", tags=["Admins"])
