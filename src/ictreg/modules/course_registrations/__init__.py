"""
Course Registrations Module

Registers a student for a course by redeeming a single-use pin. The pin
flip and the registration insert commit together or not at all.

API Endpoints:
- POST /course-registrations - Register with a pin
- GET /course-registrations?matric_no= - A student's registrations

Background Jobs (via APScheduler):
- course_registrations_repair_pins: Runs hourly, reconciles pins and registrations
"""
