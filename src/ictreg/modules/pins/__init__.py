"""
Pins Module

Single-use course registration pins. A pin moves from unused to used
exactly once, through a conditional update, and is never flipped back.

API Endpoints (admin):
- POST /pins/generate - Generate a batch of pins for a course
- GET /pins - List pins, optionally by course and status
- DELETE /pins - Delete every pin
- DELETE /pins/{id} - Delete one pin
"""
