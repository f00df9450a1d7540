"""
Students Module

Student identities (registration), extended profiles, the merged
composite view and PDF exports.

API Endpoints:
- POST /students/register - Register with a passport photo
- GET /students/check-duplicate - Email/phone duplicate check
- GET /students - Admin listing (search, filters, pagination)
- GET /students/{id} - Composite view
- DELETE /students/{id} - Admin delete
- GET /students/export/pdf, /students/{id}/export/pdf - Admin exports
- POST /profile/update, GET /profile/{reg_no} - Profile upsert and lookup
"""
