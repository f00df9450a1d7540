"""
Courses Module

Course catalogs per department, level and semester, and the code lookup
used by pin generation, course registration and result ingestion.
"""
