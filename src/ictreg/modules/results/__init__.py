"""
Results Module

Course results entered one at a time or imported in bulk from a
spreadsheet. Grades are derived from the score when not supplied.
"""
