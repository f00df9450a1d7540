"""
Authentication module.

Universal login for students and admins.
"""
