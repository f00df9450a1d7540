"""
Admins Module

Admin accounts (super_admin and admin). Only a super admin can create
admins; the first one comes from scripts/seed_super_admin.py.
"""
