"""
Core - configuration, database, Redis, security, and the storage, spreadsheet,
PDF and email collaborators.
"""
