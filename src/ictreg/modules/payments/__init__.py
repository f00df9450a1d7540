"""
Payments Module

Append-only payment records keyed by the caller-supplied payment ID.
"""
