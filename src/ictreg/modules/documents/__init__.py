"""
Documents Module

One bundle of admission documents per student: O'Level and JAMB metadata
plus the URLs of every uploaded file.
"""
