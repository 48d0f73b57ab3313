"""
Healthcare portal API: session-backed authentication, role checks and the
profile, user listing and medical record report endpoints built on them.
"""

__version__ = "1.0.0"
