"""
Authentication module for the healthcare portal.

This module provides authentication and authorization functionality including:
- Login, logout and self-registration
- Signed bearer tokens backed by server-side session rows
- The per-request auth gate and role checks
"""
