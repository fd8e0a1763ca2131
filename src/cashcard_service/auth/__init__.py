"""
cashcard_service.auth

Authentication/authorization package.

Responsibilities:
- Password hashing and the pluggable user directory.
- FastAPI auth dependencies (HTTP Basic -> Principal, role checks).
"""

# Package marker.
