"""
cashcard_service.api

API package for the Cash Card service.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, paging and request/response models.
"""

# Package marker.
