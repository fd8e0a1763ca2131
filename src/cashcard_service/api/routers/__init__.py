"""
cashcard_service.api.routers

Router modules mounted by `cashcard_service.api.app.create_app`.
"""

# Package marker.
