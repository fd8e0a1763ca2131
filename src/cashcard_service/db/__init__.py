"""
cashcard_service.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide the ORM model, engine/session setup, and the cash card repository.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer only talks to `repositories.cash_cards`; the backing database is
# selected purely by `Settings.database_url`.
