"""
cashcard_service.db.base

SQLAlchemy declarative base.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# --- Module Notes -----------------------------------------------------------
# `alembic/env.py` and `db.init_db` both read `Base.metadata`; import `db.models`
# before using it so the cash_card table is registered.
