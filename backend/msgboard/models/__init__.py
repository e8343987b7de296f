"""ORM Models — SQLAlchemy declarative models for users and messages.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM objects never leave infrastructure/; repositories convert them to records

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from msgboard.models.user import User  # noqa: F401
from msgboard.models.message import Message  # noqa: F401
