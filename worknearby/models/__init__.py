# Alembic and create_all find the tables through this import
from .base import Base
from .listing import CATEGORY_MAX_LENGTH, DEFAULT_CATEGORY, SUGGESTED_CATEGORIES, Listing
from .participant import Participant, ParticipantRole

__all__ = [
    "Base",
    "Participant",
    "ParticipantRole",
    "Listing",
    "CATEGORY_MAX_LENGTH",
    "DEFAULT_CATEGORY",
    "SUGGESTED_CATEGORIES",
]
