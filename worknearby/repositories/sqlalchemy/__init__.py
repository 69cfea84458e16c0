"""SQLAlchemy implementations of repository interfaces."""

from .listing import SqlAlchemyListingRepository
from .participant import SqlAlchemyParticipantRepository

__all__ = [
    "SqlAlchemyParticipantRepository",
    "SqlAlchemyListingRepository",
]
