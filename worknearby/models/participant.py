from __future__ import annotations

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Float, String

from worknearby.models.base import Base


class ParticipantRole(str, Enum):
    worker = "worker"
    employer = "employer"


class Participant(Base):
    __tablename__ = "participants"
    __table_args__ = (
        CheckConstraint("role IN ('worker', 'employer')", name="ck_participants_role"),
    )

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String(16), nullable=False, index=True)
    # Location stays NULL until the first fix
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    last_active = Column(DateTime, nullable=False)
