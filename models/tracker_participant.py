# models/tracker_participant.py
import enum
from sqlalchemy import Column, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class ParticipantRole(str, enum.Enum):
     """Role label stored on a participant row."""
     ADMIN = "Admin"
     PARTICIPANT = "Participant"


class TrackerParticipant(CreatedAtMixin, Base):
     """
     Join row granting a user access to a tracker.

     A user appears at most once per tracker, and the tracker owner
     never appears here.
     """
     __tablename__ = "tracker_participants"
     __table_args__ = (
          UniqueConstraint("tracker_id", "user_id", name="uq_tracker_participants_tracker_user"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     tracker_id = Column(
          Integer,
          ForeignKey("trackers.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     role = Column(
          Enum(
               ParticipantRole,
               name="participant_role",
               values_callable=lambda roles: [r.value for r in roles],
               create_constraint=True
          ),
          default=ParticipantRole.PARTICIPANT,
          nullable=False
     )

     # Relationships
     tracker = relationship("Tracker", back_populates="participants")
     user = relationship("User", back_populates="participations")

     def __repr__(self):
          return f"<TrackerParticipant(id={self.id}, tracker_id={self.tracker_id}, user_id={self.user_id}, role='{self.role.value}')>"
