# models/tracker.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class Tracker(CreatedAtMixin, Base):
     """
     Tracker model - a shared workspace of candidate flats.

     The owner is fixed at creation. Participant rows and flats belong
     to the tracker and are removed with it.
     """
     __tablename__ = "trackers"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     owner_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=False,
          index=True
     )

     # Relationships
     owner = relationship("User", back_populates="owned_trackers")
     participants = relationship(
          "TrackerParticipant",
          back_populates="tracker",
          cascade="all, delete-orphan",
          order_by="TrackerParticipant.id"
     )
     flats = relationship(
          "Flat",
          back_populates="tracker",
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<Tracker(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
