# models/commute_time.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class CommuteTime(Base):
     """
     One participant's estimated commute to one flat, in minutes.
     Null or zero minutes means no data.
     """
     __tablename__ = "commute_times"

     id = Column(Integer, primary_key=True, autoincrement=True)
     flat_id = Column(
          Integer,
          ForeignKey("flats.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     user_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     time_minutes = Column(Integer, nullable=True)

     # Relationships
     flat = relationship("Flat", back_populates="commute_times")
     user = relationship("User")

     def __repr__(self):
          return f"<CommuteTime(flat_id={self.flat_id}, user_id={self.user_id}, minutes={self.time_minutes})>"
