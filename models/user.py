# models/user.py
from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class User(CreatedAtMixin, Base):
     """
     User model - central authentication table.

     Work address and coordinates are used to estimate commute times
     to candidate flats.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     password_hash = Column(String(255), nullable=False)
     name = Column(String(200), nullable=True)

     # Work location
     work_address = Column(String(500), nullable=True)
     work_latitude = Column(Float, nullable=True)
     work_longitude = Column(Float, nullable=True)

     # Relationships
     owned_trackers = relationship("Tracker", back_populates="owner")
     participations = relationship("TrackerParticipant", back_populates="user")

     @property
     def display_name(self) -> str:
          return self.name or self.email

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}')>"
