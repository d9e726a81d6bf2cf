# models/flat.py
import enum
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, CreatedAtMixin


class FlatStatus(str, enum.Enum):
     """Pipeline status of a candidate flat."""
     SEEN = "Seen"
     REACHED_OUT = "ReachedOut"
     ANSWERED = "Answered"
     VISIT_ARRANGED = "VisitArranged"
     VISITED = "Visited"
     ACCEPTED = "Accepted"


class Flat(CreatedAtMixin, Base):
     """
     Flat model - a candidate dwelling logged under a tracker.

     Numeric attributes are optional but never negative.
     """
     __tablename__ = "flats"
     __table_args__ = (
          CheckConstraint("price IS NULL OR price >= 0", name="ck_flats_price_non_negative"),
          CheckConstraint("area IS NULL OR area >= 0", name="ck_flats_area_non_negative"),
          CheckConstraint("bedrooms IS NULL OR bedrooms >= 0", name="ck_flats_bedrooms_non_negative"),
          CheckConstraint("bathrooms IS NULL OR bathrooms >= 0", name="ck_flats_bathrooms_non_negative"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     tracker_id = Column(
          Integer,
          ForeignKey("trackers.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     # Listing details
     name = Column(String(255), nullable=False)
     description = Column(Text, nullable=True)
     url = Column(String(1000), nullable=True)
     address = Column(String(500), nullable=True)
     latitude = Column(Float, nullable=True)
     longitude = Column(Float, nullable=True)
     price = Column(Float, nullable=True)
     area = Column(Float, nullable=True)
     bedrooms = Column(Integer, nullable=True)
     bathrooms = Column(Integer, nullable=True)

     status = Column(
          Enum(
               FlatStatus,
               name="flat_status",
               values_callable=lambda statuses: [s.value for s in statuses],
               create_constraint=True
          ),
          nullable=False,
          index=True
     )
     created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

     # Relationships
     tracker = relationship("Tracker", back_populates="flats")
     created_by = relationship("User")
     commute_times = relationship(
          "CommuteTime",
          back_populates="flat",
          cascade="all, delete-orphan",
          order_by="CommuteTime.id"
     )

     def __repr__(self):
          return f"<Flat(id={self.id}, name='{self.name}', status='{self.status.value}')>"
