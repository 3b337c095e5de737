from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, TIMESTAMP, Index
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from sqlalchemy import Enum as SQLEnum
import datetime

from .database import Base


# --- ENUM for Booking Status ---
class BookingStatus(str, PyEnum):
    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    # Defined for completeness; no operation moves a booking here yet.
    CANCELED = "CANCELED"


# --- User Model ---
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(512), unique=True, nullable=False)

    items = relationship("Item", back_populates="owner")


# --- Item Model (a thing that can be rented) ---
class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    available = Column(Boolean, nullable=False, default=True)

    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    owner = relationship("User", back_populates="items")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)

    start = Column(TIMESTAMP, nullable=False)
    end = Column(TIMESTAMP, nullable=False)

    item_id = Column(Integer, ForeignKey("items.id"), index=True, nullable=False)
    booker_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    status = Column(SQLEnum(BookingStatus), default=BookingStatus.WAITING, nullable=False)

    item = relationship("Item", lazy="joined", innerjoin=True)
    booker = relationship("User", lazy="joined", innerjoin=True)

    # Every listing query sorts by start within one booker or one item
    __table_args__ = (
        Index('ix_bookings_booker_start', 'booker_id', 'start'),
        Index('ix_bookings_item_start', 'item_id', 'start'),
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    text = Column(Text, nullable=False)

    item_id = Column(Integer, ForeignKey("items.id"), index=True, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    created = Column(TIMESTAMP, default=datetime.datetime.now, nullable=False)

    author = relationship("User", lazy="joined", innerjoin=True)

    @property
    def author_name(self) -> str:
        return self.author.name
