from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime


class BookingRequest(BaseModel):
    # Dates are optional here so the validator can report which one is missing
    item_id: int = Field(alias="itemId", gt=0)
    start: Optional[datetime.datetime] = None
    end: Optional[datetime.datetime] = None

    @field_validator("start", "end")
    @classmethod
    def to_local_time(cls, v):
        # Bookings are kept in naive local time
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    class Config:
        populate_by_name = True


class CommentRequest(BaseModel):
    # Blank or missing text is reported by the validator
    text: Optional[str] = None
