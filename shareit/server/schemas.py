from pydantic import BaseModel, Field, field_validator
import datetime

from .models import BookingStatus


class BookingCreate(BaseModel):
    # The booker comes from the X-Sharer-User-Id header
    item_id: int = Field(alias="itemId")
    start: datetime.datetime
    end: datetime.datetime

    @field_validator("start", "end")
    @classmethod
    def to_local_time(cls, v):
        # Stored timestamps are naive local time
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    class Config:
        populate_by_name = True


class UserShort(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class ItemShort(BaseModel):
    id: int
    name: str
    description: str
    available: bool

    class Config:
        from_attributes = True


class BookingRead(BaseModel):
    id: int
    start: datetime.datetime
    end: datetime.datetime
    status: BookingStatus
    booker: UserShort
    item: ItemShort

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    text: str = Field(min_length=1)


class CommentRead(BaseModel):
    id: int
    text: str
    author_name: str = Field(serialization_alias="authorName")
    created: datetime.datetime

    class Config:
        from_attributes = True
