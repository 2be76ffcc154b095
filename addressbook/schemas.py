from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ContactBase(BaseModel):
    name: str
    email: str
    phone: str


class ContactIn(ContactBase):
    # accepted for compatibility with clients that echo it back; never used
    id: Optional[int] = None


class ContactCreate(ContactIn):
    pass


class ContactUpdate(ContactIn):
    pass


class Contact(ContactBase):
    id: int

    class Config:
        from_attributes = True


class ResponseEnvelope(BaseModel, Generic[T]):
    """Wrapper returned by every endpoint."""

    message: str
    data: Optional[T] = None
