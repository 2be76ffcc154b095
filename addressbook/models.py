from sqlalchemy import Column, Integer, String

from addressbook.db import Base


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    email = Column(String, index=True)
    phone = Column(String)

    def __repr__(self):
        return f"Contact(id={self.id!r}, name={self.name!r})"
