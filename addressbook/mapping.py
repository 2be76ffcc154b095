"""
Conversions between the persisted ``models.Contact`` row and the
``schemas`` transfer shapes.

Fields are copied one by one so that a column added to either side
does not leak through silently.  The input ``id`` is never copied
onto a row: the store assigns it on insert and it never changes.
"""

from addressbook import models, schemas


def to_transfer(contact: models.Contact) -> schemas.Contact:
    return schemas.Contact(
        id=contact.id,
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
    )


def to_model(contact: schemas.ContactIn) -> models.Contact:
    return models.Contact(
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
    )


def apply_update(db_contact: models.Contact, contact: schemas.ContactIn) -> models.Contact:
    db_contact.name = contact.name
    db_contact.email = contact.email
    db_contact.phone = contact.phone
    return db_contact
