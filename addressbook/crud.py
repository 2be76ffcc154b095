import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from addressbook import mapping, models, schemas

logger = logging.getLogger(__name__)


def _find_contact(db: Session, contact_id: int) -> Optional[models.Contact]:
    return db.query(models.Contact).filter(models.Contact.id == contact_id).first()


def get_contacts(db: Session) -> List[schemas.Contact]:
    """
    Повертає всі контакти у порядку, в якому їх віддає база.

    :param db: Сесія бази даних.
    :return: Список контактів; порожній, якщо контактів немає.
    """
    return [mapping.to_transfer(contact) for contact in db.query(models.Contact).all()]


def get_contact(db: Session, contact_id: int) -> Optional[schemas.Contact]:
    """
    Шукає контакт за ID.

    :param db: Сесія бази даних.
    :param contact_id: ID контакту.
    :return: Контакт або None, якщо такого ID немає.
    """
    db_contact = _find_contact(db, contact_id)
    if db_contact is None:
        logger.debug("Contact %s not found", contact_id)
        return None
    return mapping.to_transfer(db_contact)


def create_contact(db: Session, contact: schemas.ContactCreate) -> schemas.Contact:
    """
    Створює новий контакт. Поле ``id`` у вхідних даних ігнорується,
    ID призначає база даних.

    :param db: Сесія бази даних.
    :param contact: Дані нового контакту.
    :return: Створений контакт разом з ID.
    """
    db_contact = mapping.to_model(contact)
    db.add(db_contact)
    db.commit()
    db.refresh(db_contact)
    logger.info("Created contact %s", db_contact.id)
    return mapping.to_transfer(db_contact)


def update_contact(db: Session, contact_id: int, contact: schemas.ContactUpdate) -> Optional[schemas.Contact]:
    """
    Перезаписує ім'я, email та телефон існуючого контакту.

    :param db: Сесія бази даних.
    :param contact_id: ID контакту, який оновлюється.
    :param contact: Нові дані контакту; їхній ``id`` ігнорується.
    :return: Оновлений контакт або None, якщо контакт не знайдено
        (у такому разі нічого не записується).
    """
    db_contact = _find_contact(db, contact_id)
    if db_contact is None:
        logger.debug("Contact %s not found, nothing to update", contact_id)
        return None
    mapping.apply_update(db_contact, contact)
    db.commit()
    db.refresh(db_contact)
    logger.info("Updated contact %s", contact_id)
    return mapping.to_transfer(db_contact)


def delete_contact(db: Session, contact_id: int) -> bool:
    """
    Видаляє контакт назавжди.

    :param db: Сесія бази даних.
    :param contact_id: ID контакту.
    :return: True, якщо контакт існував і був видалений, інакше False.
    """
    db_contact = _find_contact(db, contact_id)
    if db_contact is None:
        logger.debug("Contact %s not found, nothing to delete", contact_id)
        return False
    db.delete(db_contact)
    db.commit()
    logger.info("Deleted contact %s", contact_id)
    return True
