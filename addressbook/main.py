import logging
import os
from typing import List

from dotenv import load_dotenv
from fastapi import FastAPI, Depends, Response, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from addressbook import crud, models, schemas
from addressbook.auth import RequestContext, get_request_context
from addressbook.db import engine, get_db
from addressbook.logging_config import setup_logging

load_dotenv()

CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:4200")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CONTACT_NOT_FOUND = "Contact not found"

CONTACTS_TAG = "Address Book API"

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Address Book API",
    openapi_tags=[{"name": CONTACTS_TAG, "description": "API for managing contacts in an address book"}],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    models.Base.metadata.create_all(bind=engine)


@app.get("/contacts", response_model=schemas.ResponseEnvelope[List[schemas.Contact]],
         tags=[CONTACTS_TAG], summary="Fetch all contacts")
def get_contacts(db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    """
    Отримує список всіх контактів.

    :param db: Сесія для роботи з базою даних.
    :param context: Контекст запиту; ID користувача не впливає на результат.
    :return: Конверт зі списком контактів (може бути порожнім).
    """
    logger.debug("Listing contacts for user %s", context.user_id)
    contacts = crud.get_contacts(db)
    return schemas.ResponseEnvelope(message="All contacts fetched successfully", data=contacts)


@app.get("/contacts/{contact_id}", response_model=schemas.ResponseEnvelope[schemas.Contact],
         tags=[CONTACTS_TAG], summary="Fetch contact by ID")
def get_contact(contact_id: int, response: Response, db: Session = Depends(get_db),
                context: RequestContext = Depends(get_request_context)):
    """
    Отримує контакт за його унікальним ID.

    :param contact_id: ID контакту.
    :param response: Відповідь, у якій змінюється статус, якщо контакт не знайдено.
    :param db: Сесія для роботи з базою даних.
    :param context: Контекст запиту.
    :return: Конверт з контактом, або 404 з ``data: null``.
    """
    contact = crud.get_contact(db, contact_id)
    if contact is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return schemas.ResponseEnvelope(message=CONTACT_NOT_FOUND)
    return schemas.ResponseEnvelope(message="Contact found", data=contact)


@app.post("/contacts", response_model=schemas.ResponseEnvelope[schemas.Contact], status_code=status.HTTP_201_CREATED,
          tags=[CONTACTS_TAG], summary="Add a new contact")
def create_contact(contact: schemas.ContactCreate, db: Session = Depends(get_db),
                   context: RequestContext = Depends(get_request_context)):
    """
    Створює новий контакт в адресній книзі.

    Будь-який ``id`` у тілі запиту ігнорується. Вміст полів не
    перевіряється, лише їх наявність.

    :param contact: Дані нового контакту (ім'я, email, телефон).
    :param db: Сесія для роботи з базою даних.
    :param context: Контекст запиту.
    :return: Конверт зі створеним контактом, включаючи ID.
    """
    logger.debug("Contact created by user %s", context.user_id)
    created = crud.create_contact(db, contact)
    return schemas.ResponseEnvelope(message="Contact added successfully", data=created)


@app.put("/contacts/{contact_id}", response_model=schemas.ResponseEnvelope[schemas.Contact],
         tags=[CONTACTS_TAG], summary="Update a contact")
def update_contact(contact_id: int, contact: schemas.ContactUpdate, response: Response,
                   db: Session = Depends(get_db), context: RequestContext = Depends(get_request_context)):
    """
    Оновлює ім'я, email та телефон контакту за його ID.

    ID контакту не змінюється; ``id`` у тілі запиту ігнорується.

    :param contact_id: ID контакту, який оновлюється.
    :param contact: Нові дані контакту.
    :param response: Відповідь, у якій змінюється статус, якщо контакт не знайдено.
    :param db: Сесія для роботи з базою даних.
    :param context: Контекст запиту.
    :return: Конверт з оновленим контактом, або 404 з ``data: null``.
    """
    updated = crud.update_contact(db, contact_id, contact)
    if updated is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return schemas.ResponseEnvelope(message=CONTACT_NOT_FOUND)
    return schemas.ResponseEnvelope(message="Contact updated successfully", data=updated)


@app.delete("/contacts/{contact_id}", response_model=schemas.ResponseEnvelope[str],
            tags=[CONTACTS_TAG], summary="Delete a contact")
def delete_contact(contact_id: int, response: Response, db: Session = Depends(get_db),
                   context: RequestContext = Depends(get_request_context)):
    """
    Видаляє контакт за його ID назавжди.

    :param contact_id: ID контакту.
    :param response: Відповідь, у якій змінюється статус, якщо контакт не знайдено.
    :param db: Сесія для роботи з базою даних.
    :param context: Контекст запиту.
    :return: Конверт з рядком ``"ID: <id>"``, або 404 з ``data: null``.
    """
    if not crud.delete_contact(db, contact_id):
        response.status_code = status.HTTP_404_NOT_FOUND
        return schemas.ResponseEnvelope(message=CONTACT_NOT_FOUND)
    return schemas.ResponseEnvelope(message="Contact deleted successfully", data=f"ID: {contact_id}")
