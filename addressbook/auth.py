import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

load_dotenv()

SECRET_KEY = os.getenv("SECRET_KEY", "secret_key")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30))

# auto_error=False: a missing Authorization header is not an error
bearer_scheme = HTTPBearer(auto_error=False)

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Per-request identity. ``user_id`` is None for anonymous callers."""

    user_id: Optional[int] = None


def create_access_token(data: dict, expires_delta: timedelta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)):
    """
    Створює JWT токен доступу.

    :param data: Дані, які будуть закодовані в токен (наприклад, ``user_id``).
    :param expires_delta: Часова тривалість дії токену.
    :return: Закодований JWT токен.
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + expires_delta
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def verify_token(token: str):
    """
    Перевіряє достовірність JWT токену.

    :param token: Токен для перевірки.
    :return: Payload токену, якщо він дійсний, інакше None.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def _parse_user_id(claim) -> Optional[int]:
    # bool is a subclass of int, floats would be truncated
    if isinstance(claim, bool):
        return None
    if isinstance(claim, int):
        return claim
    if isinstance(claim, str) and claim.isascii() and claim.isdigit():
        try:
            return int(claim)
        except ValueError:
            # longer than the interpreter's int/str conversion limit
            return None
    return None


def extract_user_id(token: Optional[str]) -> Optional[int]:
    """
    Дістає ID користувача з токену.

    Будь-яка помилка (немає токену, недійсний підпис, термін дії минув,
    зіпсовані поля в підписаному токені, немає потрібного поля) дає None.
    Виняток назовні не виходить.

    :param token: Bearer токен або None.
    :return: ID користувача або None.
    """
    if not token:
        return None
    try:
        payload = verify_token(token)
    except Exception:
        # jose lets TypeError/OverflowError from malformed registered claims through
        logger.debug("Bearer token has malformed claims", exc_info=True)
        return None
    if payload is None:
        logger.debug("Could not decode bearer token")
        return None
    user_id = _parse_user_id(payload.get("user_id", payload.get("sub")))
    if user_id is None:
        logger.debug("Token carries no numeric user id")
    return user_id


def get_request_context(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> RequestContext:
    token = credentials.credentials if credentials is not None else None
    return RequestContext(user_id=extract_user_id(token))
