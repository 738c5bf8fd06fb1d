# contact_manager/crud.py
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import models, schemas
from .exceptions import StoreError

logger = logging.getLogger(__name__)


def _fail(db: Session, message: str, exc: SQLAlchemyError) -> StoreError:
    """
    Відкочує транзакцію, логує збій і повертає помилку сховища для підняття.

    Args:
        db (Session): Сесія бази даних.
        message (str): Повідомлення для клієнта.
        exc (SQLAlchemyError): Первинна помилка бази даних.

    Returns:
        StoreError: Помилка з повідомленням для клієнта.
    """
    db.rollback()
    logger.exception("%s: %s", message, exc)
    return StoreError(message)

# --- Робота з контактами ---

def get_active_contacts(db: Session) -> List[models.Contact]:
    """
    Повертає всі не видалені контакти, починаючи з найновішого.

    Args:
        db (Session): Сесія бази даних.

    Returns:
        List[models.Contact]: Контакти з `is_deleted = False`, впорядковані за спаданням id.

    Raises:
        StoreError: Якщо запит до бази даних не вдався.
    """
    try:
        return (
            db.query(models.Contact)
            .filter(models.Contact.is_deleted.is_(False))
            .order_by(models.Contact.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise _fail(db, "Failed to fetch contacts", exc) from exc

def create_contact(db: Session, contact: schemas.ContactCreate, picture: Optional[str] = None) -> models.Contact:
    """
    Створює новий контакт. Новий контакт завжди активний.

    Args:
        db (Session): Сесія бази даних.
        contact (schemas.ContactCreate): Дані нового контакту.
        picture (Optional[str]): Ім'я збереженого файлу фотографії.

    Returns:
        models.Contact: Створений контакт з призначеним id.

    Raises:
        StoreError: Якщо вставка не вдалася.
    """
    db_contact = models.Contact(**contact.model_dump(), picture=picture, is_deleted=False)
    try:
        db.add(db_contact)
        db.commit()
        db.refresh(db_contact)
    except SQLAlchemyError as exc:
        raise _fail(db, "Database insert error", exc) from exc
    logger.info("Created contact %s", db_contact.id)
    return db_contact

def soft_delete_contact(db: Session, contact_id: int) -> int:
    """
    Позначає контакт як видалений. Наявність контакту не перевіряється:
    повторне видалення або неіснуючий id не є помилкою.

    Args:
        db (Session): Сесія бази даних.
        contact_id (int): Ідентифікатор контакту.

    Returns:
        int: Кількість рядків, яких торкнувся запит.

    Raises:
        StoreError: Якщо оновлення не вдалося.
    """
    try:
        affected = (
            db.query(models.Contact)
            .filter(models.Contact.id == contact_id)
            .update({models.Contact.is_deleted: True}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise _fail(db, "Failed to delete contact", exc) from exc
    logger.info("Marked contact %s as deleted (%s rows)", contact_id, affected)
    return affected

def recover_all_contacts(db: Session) -> int:
    """
    Відновлює всі видалені контакти.

    Args:
        db (Session): Сесія бази даних.

    Returns:
        int: Кількість відновлених контактів.

    Raises:
        StoreError: Якщо оновлення не вдалося.
    """
    try:
        affected = (
            db.query(models.Contact)
            .filter(models.Contact.is_deleted.is_(True))
            .update({models.Contact.is_deleted: False}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise _fail(db, "Failed to recover contacts", exc) from exc
    logger.info("Recovered %s deleted contacts", affected)
    return affected

def recover_contact(db: Session, contact_id: int) -> int:
    """
    Відновлює один контакт незалежно від його поточного стану.

    Args:
        db (Session): Сесія бази даних.
        contact_id (int): Ідентифікатор контакту.

    Returns:
        int: Кількість рядків, яких торкнувся запит.

    Raises:
        StoreError: Якщо оновлення не вдалося.
    """
    try:
        affected = (
            db.query(models.Contact)
            .filter(models.Contact.id == contact_id)
            .update({models.Contact.is_deleted: False}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise _fail(db, "Failed to recover contact", exc) from exc
    logger.info("Recovered contact %s", contact_id)
    return affected
