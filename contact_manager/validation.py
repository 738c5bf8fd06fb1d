# contact_manager/validation.py
import re
from datetime import date
from typing import Dict, Optional

from .schemas import ContactDraft

NAME_PATTERN = re.compile(r"[A-Z][a-z]*")
PHONE_PATTERN = re.compile(r"\+91[0-9]{10}")
ALL_ZERO_PHONE_PATTERN = re.compile(r"\+910{10}")
FORBIDDEN_PHONE_PREFIX = re.compile(r"\+91[12]")
EMAIL_PATTERN = re.compile(r"[\w.-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.ASCII)

MAX_FULL_NAME_LENGTH = 50
ALLOWED_PICTURE_TYPES = ("image/jpeg", "image/png")
MAX_PICTURE_SIZE = 2 * 1024 * 1024

NAME_FORMAT_ERROR = "First letter must be capital, only alphabets allowed"
NAME_LENGTH_ERROR = "Total name length must be ≤ 50 characters"


def _validate_name(value: str, label: str) -> Optional[str]:
    if not value.strip():
        return f"{label} is required"
    if not NAME_PATTERN.fullmatch(value):
        return NAME_FORMAT_ERROR
    return None


def validate_contact(record: ContactDraft, today: Optional[date] = None) -> Dict[str, str]:
    """
    Перевіряє дані контакту з форми.

    Перевірка чиста: нічого не змінює і не звертається до сервера.

    Args:
        record (ContactDraft): Дані контакту. Телефон очікується у форматі
            +91XXXXXXXXXX, дата народження у форматі ISO (YYYY-MM-DD).
        today (date, optional): Поточна дата. За замовчуванням `date.today()`.

    Returns:
        Dict[str, str]: Помилки за назвами полів. Порожній словник означає валідні дані.
    """
    errors: Dict[str, str] = {}
    first_name, last_name = record.first_name, record.last_name
    contact, birthday, email = record.contact, record.birthday, record.email

    first_name_error = _validate_name(first_name, "First name")
    if first_name_error:
        errors["first_name"] = first_name_error
    last_name_error = _validate_name(last_name, "Last name")
    if last_name_error:
        errors["last_name"] = last_name_error

    if len(first_name) + len(last_name) > MAX_FULL_NAME_LENGTH:
        errors.setdefault("first_name", NAME_LENGTH_ERROR)
        errors.setdefault("last_name", NAME_LENGTH_ERROR)

    if not contact.strip():
        errors["contact"] = "Contact number is required"
    elif not PHONE_PATTERN.fullmatch(contact):
        errors["contact"] = "Must be +91 followed by 10 digits"
    elif ALL_ZERO_PHONE_PATTERN.fullmatch(contact):
        errors["contact"] = "Contact cannot be all zeros"
    elif FORBIDDEN_PHONE_PREFIX.match(contact):
        errors["contact"] = "Number cannot start with 1 or 2 after +91"

    if not birthday.strip():
        errors["birthday"] = "Birthday is required"
    else:
        birthday_error = validate_birthday(birthday, today)
        if birthday_error:
            errors["birthday"] = birthday_error

    if not email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_PATTERN.fullmatch(email):
        errors["email"] = "Invalid email address"

    return errors


def validate_birthday(value: str, today: Optional[date] = None) -> Optional[str]:
    """
    Перевіряє, що дата народження коректна і не в майбутньому.

    Args:
        value (str): Дата у форматі ISO.
        today (date, optional): Поточна дата.

    Returns:
        Optional[str]: Текст помилки або None.
    """
    try:
        parsed = date.fromisoformat(value.strip())
    except ValueError:
        return "Birthday must be a valid date"
    if parsed > (today or date.today()):
        return "Birthday cannot be in the future"
    return None


def validate_picture(content_type: Optional[str], size: int) -> Optional[str]:
    """
    Перевіряє вибране зображення ще до того, як воно потрапить у стан форми.

    Args:
        content_type (Optional[str]): MIME-тип файлу.
        size (int): Розмір файлу в байтах.

    Returns:
        Optional[str]: Текст помилки або None, якщо файл прийнятний.
    """
    if content_type not in ALLOWED_PICTURE_TYPES:
        return "Only JPG or PNG allowed"
    if size > MAX_PICTURE_SIZE:
        return "Max size is 2MB"
    return None
