# contact_manager/form.py
"""
Локальний кеш контактів форми.

Кеш живе лише в межах сесії і не синхронізується з сервером: видалення
переносить контакт у окремий список `deleted_contacts`, а відновлення
повертає його за номером телефону. Це окремий життєвий цикл, незалежний
від прапорця `isDeleted` на сервері.
"""
import logging
import time
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, List, Optional

from .schemas import ContactDraft, ContactEntry, ContactFields, PictureFile
from .validation import validate_contact, validate_picture

logger = logging.getLogger(__name__)

RECOVER_NOT_FOUND = "No deleted contact found with that contact number."
SORT_KEYS = ("first_name", "last_name", "contact", "birthday", "email")


class ContactBook:
    """
    Два роз'єднані списки контактів: активні та видалені.

    Attributes:
        contacts (List[ContactEntry]): Активні контакти у порядку відображення.
        deleted_contacts (List[ContactEntry]): Видалені контакти у порядку видалення.
        sort_key (Optional[str]): Поле, за яким востаннє сортували.
        notice (Optional[str]): Останнє повідомлення для користувача.
    """

    def __init__(self):
        self.contacts: List[ContactEntry] = []
        self.deleted_contacts: List[ContactEntry] = []
        self.sort_key: Optional[str] = None
        self.notice: Optional[str] = None
        self._last_id = 0

    def _next_id(self) -> int:
        # мілісекунди, але строго зростаючі в межах сесії
        self._last_id = max(int(time.time() * 1000), self._last_id + 1)
        return self._last_id

    def entry_at(self, index: int) -> ContactEntry:
        """
        Повертає активний контакт за позицією. Від'ємні позиції не підтримуються.

        Raises:
            IndexError: Якщо позиція поза межами списку активних.
        """
        if not 0 <= index < len(self.contacts):
            raise IndexError(f"No contact at position {index}")
        return self.contacts[index]

    def add(self, record: ContactDraft, preview: Optional[str] = None,
            today: Optional[date] = None) -> Dict[str, str]:
        """
        Додає контакт у кінець списку активних, якщо дані валідні.

        Args:
            record (ContactDraft): Дані з форми.
            preview (Optional[str]): Посилання на попередній перегляд фотографії.
            today (date, optional): Поточна дата для перевірки дня народження.

        Returns:
            Dict[str, str]: Помилки валідації; порожній словник, якщо контакт додано.
        """
        errors = validate_contact(record, today)
        if errors:
            return errors
        entry = ContactEntry(id=self._next_id(), picture=preview, **record.model_dump(exclude={"picture"}))
        self.contacts.append(entry)
        return {}

    def edit(self, index: int, record: ContactDraft, preview: Optional[str] = None,
             today: Optional[date] = None) -> Dict[str, str]:
        """
        Замінює контакт на позиції `index`, зберігаючи його id.

        Args:
            index (int): Позиція контакту у списку активних.
            record (ContactDraft): Нові дані з форми.
            preview (Optional[str]): Посилання на попередній перегляд фотографії.
            today (date, optional): Поточна дата для перевірки дня народження.

        Returns:
            Dict[str, str]: Помилки валідації; порожній словник, якщо контакт оновлено.

        Raises:
            IndexError: Якщо позиція поза межами списку активних.
        """
        original = self.entry_at(index)
        errors = validate_contact(record, today)
        if errors:
            return errors
        self.contacts[index] = ContactEntry(id=original.id, picture=preview,
                                            **record.model_dump(exclude={"picture"}))
        return {}

    def delete(self, contact_id: int) -> Optional[ContactEntry]:
        """
        Переносить контакт з активних у видалені.

        Args:
            contact_id (int): Ідентифікатор контакту.

        Returns:
            Optional[ContactEntry]: Перенесений контакт або None, якщо його немає серед активних.
        """
        entry = next((c for c in self.contacts if c.id == contact_id), None)
        if entry is None:
            return None
        self.contacts = [c for c in self.contacts if c.id != contact_id]
        self.deleted_contacts.append(entry)
        return entry

    def recover(self, phone_number: str) -> Optional[ContactEntry]:
        """
        Повертає у список активних перший видалений контакт з таким номером телефону.

        Якщо кілька видалених контактів мають однаковий номер, відновлюється
        лише перший за порядком видалення.

        Args:
            phone_number (str): Номер телефону; пробіли по краях ігноруються.

        Returns:
            Optional[ContactEntry]: Відновлений контакт або None. У другому випадку
            `notice` містить повідомлення для користувача.
        """
        wanted = phone_number.strip()
        for index, entry in enumerate(self.deleted_contacts):
            if entry.contact.strip() == wanted:
                del self.deleted_contacts[index]
                self.contacts.append(entry)
                self.notice = None
                return entry
        logger.info("No deleted contact with number %r", wanted)
        self.notice = RECOVER_NOT_FOUND
        return None

    def sort(self, key: str) -> None:
        """
        Сортує активні контакти за полем: `birthday` як дати, решту як рядки з урахуванням регістру.

        Args:
            key (str): Назва поля з SORT_KEYS.

        Raises:
            ValueError: Якщо поле не підтримується.
        """
        if key not in SORT_KEYS:
            raise ValueError(f"Cannot sort contacts by {key!r}")
        if key == "birthday":
            self.contacts.sort(key=lambda c: date.fromisoformat(c.birthday))
        else:
            self.contacts.sort(key=lambda c: getattr(c, key))
        self.sort_key = key


@dataclass(frozen=True)
class FormState:
    """
    Незмінний стан форми. Кожна операція повертає новий стан.

    Attributes:
        record (ContactDraft): Поточні значення полів.
        errors (Dict[str, str]): Помилки за назвами полів.
        editing_index (Optional[int]): Позиція контакту, що редагується, або None для нового.
        preview (Optional[str]): Посилання на попередній перегляд вибраної фотографії.
        recover_input (str): Номер телефону, введений для відновлення.
    """
    record: ContactDraft = field(default_factory=ContactDraft)
    errors: Dict[str, str] = field(default_factory=dict)
    editing_index: Optional[int] = None
    preview: Optional[str] = None
    recover_input: str = ""


def _without(errors: Dict[str, str], name: str) -> Dict[str, str]:
    return {key: message for key, message in errors.items() if key != name}


def change_field(state: FormState, name: str, value: str) -> FormState:
    """
    Оновлює текстове поле і скидає помилку цього поля.

    Raises:
        ValueError: Якщо такого текстового поля у формі немає.
    """
    if name not in ContactFields.model_fields:
        raise ValueError(f"Unknown form field {name!r}")
    record = state.record.model_copy(update={name: value})
    return replace(state, record=record, errors=_without(state.errors, name))


def change_picture(state: FormState, picture: PictureFile) -> FormState:
    """
    Приймає вибраний файл у форму, якщо він JPG/PNG і не більший за 2 МБ.

    Args:
        state (FormState): Поточний стан.
        picture (PictureFile): Вибраний файл.

    Returns:
        FormState: Новий стан; при відхиленні файлу змінюються лише помилки.
    """
    error = validate_picture(picture.content_type, picture.size)
    if error:
        return replace(state, errors={**state.errors, "picture": error})
    record = state.record.model_copy(update={"picture": picture})
    return replace(state, record=record, preview=picture.filename,
                   errors=_without(state.errors, "picture"))


def start_edit(state: FormState, book: ContactBook, index: int) -> FormState:
    """
    Завантажує контакт зі списку у форму для редагування.

    Raises:
        IndexError: Якщо позиція поза межами списку активних.
    """
    entry = book.entry_at(index)
    record = ContactDraft(**entry.model_dump(exclude={"id", "picture"}))
    return replace(state, record=record, preview=entry.picture, editing_index=index, errors={})


def submit(state: FormState, book: ContactBook, today: Optional[date] = None) -> FormState:
    """
    Зберігає форму в кеш: додає новий контакт або оновлює той, що редагується.

    Args:
        state (FormState): Поточний стан форми.
        book (ContactBook): Кеш контактів.
        today (date, optional): Поточна дата для перевірки дня народження.

    Returns:
        FormState: Очищена форма після успіху або той самий запис з помилками.
    """
    if state.editing_index is not None:
        errors = book.edit(state.editing_index, state.record, state.preview, today)
    else:
        errors = book.add(state.record, state.preview, today)
    if errors:
        return replace(state, errors=errors)
    return FormState(recover_input=state.recover_input)


def set_recover_input(state: FormState, value: str) -> FormState:
    return replace(state, recover_input=value)


def recover(state: FormState, book: ContactBook) -> FormState:
    """
    Відновлює контакт за введеним номером; після успіху очищає поле вводу.
    """
    if book.recover(state.recover_input) is None:
        return state
    return replace(state, recover_input="")
