# contact_manager/contact_list.py
"""
Список збережених контактів, що працює з REST API сервера.
"""
import logging
import os
from typing import List, Optional

import httpx
from dotenv import load_dotenv

from .schemas import ContactOut

# Завантаження змінних середовища
load_dotenv()

logger = logging.getLogger(__name__)

CONTACTS_API_URL = os.getenv("CONTACTS_API_URL", "http://localhost:5000")


class ContactListView:
    """
    Відображає активні контакти сервера та викликає видалення й відновлення.

    Мережеві збої лише логуються: стан списку лишається без змін,
    а користувач може повторити дію вручну.

    Attributes:
        contacts (List[ContactOut]): Контакти з останнього успішного оновлення (порядок сервера).
        sort_order (str): "asc" або "desc" для сортування за ім'ям.
        message (str): Останнє повідомлення для користувача.
    """

    def __init__(self, http: httpx.Client, api_path: str = "/api/contacts"):
        self.http = http
        self.api_path = api_path
        self.contacts: List[ContactOut] = []
        self.sort_order = "asc"
        self.message = ""

    @classmethod
    def from_env(cls) -> "ContactListView":
        return cls(httpx.Client(base_url=CONTACTS_API_URL, timeout=10.0))

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "ContactListView":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def refresh(self) -> bool:
        """
        Завантажує активні контакти з сервера і замінює ними локальний список.

        Returns:
            bool: True, якщо список оновлено.
        """
        try:
            response = self.http.get(self.api_path)
            response.raise_for_status()
            contacts = [ContactOut.model_validate(item) for item in response.json()]
        except httpx.HTTPError as exc:
            logger.error("Error fetching contacts: %s", exc)
            return False
        except ValueError as exc:
            # некоректний JSON або запис, що не відповідає схемі
            logger.error("Malformed contacts response: %s", exc)
            return False
        self.contacts = contacts
        return True

    def toggle_sort(self) -> str:
        self.sort_order = "desc" if self.sort_order == "asc" else "asc"
        return self.sort_order

    @property
    def sorted_contacts(self) -> List[ContactOut]:
        """
        Контакти у порядку відображення: за ім'ям, у напрямку `sort_order`.
        """
        return sorted(self.contacts, key=lambda c: c.first_name, reverse=self.sort_order == "desc")

    def picture_url(self, contact: ContactOut) -> Optional[str]:
        if not contact.picture:
            return None
        if contact.picture.startswith(("http://", "https://")):
            return contact.picture
        return f"{str(self.http.base_url).rstrip('/')}/uploads/{contact.picture}"

    def delete(self, contact_id: int) -> bool:
        """
        Видаляє контакт на сервері і перечитує список.

        Args:
            contact_id (int): Ідентифікатор контакту.

        Returns:
            bool: True, якщо сервер підтвердив видалення.
        """
        return self._send("DELETE", f"{self.api_path}/{contact_id}", "Contact deleted", "deleting contact")

    def recover_all(self) -> bool:
        """
        Відновлює на сервері всі видалені контакти і перечитує список.

        Returns:
            bool: True, якщо сервер підтвердив відновлення.
        """
        return self._send("POST", f"{self.api_path}/recover", "Deleted contacts recovered", "recovering contacts")

    def recover(self, contact_id: int) -> bool:
        return self._send("POST", f"{self.api_path}/recover/{contact_id}", "Contact recovered", "recovering contact")

    def _send(self, method: str, url: str, success_message: str, action: str) -> bool:
        try:
            response = self.http.request(method, url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error %s: %s", action, exc)
            return False
        self.message = success_message
        self.refresh()
        return True
