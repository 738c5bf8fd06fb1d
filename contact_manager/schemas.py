# contact_manager/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

# --- Схеми для REST API (імена полів у JSON збігаються з колонками таблиці) ---

class ContactCreate(BaseModel):
    """
    Схема для створення нового контакту з полів multipart-форми.

    Attributes:
        first_name (str): Ім'я контакту (`firstName`).
        last_name (Optional[str]): Прізвище контакту (`lastName`).
        contact (str): Номер телефону контакту.
        birthday (date): Дата народження контакту.
        email (str): Електронна пошта контакту.
    """
    first_name: str = Field(alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    contact: str
    birthday: date
    email: str

    class Config:
        populate_by_name = True

class ContactOut(BaseModel):
    """
    Схема для виводу даних контакту.

    Attributes:
        id (int): Унікальний ідентифікатор контакту.
        picture (Optional[str]): Ім'я файлу фотографії, доступного за /uploads/<ім'я>.
        is_deleted (bool): Ознака м'якого видалення (`isDeleted`).
    """
    id: int
    first_name: str = Field(alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    contact: str
    birthday: date
    email: str
    picture: Optional[str] = None
    is_deleted: bool = Field(default=False, alias="isDeleted")

    class Config:
        from_attributes = True
        populate_by_name = True

class Message(BaseModel):
    """
    Підтвердження успішної операції.
    """
    message: str

# --- Схеми для локального кешу контактів у формі ---

class PictureFile(BaseModel):
    """
    Вибраний у формі файл зображення (ще не завантажений на сервер).

    Attributes:
        filename (str): Оригінальне ім'я файлу.
        content_type (str): MIME-тип файлу.
        size (int): Розмір у байтах.
    """
    filename: str
    content_type: str
    size: int

class ContactFields(BaseModel):
    first_name: str = ""
    last_name: str = ""
    contact: str = ""
    birthday: str = ""
    email: str = ""

class ContactDraft(ContactFields):
    """
    Дані контакту в процесі введення у формі.
    """
    picture: Optional[PictureFile] = None

class ContactEntry(ContactFields):
    """
    Збережений у локальному кеші контакт.

    Attributes:
        id (int): Ідентифікатор, згенерований на клієнті з поточного часу.
        picture (Optional[str]): Посилання на попередній перегляд фотографії.
    """
    id: int
    picture: Optional[str] = None
