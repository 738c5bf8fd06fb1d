# contact_manager/models.py
from sqlalchemy import Column, Integer, String, Boolean, Date, false
from .database import Base

class Contact(Base):
    """
    Модель контакту.

    Рядок ніколи не видаляється фізично: видалення та відновлення лише
    перемикають прапорець `is_deleted`.

    Attributes:
        id (int): Унікальний ідентифікатор контакту, призначається базою.
        first_name (str): Ім'я контакту.
        last_name (str, optional): Прізвище контакту.
        contact (str): Номер телефону контакту.
        birthday (date): Дата народження контакту.
        email (str): Електронна пошта контакту.
        picture (str, optional): Ім'я збереженого файлу фотографії.
        is_deleted (bool): Ознака м'якого видалення.
    """
    __tablename__ = "contacts"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column("firstName", String(50), nullable=False)
    last_name = Column("lastName", String(50), nullable=True)
    contact = Column(String(20), nullable=False)
    birthday = Column(Date, nullable=False)
    email = Column(String(255), nullable=False)
    picture = Column(String(255), nullable=True)
    is_deleted = Column("isDeleted", Boolean, default=False, server_default=false(), nullable=False, index=True)
