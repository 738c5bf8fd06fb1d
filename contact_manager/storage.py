# contact_manager/storage.py
"""
Сховище фотографій контактів: локальна тека `uploads` або Cloudinary.
"""
import logging
import os
import random
import time
from functools import lru_cache
from typing import Protocol

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from dotenv import load_dotenv

from .exceptions import StoreError, UploadRejected

# Завантаження змінних середовища
load_dotenv()

logger = logging.getLogger(__name__)

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png")
MAX_UPLOAD_SIZE = 2 * 1024 * 1024


def check_upload(filename: str, size: int) -> str:
    """
    Перевіряє розширення та розмір файлу до збереження.

    Args:
        filename (str): Оригінальне ім'я файлу.
        size (int): Розмір вмісту в байтах.

    Returns:
        str: Розширення файлу у тому вигляді, в якому його надіслано.

    Raises:
        UploadRejected: Якщо розширення недозволене або файл більший за 2 МБ.
    """
    extension = os.path.splitext(filename)[1]
    if extension.lower() not in ALLOWED_EXTENSIONS:
        raise UploadRejected("Only image files (.jpg, .jpeg, .png) are allowed")
    if size > MAX_UPLOAD_SIZE:
        raise UploadRejected("File too large (max 2MB)")
    return extension


def generate_filename(extension: str) -> str:
    """
    Генерує унікальне ім'я файлу: мітка часу в мілісекундах, випадковий суфікс і розширення.
    """
    return f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}{extension}"


def ensure_upload_dir(path: str) -> str:
    if not os.path.isdir(path):
        os.makedirs(path, exist_ok=True)
        logger.info("Created upload directory %s", path)
    return path


class PictureStorage(Protocol):
    """Операції, які потрібні API від сховища фотографій."""

    def save(self, data: bytes, extension: str) -> str:
        ...

    def delete(self, name: str) -> None:
        ...


class LocalPictureStorage:
    """
    Зберігає фотографії у локальній теці, яку застосунок віддає за шляхом /uploads.
    """

    def __init__(self, upload_dir: str = UPLOAD_DIR):
        self.upload_dir = ensure_upload_dir(upload_dir)

    def save(self, data: bytes, extension: str) -> str:
        """
        Записує вміст у файл з унікальним ім'ям.

        Args:
            data (bytes): Вміст зображення.
            extension (str): Оригінальне розширення файлу.

        Returns:
            str: Згенероване ім'я файлу.

        Raises:
            StoreError: Якщо файл не вдалося записати.
        """
        name = generate_filename(extension)
        try:
            with open(os.path.join(self.upload_dir, name), "wb") as f:
                f.write(data)
        except OSError as exc:
            logger.exception("Failed to write picture %s", name)
            raise StoreError("Failed to save picture") from exc
        return name

    def delete(self, name: str) -> None:
        """
        Видаляє збережений файл, якщо він існує.

        Args:
            name (str): Ім'я файлу, повернуте `save`.
        """
        path = os.path.join(self.upload_dir, name)
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        except OSError:
            logger.exception("Failed to remove picture %s", name)
            return
        logger.info("Removed picture %s", name)


class CloudinaryPictureStorage:
    """
    Зберігає фотографії у Cloudinary. Повертає публічний URL завантаженого файлу.
    """

    def __init__(self, folder: str = "contacts"):
        self.folder = folder
        cloudinary.config(
            cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            api_key=os.getenv("CLOUDINARY_API_KEY"),
            api_secret=os.getenv("CLOUDINARY_API_SECRET")
        )

    def save(self, data: bytes, extension: str) -> str:
        public_id = os.path.splitext(generate_filename(extension))[0]
        try:
            result = cloudinary.uploader.upload(data, public_id=public_id, folder=self.folder)
        except cloudinary.exceptions.Error as exc:
            logger.exception("Cloudinary upload failed for %s", public_id)
            raise StoreError("Failed to save picture") from exc
        return result.get("secure_url")

    def delete(self, name: str) -> None:
        public_id = f"{self.folder}/{os.path.splitext(os.path.basename(name))[0]}"
        try:
            cloudinary.uploader.destroy(public_id)
        except cloudinary.exceptions.Error:
            logger.exception("Cloudinary delete failed for %s", public_id)


@lru_cache()
def get_picture_storage() -> PictureStorage:
    """
    Повертає сховище фотографій: Cloudinary, якщо задано CLOUDINARY_CLOUD_NAME, інакше локальну теку.
    """
    if os.getenv("CLOUDINARY_CLOUD_NAME"):
        return CloudinaryPictureStorage()
    return LocalPictureStorage()
