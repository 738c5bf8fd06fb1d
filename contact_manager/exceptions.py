# contact_manager/exceptions.py


class ContactManagerError(Exception):
    """Базова помилка застосунку. Повідомлення показується клієнту як є."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContactValidationError(ContactManagerError):
    """Відсутнє або некоректне обов'язкове поле запиту."""

    status_code = 400


class UploadRejected(ContactManagerError):
    """Файл фотографії має недозволений тип або завеликий розмір."""

    status_code = 400


class StoreError(ContactManagerError):
    """Збій з'єднання з базою даних або виконання запиту."""

    status_code = 500
