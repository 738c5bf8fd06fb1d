# contact_manager/main.py
from fastapi import FastAPI, Depends, UploadFile, File, Form, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging
import os

from contact_manager import models, schemas, crud
from contact_manager.database import SessionLocal, engine
from contact_manager.exceptions import ContactManagerError, ContactValidationError, StoreError
from contact_manager.storage import MAX_UPLOAD_SIZE, PictureStorage, UPLOAD_DIR, check_upload, ensure_upload_dir, get_picture_storage
from dotenv import load_dotenv

# Завантаження змінних середовища
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Створення таблиць у базі даних
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Contact Manager API",
    description="REST API для зберігання контактів з м'яким видаленням та відновленням",
    version="1.0.0"
)

# Увімкнення CORS (не забудьте обмежити доступ у production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Завантажені фотографії доступні за /uploads/<ім'я файлу>
app.mount("/uploads", StaticFiles(directory=ensure_upload_dir(UPLOAD_DIR)), name="uploads")

def get_db():
    """
    Забезпечує сесію бази даних для обробки запитів.

    Yields:
        Session: Сесія бази даних.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@app.exception_handler(ContactManagerError)
def handle_contact_manager_error(request: Request, exc: ContactManagerError):
    """
    Перетворює помилки застосунку на JSON-відповідь виду {"error": "..."}.

    Args:
        request (Request): HTTP запит, під час якого виникла помилка.
        exc (ContactManagerError): Помилка з HTTP-статусом.

    Returns:
        JSONResponse: Відповідь з кодом помилки.
    """
    if exc.status_code < 500:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

# --- Ендпоінти для роботи з контактами ---

@app.get("/api/contacts", response_model=List[schemas.ContactOut])
def read_contacts(db: Session = Depends(get_db)):
    """
    Повертає всі не видалені контакти, починаючи з найновішого.

    Args:
        db (Session): Сесія бази даних.

    Returns:
        List[schemas.ContactOut]: Список активних контактів.
    """
    logger.info("GET /api/contacts")
    return crud.get_active_contacts(db)

@app.post("/api/contacts", response_model=schemas.Message)
def create_contact(
    first_name: Optional[str] = Form(None, alias="firstName"),
    last_name: Optional[str] = Form(None, alias="lastName"),
    contact: Optional[str] = Form(None),
    birthday: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    picture: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: PictureStorage = Depends(get_picture_storage)
):
    """
    Створює новий контакт з multipart-форми з необов'язковою фотографією.

    Формат полів перевіряє клієнт; сервер перевіряє лише наявність
    обов'язкових полів і що дата народження є датою.

    Args:
        first_name (str): Ім'я (`firstName`).
        last_name (str, optional): Прізвище (`lastName`).
        contact (str): Номер телефону.
        birthday (str): Дата народження у форматі YYYY-MM-DD.
        email (str): Електронна пошта.
        picture (UploadFile, optional): Файл фотографії (.jpg, .jpeg, .png, до 2 МБ).
        db (Session): Сесія бази даних.
        storage (PictureStorage): Сховище фотографій.

    Returns:
        schemas.Message: Підтвердження збереження.

    Raises:
        UploadRejected: Якщо файл має недозволене розширення або завеликий.
        ContactValidationError: Якщо бракує обов'язкового поля.
        StoreError: Якщо контакт не вдалося зберегти.
    """
    picture_data = None
    picture_extension = None
    if picture is not None and picture.filename:
        picture_data = picture.file.read(MAX_UPLOAD_SIZE + 1)
        picture_extension = check_upload(picture.filename, len(picture_data))

    if not first_name or not contact or not birthday or not email:
        raise ContactValidationError("All fields are required")
    try:
        birthday_date = date.fromisoformat(birthday)
    except ValueError:
        raise ContactValidationError("Birthday must be a date in YYYY-MM-DD format")

    picture_ref = None
    if picture_data is not None:
        picture_ref = storage.save(picture_data, picture_extension)

    new_contact = schemas.ContactCreate(
        first_name=first_name,
        last_name=last_name or None,
        contact=contact,
        birthday=birthday_date,
        email=email
    )
    try:
        crud.create_contact(db, new_contact, picture_ref)
    except StoreError:
        if picture_ref is not None:
            storage.delete(picture_ref)
        raise
    return {"message": "Contact saved successfully"}

@app.delete("/api/contacts/{contact_id}", response_model=schemas.Message)
def delete_contact(contact_id: int, db: Session = Depends(get_db)):
    """
    Позначає контакт як видалений. Неіснуючий id не є помилкою.

    Args:
        contact_id (int): Ідентифікатор контакту.
        db (Session): Сесія бази даних.

    Returns:
        schemas.Message: Підтвердження видалення.
    """
    crud.soft_delete_contact(db, contact_id)
    return {"message": "Contact marked as deleted"}

@app.post("/api/contacts/recover", response_model=schemas.Message)
def recover_contacts(db: Session = Depends(get_db)):
    """
    Відновлює всі видалені контакти.

    Args:
        db (Session): Сесія бази даних.

    Returns:
        schemas.Message: Підтвердження відновлення.
    """
    crud.recover_all_contacts(db)
    return {"message": "All deleted contacts recovered"}

@app.post("/api/contacts/recover/{contact_id}", response_model=schemas.Message)
def recover_contact(contact_id: int, db: Session = Depends(get_db)):
    """
    Відновлює один контакт за його ID.

    Args:
        contact_id (int): Ідентифікатор контакту.
        db (Session): Сесія бази даних.

    Returns:
        schemas.Message: Підтвердження відновлення.
    """
    crud.recover_contact(db, contact_id)
    return {"message": f"Contact ID {contact_id} recovered"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
