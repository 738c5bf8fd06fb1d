# contact_manager/database.py
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
import os
from dotenv import load_dotenv

# Завантаження змінних середовища
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://postgres:12345@db:5432/postgres")

# Верхня межа часу на з'єднання та виконання запиту (секунди)
DB_TIMEOUT_SECONDS = int(os.getenv("DB_TIMEOUT_SECONDS", "5"))


def build_connect_args(url: str, timeout: int) -> dict:
    """
    Формує параметри драйвера з обмеженням часу для заданої бази даних.

    Args:
        url (str): URL підключення до бази даних.
        timeout (int): Ліміт часу в секундах.

    Returns:
        dict: Аргументи для `connect_args` рушія.
    """
    if "sqlite" in url:
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        }
    return {}


# Створення рушія бази даних
engine = create_engine(
    DATABASE_URL,
    connect_args=build_connect_args(DATABASE_URL, DB_TIMEOUT_SECONDS),
    pool_pre_ping=True,
)

# Фабрика сесій для роботи з базою даних
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Базовий клас для моделей SQLAlchemy
Base = declarative_base()
