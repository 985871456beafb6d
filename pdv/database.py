from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from pdv.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url

# connect_args={"check_same_thread": False} só é necessário para SQLite
connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base única para todos os modelos
Base = declarative_base()

# Dependência para obter a sessão nos endpoints
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
