# database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings

# sqlite 는 스레드 체크를 꺼야 FastAPI 스레드풀에서 사용 가능
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    future=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
    """요청마다 세션을 하나 열고, 끝나면 닫는다"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
