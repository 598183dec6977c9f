# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.utils.settings import DATABASE_URL, CHECKOUT_TIMEOUT_SECONDS


def _connect_args(url: str) -> dict:
    #sqlite: timeout na blokade pliku, postgres: statement_timeout w ms
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": CHECKOUT_TIMEOUT_SECONDS}
    if url.startswith("postgresql"):
        return {"options": f"-c statement_timeout={CHECKOUT_TIMEOUT_SECONDS * 1000}"}
    return {}


def make_engine(url: str):
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    if url in ("sqlite://", "sqlite:///:memory:"):
        # jedna wspolna baza w pamieci dla wszystkich polaczen
        return create_engine(url, connect_args=_connect_args(url), poolclass=StaticPool)

    return create_engine(url, connect_args=_connect_args(url), pool_pre_ping=True)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
