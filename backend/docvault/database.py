# backend/docvault/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from .config import settings
from .utils.logging import db_logger

SQLALCHEMY_DATABASE_URL = str(settings.DATABASE_URL)
db_logger.info("Connecting to database", extra={"database_url": SQLALCHEMY_DATABASE_URL})

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {},
    pool_pre_ping=True,
    echo=False
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def seed_system_roles(db: Session) -> None:
    """Insert the admin and default roles if they are missing"""
    from .models.role import Role

    for role_id, title in (
        (settings.ADMIN_ROLE_ID, settings.ADMIN_ROLE_TITLE),
        (settings.DEFAULT_ROLE_ID, settings.DEFAULT_ROLE_TITLE),
    ):
        if db.get(Role, role_id) is None:
            db.add(Role(id=role_id, title=title))
            db_logger.info("Seeded system role", extra={"role_id": role_id, "title": title})
    db.commit()

    # Explicit ids do not advance a Postgres serial sequence
    if db.get_bind().dialect.name == "postgresql":
        db.execute(text(
            "SELECT setval(pg_get_serial_sequence('roles', 'id'), "
            "(SELECT MAX(id) FROM roles))"
        ))
        db.commit()


def init_db() -> None:
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_system_roles(db)
    finally:
        db.close()
