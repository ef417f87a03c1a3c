from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from orderdesk.app.core.config import settings

connect_args = {"check_same_thread": False} if settings.uses_sqlite else {}

engine = create_engine(
    settings.database_url,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=connect_args,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
