# backend/models/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy_utils import database_exists, create_database

from config import Config

DATABASE_URL = Config.DATABASE_URL

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # the request session is used from both the event loop and the threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(
    DATABASE_URL,
    echo=Config.SQL_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# create the database if it is missing
if not database_exists(engine.url):
    create_database(engine.url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
