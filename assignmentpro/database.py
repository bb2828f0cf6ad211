from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from assignmentpro.config import settings


def build_engine(database_url: str):
    """Create an engine with the connect args each backend needs"""
    if database_url.startswith("sqlite"):
        in_memory = database_url in ("sqlite://", "sqlite:///:memory:")
        kwargs = {"connect_args": {"check_same_thread": False}}
        if in_memory:
            # in-memory databases only exist for the life of one connection
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["connect_args"]["timeout"] = 30
        engine = create_engine(database_url, **kwargs)

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            if not in_memory:
                # let SQLAlchemy emit BEGIN itself (see _begin_immediate)
                dbapi_connection.isolation_level = None

        if not in_memory:
            @event.listens_for(engine, "begin")
            def _begin_immediate(conn):
                # take the write lock up front so conditional updates serialize
                conn.exec_driver_sql("BEGIN IMMEDIATE")

        return engine

    connect_args = {}
    # If you're using PostgreSQL on Render or similar, set DATABASE_SSLMODE=require
    if settings.DATABASE_SSLMODE:
        connect_args["sslmode"] = settings.DATABASE_SSLMODE
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Required wherever a DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
