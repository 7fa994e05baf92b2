from tflgtfs.config.config_main import cache_config

import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from contextlib import contextmanager

# Base class for SQLAlchemy models
Base = declarative_base()

class ConnectionBroker:

    _engine = None
    _SessionLocal = None
    _database_url = cache_config.database_url

    @staticmethod
    def configure(database_url: str):
        """Point the broker at a different database, dropping any existing engine."""
        if ConnectionBroker._engine is not None:
            ConnectionBroker._engine.dispose()
        ConnectionBroker._engine = None
        ConnectionBroker._SessionLocal = None
        ConnectionBroker._database_url = database_url

    @staticmethod
    def get_engine():
        """Get or create SQLAlchemy engine."""
        if ConnectionBroker._engine is None:
            url = make_url(ConnectionBroker._database_url)
            connect_args = {}

            if url.get_backend_name() == "sqlite":
                # Ingestion workers share the engine across threads
                connect_args["check_same_thread"] = False

                # SQLite won't create missing parent directories for the database file
                if url.database and url.database != ":memory:":
                    directory = os.path.dirname(url.database)
                    if directory:
                        os.makedirs(directory, exist_ok=True)

            ConnectionBroker._engine = create_engine(
                url,
                connect_args=connect_args,
                echo=False  # Set to True for SQL debug logging
            )
        return ConnectionBroker._engine

    @staticmethod
    def get_session_factory():
        """Get or create SQLAlchemy session factory."""
        if ConnectionBroker._SessionLocal is None:
            engine = ConnectionBroker.get_engine()
            ConnectionBroker._SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=engine
            )
        return ConnectionBroker._SessionLocal

    @staticmethod
    @contextmanager
    def get_session():
        """
        Get a SQLAlchemy session with automatic cleanup.

        Usage:
            with ConnectionBroker.get_session() as session:
                session.query(Model).all()
        """
        SessionLocal = ConnectionBroker.get_session_factory()
        session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def create_tables():
        """Create all tables defined in models."""
        # Models register themselves on Base when imported
        from tflgtfs.data import models  # noqa: F401
        engine = ConnectionBroker.get_engine()
        Base.metadata.create_all(bind=engine)
