"""
Database client for fncall.

This module provides a database client that hands out detached copies of
records and wraps every operation in a session that commits on success and
rolls back on error.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar
from contextlib import contextmanager

from sqlalchemy import inspect
from sqlalchemy.orm import sessionmaker, Session, scoped_session
from sqlalchemy.exc import SQLAlchemyError

from db.models import Base, get_engine

# Set up logging
logger = logging.getLogger(__name__)

# Type variable for generic type hints
T = TypeVar('T', bound=Base)

class DBClient:
    """
    Database client for fncall.

    This class provides methods for common database operations and handles
    detached objects properly.
    """

    def __init__(self, engine=None):
        """
        Initialize the database client.

        Args:
            engine: SQLAlchemy engine to use. If None, the default engine from models.py is used.
        """
        self.engine = engine or get_engine()
        self.session_factory = sessionmaker(bind=self.engine)
        self.scoped_session = scoped_session(self.session_factory)

    def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session_scope(self) -> Session:
        """
        Context manager for database sessions.

        Usage:
            with db_client.session_scope() as session:
                # Use session here
                results = session.query(Model).all()

        The session will be automatically committed on success and
        rolled back on exception.
        """
        session = self.scoped_session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error: {str(e)}")
            raise
        finally:
            self.scoped_session.remove()

    def _to_dict(self, obj: T) -> Optional[Dict[str, Any]]:
        """Convert a SQLAlchemy model instance to a dictionary of its column values."""
        if obj is None:
            return None
        return {c.key: getattr(obj, c.key) for c in inspect(obj).mapper.column_attrs}

    def _detach(self, obj: T) -> Optional[T]:
        """Copy a session-bound instance into a new, session-free instance."""
        if obj is None:
            return None
        return obj.__class__(**self._to_dict(obj))

    def create(self, obj: T) -> T:
        """
        Create a new record in the database.

        Args:
            obj: SQLAlchemy model instance to create

        Returns:
            The created record with its ID populated
        """
        with self.session_scope() as session:
            session.add(obj)
            session.flush()
            session.refresh(obj)
            return self._detach(obj)

    def get_by_id(self, model_class: Type[T], record_id: int) -> Optional[T]:
        """
        Get a record by its ID.

        Returns:
            The record if found, None otherwise
        """
        with self.session_scope() as session:
            obj = session.query(model_class).filter(model_class.id == record_id).first()
            return self._detach(obj)

    def query(self, model_class: Type[T], **filters) -> List[T]:
        """
        Query records with filters, ordered by ID.

        Args:
            model_class: SQLAlchemy model class
            **filters: Field filters (field_name=value)

        Returns:
            List of matching records
        """
        with self.session_scope() as session:
            query = session.query(model_class)
            for field, value in filters.items():
                query = query.filter(getattr(model_class, field) == value)
            objs = query.order_by(model_class.id).all()
            return [self._detach(obj) for obj in objs]

    def delete(self, model_class: Type[T], record_id: int) -> bool:
        """
        Delete a record by its ID.

        Returns:
            True if deleted, False if not found
        """
        with self.session_scope() as session:
            obj = session.query(model_class).filter(model_class.id == record_id).first()
            if obj:
                session.delete(obj)
                return True
            return False

# Create a global instance of the database client
db_client = DBClient()
