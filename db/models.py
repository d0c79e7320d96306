"""
Database models for fncall.
"""

from sqlalchemy import Column, Integer, String, Text, JSON, DateTime, create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Create the SQLAlchemy base
Base = declarative_base()

class FunctionRecord(Base):
    """
    Model for storing functions registered for an assistant and user.

    Attributes:
        id: Primary key, also the registration order
        assistant_id: Assistant the function belongs to
        user_id: User the function belongs to
        name: Function name
        description: Optional function description
        parameters: JSON-Schema-like parameter spec
        created_at: Timestamp when the record was created
    """
    __tablename__ = 'functions'

    id = Column(Integer, primary_key=True)
    assistant_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    parameters = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<FunctionRecord(name='{self.name}', assistant_id='{self.assistant_id}', user_id='{self.user_id}')>"


# Function to get the database engine
def get_engine():
    """
    Create and return a SQLAlchemy engine using the DATABASE_URL from environment variables.
    """
    database_url = os.getenv('DATABASE_URL', 'sqlite:///fncall.db')
    return create_engine(database_url)
