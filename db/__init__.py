"""
Database package for fncall.
"""

# Import key components for easier access
from db.models import Base, FunctionRecord
from db.db_client import db_client, DBClient
from db.db_operations import (
    register_function,
    list_functions,
    get_function_by_name,
    delete_function,
    SqlFunctionRegistry
)
