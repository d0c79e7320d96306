"""
Database operations for registered functions.

This module provides the SQL-backed function registry and the utility
functions it is built on.
"""

import json
import uuid
import logging
from typing import List, Optional

from pydantic import ValidationError

from db.models import FunctionRecord
from db.db_client import DBClient, db_client
from fncall.errors import ConfigFailure
from fncall.function import FunctionDefinition
from fncall.registry import FunctionRegistry

# Set up logging
logger = logging.getLogger(__name__)

def _validate_uuid(value: str, field: str) -> str:
    try:
        uuid.UUID(value)
        return value
    except (ValueError, TypeError, AttributeError) as e:
        logger.error(f"Failed to parse {field}: {value!r}")
        raise ConfigFailure(f"Failed to parse {field}: {str(e)}") from e

def _to_definition(record: FunctionRecord) -> FunctionDefinition:
    try:
        return FunctionDefinition(
            name=record.name,
            description=record.description,
            parameters=record.parameters or {},
        )
    except ValidationError as e:
        logger.error(f"Stored function {record.id} is malformed: {str(e)}")
        raise ConfigFailure(f"Stored function {record.id} is malformed: {str(e)}", function_name=record.name) from e

def register_function(
    assistant_id: str,
    user_id: str,
    function: FunctionDefinition,
    client: Optional[DBClient] = None
) -> str:
    """
    Register a function for an assistant and user.

    Args:
        assistant_id: UUID of the assistant
        user_id: UUID of the user
        function: The function definition to store
        client: Database client, defaults to the global one

    Returns:
        The ID of the created function record

    Raises:
        ConfigFailure: if an ID is not a UUID or the parameters are not JSON-serializable
    """
    client = client or db_client
    assistant_id = _validate_uuid(assistant_id, "assistant_id")
    user_id = _validate_uuid(user_id, "user_id")
    try:
        json.dumps(function.parameters)
    except (TypeError, ValueError) as e:
        raise ConfigFailure(f"Failed to convert parameters to JSON: {str(e)}", function_name=function.name) from e

    record = client.create(FunctionRecord(
        assistant_id=assistant_id,
        user_id=user_id,
        name=function.name,
        description=function.description,
        parameters=function.parameters,
    ))
    logger.info(f"Registered function {function.name} with ID {record.id}")
    return str(record.id)

def list_functions(assistant_id: str, user_id: str, client: Optional[DBClient] = None) -> List[FunctionDefinition]:
    """
    Get all functions registered for an assistant and user, in registration order.

    Raises:
        ConfigFailure: if a stored record cannot be turned into a FunctionDefinition
    """
    client = client or db_client
    records = client.query(FunctionRecord, assistant_id=assistant_id, user_id=user_id)
    return [_to_definition(record) for record in records]

def get_function_by_name(
    assistant_id: str,
    user_id: str,
    name: str,
    client: Optional[DBClient] = None
) -> Optional[FunctionDefinition]:
    """
    Get the first function with the given name for an assistant and user.

    Returns:
        FunctionDefinition if found, None otherwise
    """
    client = client or db_client
    records = client.query(FunctionRecord, assistant_id=assistant_id, user_id=user_id, name=name)
    return _to_definition(records[0]) if records else None

def delete_function(function_id: str, client: Optional[DBClient] = None) -> bool:
    """
    Delete a registered function.

    Returns:
        True if deleted, False if not found
    """
    client = client or db_client
    try:
        record_id = int(function_id)
    except ValueError as e:
        raise ConfigFailure(f"Invalid function ID: {function_id!r}") from e
    deleted = client.delete(FunctionRecord, record_id)
    if deleted:
        logger.info(f"Deleted function with ID {function_id}")
    return deleted


class SqlFunctionRegistry(FunctionRegistry):
    """FunctionRegistry stored in the functions table."""

    def __init__(self, client: Optional[DBClient] = None):
        self.client = client or db_client

    def register(self, assistant_id: str, user_id: str, function: FunctionDefinition) -> str:
        return register_function(assistant_id, user_id, function, client=self.client)

    def list_functions(self, assistant_id: str, user_id: str) -> List[FunctionDefinition]:
        return list_functions(assistant_id, user_id, client=self.client)
