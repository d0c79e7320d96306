#!/usr/bin/env python3
"""
Initialize the database.

This script creates the database tables used to store registered functions.

Usage:
    python -m db.init_db
"""

import logging

from db.db_client import DBClient, db_client

# Set up logging
logger = logging.getLogger(__name__)

def init_db(client: DBClient = None):
    """Create the tables if they do not exist yet."""
    client = client or db_client
    logger.info(f"Initializing database at {client.engine.url}")
    client.create_tables()
    logger.info("Database initialization complete.")

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()
