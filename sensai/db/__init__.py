"""
Database module - PostgreSQL and MongoDB connections.
"""
from sensai.db.postgres import Base, get_db_session, init_db, test_postgres_connection
from sensai.db.mongodb import get_mongo_db, init_mongo_indexes, test_mongo_connection

__all__ = [
    "Base",
    "get_db_session",
    "init_db",
    "test_postgres_connection",
    "get_mongo_db",
    "init_mongo_indexes",
    "test_mongo_connection"
]
