"""
Database Module for the Site Backend

This module handles the database connection for the site backend.
It provides functions for connecting to the database, executing queries,
and creating the tables used by the repositories.
"""

import threading
import pyodbc
from typing import Any, Dict, List, Optional, Sequence

from config import settings
from utils.exceptions import DatabaseConnectionError, QueryError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS blog_posts (
        id VARCHAR(36) PRIMARY KEY,
        title TEXT NOT NULL UNIQUE,
        summary TEXT,
        content TEXT NOT NULL,
        date_added TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
        date_edited TIMESTAMP,
        length INTEGER NOT NULL DEFAULT 0,
        url TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS blog_tags (
        id VARCHAR(36) PRIMARY KEY,
        blog_post_id VARCHAR(36) NOT NULL REFERENCES blog_posts(id) ON DELETE CASCADE,
        value TEXT NOT NULL,
        UNIQUE (blog_post_id, value)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id VARCHAR(36) PRIMARY KEY,
        title TEXT NOT NULL UNIQUE,
        description TEXT NOT NULL,
        github_link TEXT NOT NULL,
        demo_link TEXT NOT NULL,
        type TEXT NOT NULL,
        gif_link TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_tags (
        id VARCHAR(36) PRIMARY KEY,
        project_id VARCHAR(36) NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
        value TEXT NOT NULL,
        UNIQUE (project_id, value)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_blog_tag_blog_post_id ON blog_tags (blog_post_id)",
    "CREATE INDEX IF NOT EXISTS idx_project_tag_project_id ON project_tags (project_id)",
]


class DatabaseConnection:
    """Database connection manager for the site backend."""

    def __init__(self, connection_string: Optional[str] = None):
        """Initialize the database connection."""
        self.connection_string = connection_string
        self.conn = None
        self._lock = threading.RLock()
        pyodbc.pooling = False

    def connect(self) -> None:
        """
        Establish a connection to the database.

        Raises:
            DatabaseConnectionError: If the connection cannot be opened.
        """
        conn_str = self.connection_string or settings.DB_CONNECTION_STRING
        if not conn_str:
            raise DatabaseConnectionError("No database connection string configured")
        try:
            self.conn = pyodbc.connect(conn_str)
            self.conn.setdecoding(pyodbc.SQL_CHAR, encoding='utf-8')
            logger.info("Successfully connected to database")
        except pyodbc.Error as e:
            self.conn = None
            logger.error(f"Failed to connect to database: {e}")
            raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    def __enter__(self):
        if not self.conn:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if not self.conn:
                return
            try:
                self.conn.close()
                logger.info("Database connection closed")
            except pyodbc.Error as e:
                logger.error(f"Error closing database connection: {e}")
            finally:
                self.conn = None

    def execute_query(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """
        Execute a SQL query and return the results.

        Statements without a result set are committed and return an empty list.

        Args:
            query: The SQL query to execute, with '?' placeholders.
            params: Query parameters (optional).

        Returns:
            List[Dict]: Query results as a list of dictionaries.

        Raises:
            QueryError: If the statement fails; the transaction is rolled back.
        """
        with self._lock:
            if not self.conn:
                self.connect()

            try:
                cursor = self.conn.cursor()
                if params:
                    cursor.execute(query, tuple(params))
                else:
                    cursor.execute(query)

                # Check if this is a SELECT query with results
                if cursor.description:
                    columns = [column[0] for column in cursor.description]
                    return [dict(zip(columns, row)) for row in cursor.fetchall()]

                self.conn.commit()
                return []

            except pyodbc.Error as e:
                logger.error(f"Error executing query: {e}")
                self._rollback()
                raise QueryError(str(e)) from e

    def execute_many(self, statements: Sequence[tuple]) -> None:
        """
        Run several (query, params) statements in one transaction.

        Raises:
            QueryError: If any statement fails; nothing is committed.
        """
        with self._lock:
            if not self.conn:
                self.connect()

            try:
                cursor = self.conn.cursor()
                for query, params in statements:
                    cursor.execute(query, tuple(params or ()))
                self.conn.commit()
            except pyodbc.Error as e:
                logger.error(f"Error executing transaction: {e}")
                self._rollback()
                raise QueryError(str(e)) from e

    def _rollback(self) -> None:
        try:
            self.conn.rollback()
        except pyodbc.Error as e:
            logger.warning(f"Rollback failed: {e}")

    def ensure_schema(self) -> None:
        """Create the site tables if they do not exist yet."""
        for statement in SCHEMA_STATEMENTS:
            self.execute_query(statement)
        logger.info("Database schema is up to date")


# Create a default database instance for use throughout the application
db = DatabaseConnection()
