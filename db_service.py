#!/usr/bin/env python3
"""
PostgreSQL record store for the Examupdt portal
Single database backend using psycopg2 with connection pooling.
One PostgreSQLService is built by the application lifespan and handed to
every repository; each table is reached through a TableClient.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Dict, Any, Optional, List

import psycopg2
import psycopg2.sql as sql
from psycopg2 import pool
from psycopg2.extras import RealDictCursor, Json

logger = logging.getLogger(__name__)


def _adapt(value: Any) -> Any:
    """Wrap list/dict values so they land in JSONB columns"""
    if isinstance(value, (dict, list)):
        return Json(value)
    return value


def _preview(query: Any) -> str:
    text = query if isinstance(query, str) else repr(query)
    return f"{text[:200]}{'...' if len(text) > 200 else ''}"


class PostgreSQLService:
    def __init__(self, database_url: str, min_connections: int = 1, max_connections: int = 20, debug: bool = False):
        """Initialize PostgreSQL connection pool"""
        if not database_url:
            raise ValueError("POSTGRES_URL or DATABASE_URL environment variable is required")

        self.database_url = database_url
        self.debug = debug

        logger.info("🐘 Initializing PostgreSQL service")
        logger.info(f"📊 Database URL configured: {self.database_url[:50]}...")

        try:
            self.connection_pool = psycopg2.pool.SimpleConnectionPool(
                min_connections, max_connections,
                self.database_url,
                cursor_factory=RealDictCursor
            )
            logger.info("✅ PostgreSQL connection pool created successfully")
        except Exception as e:
            logger.error(f"❌ Failed to create PostgreSQL connection pool: {e}")
            raise

    @contextmanager
    def get_db_connection(self):
        """Get database connection from pool with automatic cleanup"""
        conn = None
        try:
            conn = self.connection_pool.getconn()
            yield conn
        except Exception as e:
            if conn:
                conn.rollback()
            logger.error(f"❌ Database connection error: {e}")
            raise
        finally:
            if conn:
                self.connection_pool.putconn(conn)

    def execute_query(self, query, params: tuple = None, fetch_one: bool = False, fetch_all: bool = True) -> Optional[Any]:
        """Execute a query with automatic connection management"""
        if self.debug:
            logger.debug(f"🔍 Executing query: {_preview(query)}")
            if params:
                logger.debug(f"🔍 Query parameters: {params}")

        try:
            with self.get_db_connection() as conn:
                with conn.cursor() as cursor:
                    cursor.execute(query, params)
                    conn.commit()

                    if fetch_one:
                        row = cursor.fetchone()
                        return dict(row) if row is not None else None
                    elif fetch_all:
                        rows = cursor.fetchall()
                        if self.debug:
                            logger.debug(f"🔍 Query returned {len(rows)} results")
                        return [dict(row) for row in rows]
                    else:
                        return cursor.rowcount

        except Exception as e:
            logger.error(f"❌ Query execution failed: {str(e)}")
            if self.debug:
                logger.debug(f"🔍 Failed query: {_preview(query)}")
                logger.debug(f"🔍 Failed params: {params}")
            raise

    def table(self, name: str) -> "TableClient":
        return TableClient(self, name)

    def close_connections(self):
        """Close all connections in the pool"""
        if hasattr(self, 'connection_pool'):
            self.connection_pool.closeall()
            logger.info("🔌 PostgreSQL connection pool closed")


class TableClient:
    """select / count / get / insert / update / delete against one table"""

    def __init__(self, db: PostgreSQLService, table: str):
        self.db = db
        self.table = table

    def _where(self, filters: Optional[Dict[str, Any]], contains: Optional[Dict[str, str]]):
        clauses = []
        params: List[Any] = []
        for column, value in (filters or {}).items():
            clauses.append(sql.SQL("{} = %s").format(sql.Identifier(column)))
            params.append(value)
        for column, value in (contains or {}).items():
            clauses.append(sql.SQL("{} ILIKE %s").format(sql.Identifier(column)))
            params.append(f"%{value}%")
        if not clauses:
            return None, ()
        return sql.SQL(" AND ").join(clauses), tuple(params)

    def select(
        self,
        filters: Optional[Dict[str, Any]] = None,
        contains: Optional[Dict[str, str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        query = sql.SQL("SELECT * FROM {}").format(sql.Identifier(self.table))
        where, params = self._where(filters, contains)
        if where is not None:
            query = query + sql.SQL(" WHERE ") + where
        if order_by:
            query = query + sql.SQL(" ORDER BY {} {}").format(
                sql.Identifier(order_by), sql.SQL("DESC" if descending else "ASC")
            )
        return self.db.execute_query(query, params or None)

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        query = sql.SQL("SELECT COUNT(*) AS count FROM {}").format(sql.Identifier(self.table))
        where, params = self._where(filters, None)
        if where is not None:
            query = query + sql.SQL(" WHERE ") + where
        result = self.db.execute_query(query, params or None, fetch_one=True)
        return result['count'] if result else 0

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        query = sql.SQL("SELECT * FROM {} WHERE id = %s").format(sql.Identifier(self.table))
        return self.db.execute_query(query, (record_id,), fetch_one=True)

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(record)
        record.setdefault('id', uuid.uuid4().hex)
        columns = list(record.keys())
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING *").format(
            sql.Identifier(self.table),
            sql.SQL(", ").join(map(sql.Identifier, columns)),
            sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        )
        return self.db.execute_query(query, tuple(_adapt(record[c]) for c in columns), fetch_one=True)

    def update(self, record_id: str, partial: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if not partial:
            return self.get(record_id)
        columns = list(partial.keys())
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in columns
        )
        query = sql.SQL("UPDATE {} SET {} WHERE id = %s RETURNING *").format(
            sql.Identifier(self.table), assignments
        )
        params = tuple(_adapt(partial[c]) for c in columns) + (record_id,)
        return self.db.execute_query(query, params, fetch_one=True)

    def delete(self, record_id: str) -> bool:
        query = sql.SQL("DELETE FROM {} WHERE id = %s").format(sql.Identifier(self.table))
        affected = self.db.execute_query(query, (record_id,), fetch_all=False)
        return bool(affected)


def create_database_service(settings) -> PostgreSQLService:
    """Build the process-wide store client from settings"""
    service = PostgreSQLService(
        settings.database_url,
        min_connections=settings.db_pool_min,
        max_connections=settings.db_pool_max,
        debug=settings.debug,
    )
    logger.info("✅ Database service initialized successfully")
    return service
