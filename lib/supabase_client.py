# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the single Supabase client used by every service and
# provides a few typed helpers for the lookups the content layer repeats:
# - Fetch a row by id (treating "no rows" as None, not an error)
# - Fetch the first row matching a natural key (limit 1)
# - Probe whether a table is reachable
#
# Missing credentials are reported with an explicit error log rather than
# an exception at import time, so the local draft backend still works
# without any Supabase configuration.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   row = SupabaseClient.fetch_first("projects", "title", "Foo")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    All methods are class methods for easy access without instantiation.
    Tests install a fake client by assigning `SupabaseClient._instance`.

    Example:
        client = SupabaseClient.get_client()
        client.table("projects").select("*").execute()
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses the service_role key when available (bucket creation needs it),
        falling back to the anon key.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            missing = settings.missing_supabase_settings
            if missing:
                logger.error(
                    "Missing Supabase credentials. Make sure %s are set in your .env file",
                    " and ".join(missing),
                )

            key = settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_ANON_KEY
            try:
                cls._instance = create_client(settings.SUPABASE_URL, key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (next get_client() builds a new one)."""
        cls._instance = None

    @classmethod
    def _normalize_uuid(cls, uuid_value: str | UUID) -> str:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @staticmethod
    def is_not_found(error: Exception) -> bool:
        """True when a PostgREST error means 'no rows matched'."""
        return NO_ROWS_CODE in str(error)

    # -------------------------------------------------------------------------
    # Row Lookups
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        row_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Args:
            table: Table name
            row_id: Row id

        Returns:
            Row dict, or None if no row has that id

        Raises:
            SupabaseClientError: If the query fails for any other reason
        """
        client = cls.get_client()
        row_id_str = cls._normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select("*")
                .eq("id", row_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if cls.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "id": row_id_str},
            )

    @classmethod
    def fetch_first(
        cls,
        table: str,
        column: str | None = None,
        value: Any = None,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch the first row matching `column == value` (limit 1).

        With no column, returns the first row of the table, which is how
        singleton tables such as site_settings are read.

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)
            if column is not None:
                query = query.eq(column, value)
            response = query.limit(1).execute()

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FETCH_FIRST_FAILED",
                suggestion=f"Check that the {table} table exists and is readable",
                details={"table": table, "column": column},
            )

    @classmethod
    def table_exists(cls, table: str) -> bool:
        """Probe a table with a one-row select; False if the query errors."""
        try:
            cls.get_client().table(table).select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.debug(f"Table probe failed for {table}: {e}")
            return False
