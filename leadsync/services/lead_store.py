"""Supabase-backed insert/select boundary for lead rows."""

from typing import Any, Dict, List, Optional, Sequence

from supabase import Client, create_client

from ..config import Settings
from ..errors import ConfigError, DatastoreError
from ..utils.log import get_logger

logger = get_logger("lead_store")


class LeadStore:
    """Thin wrapper over the Supabase client exposing only insert and select."""

    def __init__(self, url: str, key: str):
        """
        Initialize the store.

        Args:
            url: Supabase project URL
            key: Supabase API key
        """
        self.url = url
        self.key = key
        self._client: Optional[Client] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LeadStore":
        return cls(settings.supabase_url, settings.supabase_key)

    @property
    def client(self) -> Client:
        """Lazy-initialize the Supabase client."""
        if self._client is None:
            if not self.url or not self.key:
                raise ConfigError("Supabase URL and key are required. Check your .env file.")
            self._client = create_client(self.url, self.key)
        return self._client

    def _sanitize(self, error: Exception) -> str:
        message = str(error)
        return message.replace(self.key, "***API_KEY***") if self.key else message

    def insert(self, table: str, rows: Sequence[Dict[str, Any]]) -> None:
        """
        Insert rows in a single request.

        Raises:
            DatastoreError: When Supabase rejects the request
        """
        try:
            self.client.table(table).insert(list(rows)).execute()
        except ConfigError:
            raise
        except Exception as e:
            message = self._sanitize(e)
            logger.error("Insert into '%s' failed: %s", table, message)
            raise DatastoreError(f"Supabase error: {message}") from e

    def select(self, table: str, order_by: str = "created_at", descending: bool = True) -> List[Dict[str, Any]]:
        """
        Fetch every row of ``table`` ordered by ``order_by``.

        Raises:
            DatastoreError: When the query fails
        """
        try:
            response = self.client.table(table).select("*").order(order_by, desc=descending).execute()
        except ConfigError:
            raise
        except Exception as e:
            message = self._sanitize(e)
            logger.error("Select from '%s' failed: %s", table, message)
            raise DatastoreError(f"Supabase error: {message}") from e
        return list(response.data or [])
