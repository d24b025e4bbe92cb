# /app/services/database_helpers/data_client.py

"""
The contract between the application and its database collaborator.

Services and routers depend only on the operations listed in `DataClient`.
`DatabaseService` is the production implementation; tests substitute a
double that implements the same methods.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Protocol


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    CONNECTING = "connecting"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class DatabaseError(Exception):
    """Raised when a query against the backing database fails."""


class DatabaseOfflineError(DatabaseError):
    """Raised for reads attempted while the collaborator is in offline mode."""


class DataClient(Protocol):
    def get_table_rows(self, table_name: str, limit: Optional[int] = None) -> List[Dict[str, Any]]: ...

    def call_rpc(self, function_name: str, params: Optional[Dict[str, Any]] = None) -> List[Any]: ...

    async def ping(self) -> bool: ...

    def get_status(self) -> ConnectionStatus: ...

    def get_last_error(self) -> Optional[Exception]: ...

    def is_offline(self) -> bool: ...
