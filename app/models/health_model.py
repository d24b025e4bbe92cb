# /app/models/health_model.py

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..services.database_helpers.data_client import ConnectionStatus


class DatabaseHealth(BaseModel):
    status: ConnectionStatus
    isOffline: bool
    error: Optional[str] = None
    pingResult: Optional[Literal["success", "failure", "error"]] = None
    pingError: Optional[str] = None
    databaseUrl: Optional[str] = Field(
        default=None,
        description="Only the first segment of the database host, e.g. 'abcd.[redacted]'."
    )


class MemoryTotals(BaseModel):
    total: int
    free: int
    usage: int = Field(..., description="Percentage of system memory in use.")


class SystemHealth(BaseModel):
    platform: str
    arch: str
    pythonVersion: str
    hostname: str
    cpus: int
    memory: MemoryTotals
    load: List[float]


class ProcessMemory(BaseModel):
    rss: int
    vms: int
    data: Optional[int] = None
    shared: Optional[int] = None


class ProcessHealth(BaseModel):
    pid: int
    memoryUsage: ProcessMemory


class HealthSnapshot(BaseModel):
    """
    The response contract for GET /api/health. `system` and `process` are only
    populated for detailed checks; the router drops unset fields from the JSON.
    """
    status: str
    timestamp: str
    version: str
    uptime: float
    environment: str
    database: DatabaseHealth
    system: Optional[SystemHealth] = None
    process: Optional[ProcessHealth] = None
