from typing import Optional
from pgdb.types.base import BaseModel


class Phase:
    PENDING = "Pending"
    CREATING = "Creating"
    READY = "Ready"
    FAILED = "Failed"


class PostgresDatabaseStatus(BaseModel):
    """PostgresDatabase CRD status. Written only by the operator."""

    phase: Optional[str]
    endpoint: Optional[str]
    ready_replicas: Optional[int]
    message: Optional[str]
    credentials_secret_ref: Optional[str]
    last_backup_time: Optional[str]
    observed_running_version: Optional[str]
    upstream_cluster_state: Optional[str]
