from types import MappingProxyType
from typing import Mapping, NamedTuple


class ResourceKind(NamedTuple):
    """API coordinates of a custom resource kind."""

    group: str
    version: str
    plural: str
    kind: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


POSTGRES_DATABASE = ResourceKind(
    group="databases.mycompany.com",
    version="v1",
    plural="postgresdatabases",
    kind="PostgresDatabase",
)

PERCONA_PG_CLUSTER = ResourceKind(
    group="pgv2.percona.com",
    version="v2",
    plural="perconapgclusters",
    kind="PerconaPGCluster",
)

#: Kinds handled by the operator, keyed by kind name. Read-only.
KINDS: Mapping[str, ResourceKind] = MappingProxyType(
    {
        POSTGRES_DATABASE.kind: POSTGRES_DATABASE,
        PERCONA_PG_CLUSTER.kind: PERCONA_PG_CLUSTER,
    }
)
