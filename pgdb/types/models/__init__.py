from .kinds import ResourceKind, KINDS, POSTGRES_DATABASE, PERCONA_PG_CLUSTER
from .postgresdatabase_spec import (
    ResourceList,
    ResourceRequirements,
    PostgresDatabaseSpec,
)
from .postgresdatabase_status import Phase, PostgresDatabaseStatus
from .postgresdatabase_resources import PostgresDatabaseResources
from .perconapgcluster import (
    ObjectMeta,
    LabelSelector,
    PodAffinityTerm,
    WeightedPodAffinityTerm,
    PodAntiAffinity,
    Affinity,
    VolumeResources,
    VolumeClaimSpec,
    InstanceSet,
    PgBouncer,
    Proxy,
    PgBackRestRepo,
    PgBackRest,
    Backups,
    Pmm,
    PerconaPGClusterSpec,
    PerconaPGClusterManifest,
)

__all__ = [
    "ResourceKind",
    "KINDS",
    "POSTGRES_DATABASE",
    "PERCONA_PG_CLUSTER",
    "ResourceList",
    "ResourceRequirements",
    "PostgresDatabaseSpec",
    "Phase",
    "PostgresDatabaseStatus",
    "PostgresDatabaseResources",
    "ObjectMeta",
    "LabelSelector",
    "PodAffinityTerm",
    "WeightedPodAffinityTerm",
    "PodAntiAffinity",
    "Affinity",
    "VolumeResources",
    "VolumeClaimSpec",
    "InstanceSet",
    "PgBouncer",
    "Proxy",
    "PgBackRestRepo",
    "PgBackRest",
    "Backups",
    "Pmm",
    "PerconaPGClusterSpec",
    "PerconaPGClusterManifest",
]
