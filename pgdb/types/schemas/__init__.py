from .postgresdatabase_spec import (
    ResourceListSchema,
    ResourceRequirementsSchema,
    PostgresDatabaseSpecSchema,
)
from .postgresdatabase_status import PostgresDatabaseStatusSchema
from .perconapgcluster import (
    ObjectMetaSchema,
    LabelSelectorSchema,
    PodAffinityTermSchema,
    WeightedPodAffinityTermSchema,
    PodAntiAffinitySchema,
    AffinitySchema,
    VolumeResourcesSchema,
    VolumeClaimSpecSchema,
    InstanceSetSchema,
    PgBouncerSchema,
    ProxySchema,
    PgBackRestRepoSchema,
    PgBackRestSchema,
    BackupsSchema,
    PmmSchema,
    PerconaPGClusterSpecSchema,
    PerconaPGClusterManifestSchema,
)

__all__ = [
    "ResourceListSchema",
    "ResourceRequirementsSchema",
    "PostgresDatabaseSpecSchema",
    "PostgresDatabaseStatusSchema",
    "ObjectMetaSchema",
    "LabelSelectorSchema",
    "PodAffinityTermSchema",
    "WeightedPodAffinityTermSchema",
    "PodAntiAffinitySchema",
    "AffinitySchema",
    "VolumeResourcesSchema",
    "VolumeClaimSpecSchema",
    "InstanceSetSchema",
    "PgBouncerSchema",
    "ProxySchema",
    "PgBackRestRepoSchema",
    "PgBackRestSchema",
    "BackupsSchema",
    "PmmSchema",
    "PerconaPGClusterSpecSchema",
    "PerconaPGClusterManifestSchema",
]
