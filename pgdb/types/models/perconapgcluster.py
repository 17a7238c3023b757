from typing import Dict, List, Optional
from pgdb.types.base import BaseModel
from pgdb.types.models.postgresdatabase_spec import ResourceRequirements


class ObjectMeta(BaseModel):
    name: str
    namespace: str
    labels: Dict[str, str]
    annotations: Optional[Dict[str, str]]


class LabelSelector(BaseModel):
    match_labels: Dict[str, str]


class PodAffinityTerm(BaseModel):
    label_selector: LabelSelector
    topology_key: str


class WeightedPodAffinityTerm(BaseModel):
    weight: int
    pod_affinity_term: PodAffinityTerm


class PodAntiAffinity(BaseModel):
    preferred_during_scheduling_ignored_during_execution: List[WeightedPodAffinityTerm]


class Affinity(BaseModel):
    pod_anti_affinity: PodAntiAffinity


class VolumeResources(BaseModel):
    requests: Dict[str, str]


class VolumeClaimSpec(BaseModel):
    access_modes: List[str]
    resources: VolumeResources
    storage_class_name: Optional[str]


class InstanceSet(BaseModel):
    """A group of postgres instances sharing one configuration."""

    name: str
    replicas: int
    data_volume_claim_spec: VolumeClaimSpec
    resources: Optional[ResourceRequirements]
    affinity: Affinity


class PgBouncer(BaseModel):
    replicas: int
    image: str
    affinity: Affinity


class Proxy(BaseModel):
    pg_bouncer: PgBouncer


class PgBackRestRepo(BaseModel):
    name: str


class PgBackRest(BaseModel):
    image: str
    repos: List[PgBackRestRepo]
    global_options: Optional[Dict[str, str]]


class Backups(BaseModel):
    pgbackrest: PgBackRest


class Pmm(BaseModel):
    enabled: bool
    image: str
    server_host: str


class PerconaPGClusterSpec(BaseModel):
    cr_version: str
    image: str
    postgres_version: int
    instances: List[InstanceSet]
    proxy: Proxy
    backups: Optional[Backups]
    pmm: Optional[Pmm]


class PerconaPGClusterManifest(BaseModel):
    """PerconaPGCluster custom resource, as submitted to the API server."""

    api_version: str
    kind: str
    metadata: ObjectMeta
    spec: PerconaPGClusterSpec
