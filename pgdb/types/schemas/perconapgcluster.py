from marshmallow import fields
from pgdb.types.base import ManifestSchema
from pgdb.types.schemas.postgresdatabase_spec import ResourceRequirementsSchema
from pgdb.types.models.perconapgcluster import (
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


class ObjectMetaSchema(ManifestSchema):
    __model__ = ObjectMeta

    name = fields.Str(data_key="name", required=True)
    namespace = fields.Str(data_key="namespace", required=True)
    labels = fields.Dict(keys=fields.Str(), values=fields.Str(), data_key="labels")
    annotations = fields.Dict(
        keys=fields.Str(), values=fields.Str(), data_key="annotations", allow_none=True
    )


class LabelSelectorSchema(ManifestSchema):
    __model__ = LabelSelector

    match_labels = fields.Dict(
        keys=fields.Str(), values=fields.Str(), data_key="matchLabels"
    )


class PodAffinityTermSchema(ManifestSchema):
    __model__ = PodAffinityTerm

    label_selector = fields.Nested(LabelSelectorSchema(), data_key="labelSelector")
    topology_key = fields.Str(data_key="topologyKey")


class WeightedPodAffinityTermSchema(ManifestSchema):
    __model__ = WeightedPodAffinityTerm

    weight = fields.Int(data_key="weight")
    pod_affinity_term = fields.Nested(PodAffinityTermSchema(), data_key="podAffinityTerm")


class PodAntiAffinitySchema(ManifestSchema):
    __model__ = PodAntiAffinity

    preferred_during_scheduling_ignored_during_execution = fields.List(
        fields.Nested(WeightedPodAffinityTermSchema()),
        data_key="preferredDuringSchedulingIgnoredDuringExecution",
    )


class AffinitySchema(ManifestSchema):
    __model__ = Affinity

    pod_anti_affinity = fields.Nested(PodAntiAffinitySchema(), data_key="podAntiAffinity")


class VolumeResourcesSchema(ManifestSchema):
    __model__ = VolumeResources

    requests = fields.Dict(keys=fields.Str(), values=fields.Str(), data_key="requests")


class VolumeClaimSpecSchema(ManifestSchema):
    __model__ = VolumeClaimSpec

    access_modes = fields.List(fields.Str(), data_key="accessModes")
    resources = fields.Nested(VolumeResourcesSchema(), data_key="resources")
    storage_class_name = fields.Str(data_key="storageClassName", allow_none=True)


class InstanceSetSchema(ManifestSchema):
    __model__ = InstanceSet

    name = fields.Str(data_key="name")
    replicas = fields.Int(data_key="replicas")
    data_volume_claim_spec = fields.Nested(
        VolumeClaimSpecSchema(), data_key="dataVolumeClaimSpec"
    )
    resources = fields.Nested(
        ResourceRequirementsSchema(), data_key="resources", allow_none=True
    )
    affinity = fields.Nested(AffinitySchema(), data_key="affinity")


class PgBouncerSchema(ManifestSchema):
    __model__ = PgBouncer

    replicas = fields.Int(data_key="replicas")
    image = fields.Str(data_key="image")
    affinity = fields.Nested(AffinitySchema(), data_key="affinity")


class ProxySchema(ManifestSchema):
    __model__ = Proxy

    pg_bouncer = fields.Nested(PgBouncerSchema(), data_key="pgBouncer")


class PgBackRestRepoSchema(ManifestSchema):
    __model__ = PgBackRestRepo

    name = fields.Str(data_key="name")


class PgBackRestSchema(ManifestSchema):
    __model__ = PgBackRest

    image = fields.Str(data_key="image")
    repos = fields.List(fields.Nested(PgBackRestRepoSchema()), data_key="repos")
    global_options = fields.Dict(
        keys=fields.Str(), values=fields.Str(), data_key="global", allow_none=True
    )


class BackupsSchema(ManifestSchema):
    __model__ = Backups

    pgbackrest = fields.Nested(PgBackRestSchema(), data_key="pgbackrest")


class PmmSchema(ManifestSchema):
    __model__ = Pmm

    enabled = fields.Bool(data_key="enabled")
    image = fields.Str(data_key="image")
    server_host = fields.Str(data_key="serverHost")


class PerconaPGClusterSpecSchema(ManifestSchema):
    __model__ = PerconaPGClusterSpec

    cr_version = fields.Str(data_key="crVersion")
    image = fields.Str(data_key="image")
    postgres_version = fields.Int(data_key="postgresVersion")
    instances = fields.List(fields.Nested(InstanceSetSchema()), data_key="instances")
    proxy = fields.Nested(ProxySchema(), data_key="proxy")
    backups = fields.Nested(BackupsSchema(), data_key="backups", allow_none=True)
    pmm = fields.Nested(PmmSchema(), data_key="pmm", allow_none=True)


class PerconaPGClusterManifestSchema(ManifestSchema):
    """Serializes a typed PerconaPGCluster into the API document."""

    __model__ = PerconaPGClusterManifest

    api_version = fields.Str(data_key="apiVersion")
    kind = fields.Str(data_key="kind")
    metadata = fields.Nested(ObjectMetaSchema(), data_key="metadata")
    spec = fields.Nested(PerconaPGClusterSpecSchema(), data_key="spec")
