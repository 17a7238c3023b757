from typing import Dict, List, Optional
from pgdb.types.settings import PlatformDefaults
from pgdb.types.models import (
    PostgresDatabaseSpec,
    PostgresDatabaseResources,
    PERCONA_PG_CLUSTER,
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
from pgdb.types.schemas import PerconaPGClusterManifestSchema, PostgresDatabaseSpecSchema
from pgdb.common.models.labels import Labels
from pgdb.resources.base import BaseResource
from pgdb.utils.objects import cached_property
from pgdb.utils.helpers import retention_to_days


class PerconaPGCluster(BaseResource):
    """PerconaPGCluster generated for a PostgresDatabase."""

    KIND = PERCONA_PG_CLUSTER.kind
    API_VERSION = PERCONA_PG_CLUSTER.api_version

    INSTANCE_SET_NAME = "instance1"
    BACKUP_REPO_NAME = "repo1"
    ACCESS_MODE = "ReadWriteOnce"
    TOPOLOGY_KEY = "kubernetes.io/hostname"
    ANTI_AFFINITY_WEIGHT = 1
    READY_ANNOTATION = "postgres-operator.crunchydata.com/state"
    READY_STATE = "Ready"

    spec: PostgresDatabaseSpec
    defaults: PlatformDefaults

    @classmethod
    def from_spec(
        cls,
        name: str,
        namespace: str,
        spec: PostgresDatabaseSpec,
        defaults: PlatformDefaults,
    ) -> "PerconaPGCluster":
        cluster = PerconaPGCluster(
            PostgresDatabaseResources.cluster_name(name),
            namespace,
            Labels.generate_default_labels(),
        )
        cluster.spec = spec
        cluster.defaults = defaults
        return cluster

    def prepare_image(self) -> str:
        """Postgres image, pinned to the configured minor suffix."""
        return self.defaults.image(
            f"{self.defaults.postgres_image_name}:{self.spec.version}.{self.defaults.image_tag_minor}"
        )

    def prepare_affinity(self) -> Affinity:
        """Spread postgres pods across nodes when possible."""
        return Affinity(
            pod_anti_affinity=PodAntiAffinity(
                preferred_during_scheduling_ignored_during_execution=[
                    WeightedPodAffinityTerm(
                        weight=self.ANTI_AFFINITY_WEIGHT,
                        pod_affinity_term=PodAffinityTerm(
                            label_selector=LabelSelector(
                                match_labels=Labels.postgres_pod_selector().as_dict()
                            ),
                            topology_key=self.TOPOLOGY_KEY,
                        ),
                    )
                ]
            )
        )

    def prepare_volume_claim_spec(self) -> VolumeClaimSpec:
        return VolumeClaimSpec(
            access_modes=[self.ACCESS_MODE],
            resources=VolumeResources(requests={"storage": self.spec.storage_size}),
            storage_class_name=self.defaults.storage_class,
        )

    def prepare_instances(self) -> List[InstanceSet]:
        return [
            InstanceSet(
                name=self.INSTANCE_SET_NAME,
                replicas=self.spec.replicas,
                data_volume_claim_spec=self.prepare_volume_claim_spec(),
                resources=self.spec.resource_requirements,
                affinity=self.prepare_affinity(),
            )
        ]

    def prepare_proxy(self) -> Proxy:
        return Proxy(
            pg_bouncer=PgBouncer(
                replicas=self.spec.replicas,
                image=self.defaults.image(self.defaults.pgbouncer_image),
                affinity=self.prepare_affinity(),
            )
        )

    def prepare_retention_options(self) -> Optional[Dict[str, str]]:
        """Express backup retention as time based full backup retention."""
        if not self.spec.backup_retention:
            return None
        repo = self.BACKUP_REPO_NAME
        return {
            f"{repo}-retention-full": str(retention_to_days(self.spec.backup_retention)),
            f"{repo}-retention-full-type": "time",
        }

    def prepare_backups(self) -> Optional[Backups]:
        if not self.spec.backup_enabled:
            return None
        return Backups(
            pgbackrest=PgBackRest(
                image=self.defaults.image(self.defaults.pgbackrest_image),
                repos=[PgBackRestRepo(name=self.BACKUP_REPO_NAME)],
                global_options=self.prepare_retention_options(),
            )
        )

    def prepare_pmm(self) -> Optional[Pmm]:
        if not self.spec.monitoring_enabled:
            return None
        return Pmm(
            enabled=True,
            image=self.defaults.image(self.defaults.pmm_image),
            server_host=self.defaults.pmm_server_host,
        )

    def prepare_cluster_spec(self) -> PerconaPGClusterSpec:
        return PerconaPGClusterSpec(
            cr_version=self.defaults.cr_version,
            image=self.prepare_image(),
            postgres_version=self.spec.version,
            instances=self.prepare_instances(),
            proxy=self.prepare_proxy(),
            backups=self.prepare_backups(),
            pmm=self.prepare_pmm(),
        )

    def prepare_metadata(self) -> ObjectMeta:
        return ObjectMeta(
            name=self.name,
            namespace=self.namespace,
            labels=self.labels.as_dict(),
            annotations=self.prepare_hash_annotation(self.hash),
        )

    @cached_property
    def hash(self) -> str:
        """Hash of the desired spec and the platform defaults it is rendered with."""
        return self.compute_hash(
            {
                "spec": PostgresDatabaseSpecSchema().dump(self.spec),
                "defaults": self.defaults._asdict(),
            }
        )

    @cached_property
    def model(self) -> PerconaPGClusterManifest:
        return PerconaPGClusterManifest(
            api_version=self.API_VERSION,
            kind=self.KIND,
            metadata=self.prepare_metadata(),
            spec=self.prepare_cluster_spec(),
        )

    @cached_property
    def manifest(self) -> Dict:
        """Manifest submitted to the API server."""
        return PerconaPGClusterManifestSchema().dump(self.model)

    @classmethod
    def is_ready(cls, cluster: Dict) -> bool:
        """Whether the upstream operator reports the cluster as ready."""
        return cls.cluster_state(cluster) == cls.READY_STATE

    @classmethod
    def cluster_state(cls, cluster: Dict) -> Optional[str]:
        annotations = (cluster or {}).get("metadata", {}).get("annotations") or {}
        return annotations.get(cls.READY_ANNOTATION)

    @classmethod
    def requested_image_tag(cls, cluster: Dict) -> Optional[str]:
        """Tag of the image requested in the cluster spec, e.g. ``16.7-2``.

        This is what the cluster was asked to run, read from ``spec.image``,
        not a version observed from its pods. It is reported as the running
        version once the cluster is Ready.
        """
        image = (cluster or {}).get("spec", {}).get("image")
        if not image or ":" not in image:
            return None
        return image.split(":")[-1]


def generate_cluster_manifest(
    spec: PostgresDatabaseSpec, defaults: PlatformDefaults, name: str, namespace: str
) -> Dict:
    """Build the PerconaPGCluster manifest for a defaulted, validated spec."""
    return PerconaPGCluster.from_spec(name, namespace, spec, defaults).manifest
