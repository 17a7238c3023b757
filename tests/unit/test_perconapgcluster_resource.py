"""Unit tests for PerconaPGCluster manifest generation."""

import json
import pytest
from pgdb.resources.perconapgcluster import PerconaPGCluster, generate_cluster_manifest
from pgdb.resources.postgresdatabase import apply_defaults
from pgdb.types.models import PostgresDatabaseSpec, ResourceList, ResourceRequirements
from pgdb.types.settings import PlatformDefaults

ANTI_AFFINITY = {
    "podAntiAffinity": {
        "preferredDuringSchedulingIgnoredDuringExecution": [
            {
                "weight": 1,
                "podAffinityTerm": {
                    "labelSelector": {
                        "matchLabels": {"postgres-operator.crunchydata.com/data": "postgres"}
                    },
                    "topologyKey": "kubernetes.io/hostname",
                },
            }
        ]
    }
}


@pytest.fixture
def defaults():
    return PlatformDefaults(
        image_registry="docker.io/percona",
        postgres_image_name="percona-distribution-postgresql",
        image_tag_minor="7-2",
        storage_class="standard",
        cr_version="2.8.2",
        pgbouncer_image="percona-pgbouncer:1.25.0-1",
        pgbackrest_image="percona-pgbackrest:2.57.0-1",
        pmm_image="pmm-client:3.5.0",
        pmm_server_host="prometheus.monitoring",
    )


def make_spec(**overrides) -> PostgresDatabaseSpec:
    values = dict(version=16, replicas=3, storage_size="100Gi")
    values.update(overrides)
    return apply_defaults(PostgresDatabaseSpec(**values))


class TestGenerateClusterManifest:
    """Tests for generate_cluster_manifest."""

    def test_default_scenario(self, defaults):
        manifest = generate_cluster_manifest(make_spec(), defaults, "orders-db", "shop")

        assert manifest["apiVersion"] == "pgv2.percona.com/v2"
        assert manifest["kind"] == "PerconaPGCluster"
        assert manifest["metadata"]["name"] == "orders-db"
        assert manifest["metadata"]["namespace"] == "shop"
        assert manifest["metadata"]["labels"] == {
            "created-by": "postgres-database-controller",
            "app": "postgres-database",
        }

        spec = manifest["spec"]
        assert spec["crVersion"] == "2.8.2"
        assert spec["image"] == "docker.io/percona/percona-distribution-postgresql:16.7-2"
        assert spec["postgresVersion"] == 16
        assert spec["instances"] == [
            {
                "name": "instance1",
                "replicas": 3,
                "dataVolumeClaimSpec": {
                    "accessModes": ["ReadWriteOnce"],
                    "resources": {"requests": {"storage": "100Gi"}},
                    "storageClassName": "standard",
                },
                "resources": {
                    "requests": {"cpu": "100m", "memory": "256Mi"},
                    "limits": {"cpu": "500m", "memory": "1Gi"},
                },
                "affinity": ANTI_AFFINITY,
            }
        ]
        assert spec["proxy"] == {
            "pgBouncer": {
                "replicas": 3,
                "image": "docker.io/percona/percona-pgbouncer:1.25.0-1",
                "affinity": ANTI_AFFINITY,
            }
        }
        assert spec["backups"] == {
            "pgbackrest": {
                "image": "docker.io/percona/percona-pgbackrest:2.57.0-1",
                "repos": [{"name": "repo1"}],
                "global": {
                    "repo1-retention-full": "7",
                    "repo1-retention-full-type": "time",
                },
            }
        }
        assert spec["pmm"] == {
            "enabled": True,
            "image": "docker.io/percona/pmm-client:3.5.0",
            "serverHost": "prometheus.monitoring",
        }

    def test_hash_annotation(self, defaults):
        manifest = generate_cluster_manifest(make_spec(), defaults, "orders-db", "shop")
        annotations = manifest["metadata"]["annotations"]
        assert list(annotations) == [PerconaPGCluster.RESOURCE_HASH_ANNOTATION]
        assert len(annotations[PerconaPGCluster.RESOURCE_HASH_ANNOTATION]) == 16

    def test_hash_follows_spec(self, defaults):
        first = generate_cluster_manifest(make_spec(), defaults, "orders-db", "shop")
        second = generate_cluster_manifest(make_spec(replicas=2), defaults, "orders-db", "shop")
        key = PerconaPGCluster.RESOURCE_HASH_ANNOTATION
        assert first["metadata"]["annotations"][key] != second["metadata"]["annotations"][key]

    def test_deterministic(self, defaults):
        first = generate_cluster_manifest(make_spec(), defaults, "orders-db", "shop")
        second = generate_cluster_manifest(make_spec(), defaults, "orders-db", "shop")
        assert first == second
        assert json.dumps(first) == json.dumps(second)

    def test_backups_disabled(self, defaults):
        manifest = generate_cluster_manifest(
            make_spec(backup_enabled=False), defaults, "orders-db", "shop"
        )
        assert "backups" not in manifest["spec"]
        assert "pmm" in manifest["spec"]

    def test_monitoring_disabled(self, defaults):
        manifest = generate_cluster_manifest(
            make_spec(monitoring_enabled=False), defaults, "orders-db", "shop"
        )
        assert "pmm" not in manifest["spec"]
        assert "backups" in manifest["spec"]

    @pytest.mark.parametrize(
        "retention, days", [("7d", "7"), ("2w", "14"), ("6m", "180"), ("1y", "365")]
    )
    def test_retention_in_days(self, defaults, retention, days):
        manifest = generate_cluster_manifest(
            make_spec(backup_retention=retention), defaults, "orders-db", "shop"
        )
        options = manifest["spec"]["backups"]["pgbackrest"]["global"]
        assert options["repo1-retention-full"] == days

    def test_custom_resources(self, defaults):
        resources = ResourceRequirements(
            requests=ResourceList(cpu="1", memory="2Gi"), limits=None
        )
        manifest = generate_cluster_manifest(
            make_spec(resource_requirements=resources), defaults, "orders-db", "shop"
        )
        assert manifest["spec"]["instances"][0]["resources"] == {
            "requests": {"cpu": "1", "memory": "2Gi"}
        }

    def test_version_and_registry(self, defaults):
        manifest = generate_cluster_manifest(
            make_spec(version=13),
            defaults._replace(image_registry="registry.local/percona"),
            "orders-db",
            "shop",
        )
        assert (
            manifest["spec"]["image"]
            == "registry.local/percona/percona-distribution-postgresql:13.7-2"
        )
        assert manifest["spec"]["postgresVersion"] == 13

    def test_replicas_shared_with_proxy(self, defaults):
        manifest = generate_cluster_manifest(make_spec(replicas=1), defaults, "orders-db", "shop")
        assert manifest["spec"]["instances"][0]["replicas"] == 1
        assert manifest["spec"]["proxy"]["pgBouncer"]["replicas"] == 1


class TestClusterReadiness:
    """Tests for reading state back from a PerconaPGCluster."""

    def test_ready(self):
        cluster = {"metadata": {"annotations": {PerconaPGCluster.READY_ANNOTATION: "Ready"}}}
        assert PerconaPGCluster.is_ready(cluster)
        assert PerconaPGCluster.cluster_state(cluster) == "Ready"

    @pytest.mark.parametrize(
        "cluster",
        [
            {},
            {"metadata": {}},
            {"metadata": {"annotations": None}},
            {"metadata": {"annotations": {PerconaPGCluster.READY_ANNOTATION: "Initializing"}}},
        ],
    )
    def test_not_ready(self, cluster):
        assert not PerconaPGCluster.is_ready(cluster)

    def test_requested_image_tag(self):
        cluster = {"spec": {"image": "docker.io/percona/percona-distribution-postgresql:16.7-2"}}
        assert PerconaPGCluster.requested_image_tag(cluster) == "16.7-2"

    def test_requested_image_tag_without_tag(self):
        assert PerconaPGCluster.requested_image_tag({"spec": {"image": "postgres"}}) is None
        assert PerconaPGCluster.requested_image_tag({}) is None

    def test_requested_image_tag_comes_from_spec(self):
        cluster = {
            "spec": {"image": "docker.io/percona/percona-distribution-postgresql:17.2-1"},
            "status": {"postgres": {"version": 16}},
        }
        assert PerconaPGCluster.requested_image_tag(cluster) == "17.2-1"
