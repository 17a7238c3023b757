from typing import Any, Dict, NamedTuple, Optional
from pgdb.types.models import Phase, PostgresDatabaseSpec, PostgresDatabaseStatus
from pgdb.types.models import PostgresDatabaseResources
from pgdb.types.schemas import PostgresDatabaseStatusSchema
from pgdb.resources.perconapgcluster import PerconaPGCluster

CREATING_MESSAGE = "PerconaPGCluster created, waiting for ready status"
PROVISIONING_MESSAGE = "PerconaPGCluster is being provisioned"
READY_MESSAGE = "PostgreSQL database is ready for connections"

#: Status fields written on every update. Whatever a phase leaves unset is
#: sent as null, which removes it from the stored status.
OWNED_FIELDS = (
    "phase",
    "endpoint",
    "ready_replicas",
    "message",
    "credentials_secret_ref",
    "observed_running_version",
    "upstream_cluster_state",
)


class ClusterObservation(NamedTuple):
    """What the operator reads back from an existing PerconaPGCluster."""

    ready: bool
    state: Optional[str] = None
    running_version: Optional[str] = None


def observe_cluster(cluster: Dict) -> ClusterObservation:
    return ClusterObservation(
        ready=PerconaPGCluster.is_ready(cluster),
        state=PerconaPGCluster.cluster_state(cluster),
        running_version=PerconaPGCluster.requested_image_tag(cluster),
    )


def _status(**values: Any) -> PostgresDatabaseStatus:
    fields = dict.fromkeys(OWNED_FIELDS)
    fields.update(values)
    return PostgresDatabaseStatus(**fields)


def creating_status(name: str, namespace: str) -> PostgresDatabaseStatus:
    """Status written right after the cluster has been created."""
    return _status(
        phase=Phase.CREATING,
        endpoint=PostgresDatabaseResources.endpoint(name, namespace),
        ready_replicas=0,
        message=CREATING_MESSAGE,
    )


def failed_status(message: str) -> PostgresDatabaseStatus:
    return _status(phase=Phase.FAILED, ready_replicas=0, message=message)


def project_status(
    observation: ClusterObservation,
    spec: PostgresDatabaseSpec,
    name: str,
    namespace: str,
) -> PostgresDatabaseStatus:
    """Project the status of an existing cluster onto the PostgresDatabase.

    Ready replicas are taken from the desired spec, not observed pods, and
    drop to 0 whenever the cluster is not ready.
    """
    status = _status(
        endpoint=PostgresDatabaseResources.endpoint(name, namespace),
        credentials_secret_ref=PostgresDatabaseResources.credentials_secret_name(name),
        upstream_cluster_state=observation.state,
    )
    if observation.ready:
        status.phase = Phase.READY
        status.ready_replicas = spec.replicas
        status.message = READY_MESSAGE
        status.observed_running_version = observation.running_version
    else:
        status.phase = Phase.CREATING
        status.ready_replicas = 0
        status.message = PROVISIONING_MESSAGE
    return status


def dump_status(status: PostgresDatabaseStatus) -> Dict:
    """Serialize status as a merge patch for the status subresource.

    Owned fields that are None are kept as null so the patch clears them.
    Other unset fields are left out.
    """
    return PostgresDatabaseStatusSchema().dump(status)
