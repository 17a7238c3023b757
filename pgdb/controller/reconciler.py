import enum
import logging
from typing import Dict, NamedTuple, Optional
from pgdb.types.settings import PlatformDefaults, Settings
from pgdb.resources.client import ResourceClient
from pgdb.resources.postgresdatabase import PostgresDatabase
from pgdb.resources.perconapgcluster import PerconaPGCluster
from pgdb.sensors.base import OperatorSensor
from pgdb.controller.status import (
    creating_status,
    dump_status,
    failed_status,
    observe_cluster,
    project_status,
)
from pgdb.types.models import PostgresDatabaseStatus
from pgdb.utils.errors import AlreadyExistsError, ChildCreateError, ValidationError


class ObservedState(enum.Enum):
    """What a reconcile invocation found in the cluster."""

    ABSENT = "Absent"
    CHILD_MISSING = "ChildMissing"
    CHILD_PRESENT_CONVERGING = "ChildPresentConverging"
    CHILD_PRESENT_READY = "ChildPresentReady"


class ReconcileResult(NamedTuple):
    state: ObservedState
    phase: Optional[str] = None
    #: Seconds until the next invocation. None means do not requeue.
    requeue_after: Optional[float] = None


class PostgresDatabaseReconciler:
    """Drives a PostgresDatabase towards an existing, ready PerconaPGCluster.

    Each call to `reconcile` reads the current state fresh and performs at
    most one create and one status write. Nothing is cached between calls.
    """

    client: ResourceClient
    defaults: PlatformDefaults
    conf: Settings
    sensor: OperatorSensor

    def __init__(
        self,
        client: ResourceClient,
        defaults: PlatformDefaults,
        conf: Settings = None,
        sensor: OperatorSensor = None,
    ):
        self.client = client
        self.defaults = defaults
        self.conf = conf if conf is not None else Settings()
        self.sensor = sensor if sensor is not None else OperatorSensor()
        self.logger = logging.getLogger(__name__)

    @property
    def requeue_interval(self) -> float:
        return self.conf.requeue_interval_seconds

    async def reconcile(
        self, name: str, namespace: str, logger: logging.Logger = None
    ) -> ReconcileResult:
        """Run one reconcile invocation for the PostgresDatabase `namespace/name`.

        Raises:
            ValidationError: the spec is malformed. Failed status was written.
            ChildCreateError: creating the cluster failed. Failed status was written.
        """
        logger = logger or self.logger
        sensor_state = self.sensor.on_reconcile_start(name, namespace)
        try:
            result = await self._reconcile(name, namespace, logger)
        except Exception as ex:
            self.sensor.on_reconcile_complete(
                name, namespace, sensor_state, None, False, ex
            )
            raise
        self.sensor.on_reconcile_complete(
            name, namespace, sensor_state, result.state.name, True
        )
        return result

    async def _reconcile(
        self, name: str, namespace: str, logger: logging.Logger
    ) -> ReconcileResult:
        desired = await self.client.get(PostgresDatabase.KIND, name, namespace)
        if desired is None:
            logger.info(f"PostgresDatabase {namespace}/{name} not found, nothing to do")
            return ReconcileResult(ObservedState.ABSENT)

        db = await self.load(desired, name, namespace, logger)

        cluster = await self.client.get(PerconaPGCluster.KIND, db.cluster_name, namespace)
        if cluster is None:
            cluster = await self.create_cluster(db, desired, logger)
            if cluster is None:
                status = creating_status(name, namespace)
                await self.write_status(name, namespace, status, logger)
                return ReconcileResult(
                    ObservedState.CHILD_MISSING, status.phase, self.requeue_interval
                )

        return await self.sync_status(db, cluster, logger)

    async def load(
        self, desired: Dict, name: str, namespace: str, logger: logging.Logger
    ) -> PostgresDatabase:
        """Default and validate the desired spec. Writes Failed status on error."""
        try:
            return PostgresDatabase.from_body(name, namespace, desired.get("spec"))
        except ValidationError as ex:
            logger.warning(f"PostgresDatabase {namespace}/{name} is invalid: {ex}")
            self.sensor.on_validation_failure(name, namespace, ex.field)
            await self.write_status(name, namespace, failed_status(str(ex)), logger)
            raise

    async def create_cluster(
        self, db: PostgresDatabase, owner: Dict, logger: logging.Logger
    ) -> Optional[Dict]:
        """Create the PerconaPGCluster for `db`.

        Returns None once created, or the existing cluster if another writer
        created it first.
        """
        cluster = PerconaPGCluster.from_spec(db.name, db.namespace, db.spec, self.defaults)
        try:
            await self.client.create(PerconaPGCluster.KIND, cluster.manifest, owner=owner)
        except AlreadyExistsError:
            logger.info(
                f"PerconaPGCluster {db.namespace}/{cluster.name} already exists, "
                "reading it back"
            )
            return await self.client.get(PerconaPGCluster.KIND, cluster.name, db.namespace)
        except Exception as ex:
            logger.error(f"Failed to create PerconaPGCluster {db.namespace}/{cluster.name}: {ex}")
            self.sensor.on_cluster_create(db.name, db.namespace, False, ex)
            await self.write_status(
                db.name,
                db.namespace,
                failed_status(f"Failed to create PerconaPGCluster: {ex}"),
                logger,
            )
            raise ChildCreateError(
                f"failed to create PerconaPGCluster {db.namespace}/{cluster.name}"
            ) from ex
        logger.info(f"Created PerconaPGCluster {db.namespace}/{cluster.name}")
        self.sensor.on_cluster_create(db.name, db.namespace, True)
        return None

    async def sync_status(
        self, db: PostgresDatabase, cluster: Optional[Dict], logger: logging.Logger
    ) -> ReconcileResult:
        if cluster is None:
            # Deleted between the conflicting create and the read back
            return ReconcileResult(
                ObservedState.CHILD_MISSING, None, self.requeue_interval
            )
        observation = observe_cluster(cluster)
        status = project_status(observation, db.spec, db.name, db.namespace)
        if observation.ready:
            state = ObservedState.CHILD_PRESENT_READY
            logger.debug(f"PerconaPGCluster {db.namespace}/{db.cluster_name} is ready")
        else:
            state = ObservedState.CHILD_PRESENT_CONVERGING
            logger.debug(
                f"PerconaPGCluster {db.namespace}/{db.cluster_name} is converging "
                f"(state: {observation.state})"
            )
        await self.write_status(db.name, db.namespace, status, logger)
        return ReconcileResult(state, status.phase, self.requeue_interval)

    async def write_status(
        self,
        name: str,
        namespace: str,
        status: PostgresDatabaseStatus,
        logger: logging.Logger,
    ) -> bool:
        """Best effort status write. Failures are logged and reported, never raised."""
        try:
            await self.client.update_status(
                PostgresDatabase.KIND, name, namespace, dump_status(status)
            )
        except Exception as ex:
            logger.error(
                f"Failed to update status of PostgresDatabase {namespace}/{name}: {ex}"
            )
            self.sensor.on_status_update(name, namespace, status.phase, False, ex)
            return False
        self.sensor.on_status_update(name, namespace, status.phase, True)
        return True
