import os
from typing import Any, NamedTuple

_TRUE, _FALSE = {"True", "true", "yes", "1"}, {"False", "false", "no", "0"}


def _getenv(name: str, *default: Any) -> Any:
    try:
        v = os.environ[name]
        if v in _TRUE:
            return True
        elif v in _FALSE:
            return False
        else:
            return v
    except KeyError:
        pass
    if default:
        return default[0]
    raise KeyError(name)


# ------------------------------------------------
# ---- Defaults and environment variables ----
# ------------------------------------------------

#: Seconds between reconcile invocations of the same PostgresDatabase
REQUEUE_INTERVAL_SECONDS = float(_getenv("REQUEUE_INTERVAL_SECONDS", 30.0))

#: Seconds kopf waits before retrying a failed PerconaPGCluster create
CREATE_RETRY_DELAY_SECONDS = float(_getenv("CREATE_RETRY_DELAY_SECONDS", 30.0))

#: Maximum number of PostgresDatabase objects processed concurrently
WORKER_LIMIT = int(_getenv("WORKER_LIMIT", 5))

#: Expose Prometheus metrics
METRICS_ENABLED = bool(_getenv("METRICS_ENABLED", True))

#: Port of the Prometheus metrics endpoint
METRICS_PORT = int(_getenv("METRICS_PORT", 8000))

# ---- Platform defaults used when generating PerconaPGCluster manifests ----

DEFAULT_IMAGE_REGISTRY = _getenv("DEFAULT_IMAGE_REGISTRY", "docker.io/percona")

POSTGRES_IMAGE_NAME = _getenv("POSTGRES_IMAGE_NAME", "percona-distribution-postgresql")

#: Pinned minor/patch suffix of the postgres image tag. Not looked up at runtime.
POSTGRES_IMAGE_TAG_MINOR = "7-2"

DEFAULT_STORAGE_CLASS = _getenv("DEFAULT_STORAGE_CLASS", "standard")

DEFAULT_CR_VERSION = _getenv("DEFAULT_CR_VERSION", "2.8.2")

DEFAULT_PGBOUNCER_IMAGE = _getenv("DEFAULT_PGBOUNCER_IMAGE", "percona-pgbouncer:1.25.0-1")

DEFAULT_PGBACKREST_IMAGE = _getenv(
    "DEFAULT_PGBACKREST_IMAGE", "percona-pgbackrest:2.57.0-1"
)

DEFAULT_PMM_IMAGE = _getenv("DEFAULT_PMM_IMAGE", "pmm-client:3.5.0")

DEFAULT_PMM_HOST = _getenv("DEFAULT_PMM_HOST", "prometheus.monitoring")


class Settings:
    """Operator settings"""

    requeue_interval_seconds: float = REQUEUE_INTERVAL_SECONDS
    create_retry_delay_seconds: float = CREATE_RETRY_DELAY_SECONDS
    worker_limit: int = WORKER_LIMIT
    metrics_enabled: bool = METRICS_ENABLED
    metrics_port: int = METRICS_PORT

    def __init__(
        self,
        *args,
        requeue_interval_seconds: float = None,
        create_retry_delay_seconds: float = None,
        worker_limit: int = None,
        metrics_enabled: bool = None,
        metrics_port: int = None,
        **kwargs,
    ):
        if requeue_interval_seconds is not None:
            self.requeue_interval_seconds = requeue_interval_seconds

        if create_retry_delay_seconds is not None:
            self.create_retry_delay_seconds = create_retry_delay_seconds

        if worker_limit is not None:
            self.worker_limit = worker_limit

        if metrics_enabled is not None:
            self.metrics_enabled = metrics_enabled

        if metrics_port is not None:
            self.metrics_port = metrics_port


class PlatformDefaults(NamedTuple):
    """Process-wide defaults for generated PerconaPGCluster manifests.

    Built once at startup and shared read-only by every reconcile invocation.
    """

    image_registry: str = DEFAULT_IMAGE_REGISTRY
    postgres_image_name: str = POSTGRES_IMAGE_NAME
    image_tag_minor: str = POSTGRES_IMAGE_TAG_MINOR
    storage_class: str = DEFAULT_STORAGE_CLASS
    cr_version: str = DEFAULT_CR_VERSION
    pgbouncer_image: str = DEFAULT_PGBOUNCER_IMAGE
    pgbackrest_image: str = DEFAULT_PGBACKREST_IMAGE
    pmm_image: str = DEFAULT_PMM_IMAGE
    pmm_server_host: str = DEFAULT_PMM_HOST

    @classmethod
    def from_env(cls) -> "PlatformDefaults":
        """Read defaults from the current environment."""
        return cls(
            image_registry=_getenv("DEFAULT_IMAGE_REGISTRY", cls._field_defaults["image_registry"]),
            postgres_image_name=_getenv(
                "POSTGRES_IMAGE_NAME", cls._field_defaults["postgres_image_name"]
            ),
            storage_class=_getenv("DEFAULT_STORAGE_CLASS", cls._field_defaults["storage_class"]),
            cr_version=_getenv("DEFAULT_CR_VERSION", cls._field_defaults["cr_version"]),
            pgbouncer_image=_getenv(
                "DEFAULT_PGBOUNCER_IMAGE", cls._field_defaults["pgbouncer_image"]
            ),
            pgbackrest_image=_getenv(
                "DEFAULT_PGBACKREST_IMAGE", cls._field_defaults["pgbackrest_image"]
            ),
            pmm_image=_getenv("DEFAULT_PMM_IMAGE", cls._field_defaults["pmm_image"]),
            pmm_server_host=_getenv("DEFAULT_PMM_HOST", cls._field_defaults["pmm_server_host"]),
        )

    def image(self, name: str) -> str:
        """Fully qualified reference for an image hosted in the default registry."""
        return f"{self.image_registry}/{name}"
