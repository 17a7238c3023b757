import kopf
import logging
import pgdb.handlers.postgresdatabase as postgresdatabase
import pgdb.handlers.probes as probes
from pgdb.types.settings import Settings, PlatformDefaults
from pgdb.resources.client import KubernetesResourceClient
from pgdb.controller.reconciler import PostgresDatabaseReconciler
from pgdb.sensors import init_metrics_server, SensorDelegate, PrometheusMonitor
from kubernetes_asyncio import config
from kubernetes_asyncio.client.api_client import ApiClient


@kopf.on.startup()
async def setup(
    settings: kopf.OperatorSettings, memo: kopf.Memo, logger: logging.Logger, **kwargs
):
    # In-cluster config for production, local kubeconfig for development
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        logger.info("In-cluster config not found, trying local kubeconfig")
        try:
            await config.load_kube_config()
            logger.info("Loaded local Kubernetes configuration")
        except config.ConfigException as e:
            logger.error(f"Failed to load Kubernetes configuration: {e}")
            raise

    memo.conf = Settings()
    memo.defaults = PlatformDefaults.from_env()
    logger.info(f"Platform defaults: {memo.defaults}")

    # One ApiClient shared by every reconcile invocation
    memo.api_client = ApiClient()
    logger.info("Shared Kubernetes API client initialized")

    sensor_delegate = SensorDelegate()
    if memo.conf.metrics_enabled:
        sensor_delegate.add(PrometheusMonitor())
        try:
            init_metrics_server(memo.conf.metrics_port)
        except Exception as e:
            logger.error(f"Failed to start metrics server: {e}")
            logger.warning("Continuing without metrics server")
    memo.sensor = sensor_delegate

    memo.reconciler = PostgresDatabaseReconciler(
        KubernetesResourceClient(memo.api_client),
        memo.defaults,
        conf=memo.conf,
        sensor=sensor_delegate,
    )

    # Limit the number of concurrent workers to prevent flooding the API
    settings.batching.worker_limit = memo.conf.worker_limit

    # Post only warnings and errors as Kubernetes events
    settings.posting.enabled = True
    settings.posting.level = logging.WARNING


@kopf.on.cleanup()
async def cleanup(memo: kopf.Memo, logger: logging.Logger, **kwargs):
    """Cleanup handler for operator shutdown."""
    logger.info("Shutting down operator...")

    api_client = getattr(memo, "api_client", None)
    if api_client:
        await api_client.close()
        logger.info("Shared API client closed")

    logger.info("Operator shutdown complete")


__all__ = [
    "postgresdatabase",
    "probes",
]
