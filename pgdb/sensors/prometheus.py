"""Prometheus monitoring backend for the PostgresDatabase operator.

PrometheusMonitor turns operator lifecycle events into Prometheus metrics:

1. Reconciliation health - duration, throughput and errors per invocation
2. Child resources - PerconaPGCluster create attempts
3. Status - status subresource writes and validation failures
"""

from typing import Dict, Optional, Any
import time
import logging

from prometheus_client import Counter, Histogram, CollectorRegistry, REGISTRY

from pgdb.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class PrometheusMonitor(OperatorSensor):
    """Prometheus metrics monitor.

    Metrics are prefixed with ``pgdbop_`` and labelled by resource name and
    namespace.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        super().__init__()

        # =============================================================================
        # Reconciliation Metrics
        # =============================================================================

        self.reconcile_duration = Histogram(
            'pgdbop_reconcile_duration_seconds',
            'Time spent in a reconcile invocation',
            labelnames=['name', 'namespace', 'result'],
            buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=registry,
        )

        self.reconcile_total = Counter(
            'pgdbop_reconcile_total',
            'Total number of reconcile invocations',
            labelnames=['name', 'namespace', 'observed_state', 'result'],
            registry=registry,
        )

        self.reconcile_errors = Counter(
            'pgdbop_reconcile_errors_total',
            'Total number of failed reconcile invocations',
            labelnames=['name', 'namespace', 'error_type'],
            registry=registry,
        )

        # =============================================================================
        # Child Resource Metrics
        # =============================================================================

        self.cluster_create_total = Counter(
            'pgdbop_cluster_create_total',
            'Total number of PerconaPGCluster create attempts',
            labelnames=['name', 'namespace', 'result'],
            registry=registry,
        )

        # =============================================================================
        # Status Metrics
        # =============================================================================

        self.status_updates_total = Counter(
            'pgdbop_status_updates_total',
            'Total number of successful status writes',
            labelnames=['name', 'namespace', 'phase'],
            registry=registry,
        )

        self.status_write_failures_total = Counter(
            'pgdbop_status_write_failures_total',
            'Total number of rejected status writes',
            labelnames=['name', 'namespace', 'phase'],
            registry=registry,
        )

        self.validation_failures_total = Counter(
            'pgdbop_validation_failures_total',
            'Total number of PostgresDatabase specs rejected by validation',
            labelnames=['name', 'namespace', 'field'],
            registry=registry,
        )

        logger.info("PrometheusMonitor initialized")

    def on_reconcile_start(self, name: str, namespace: str) -> Dict[str, Any]:
        return {'start_time': time.time()}

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        observed_state: Optional[str],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Record reconciliation duration and result."""
        result = 'success' if success else 'failure'
        if state:
            duration = time.time() - state['start_time']
            self.reconcile_duration.labels(
                name=name,
                namespace=namespace,
                result=result,
            ).observe(duration)

        self.reconcile_total.labels(
            name=name,
            namespace=namespace,
            observed_state=observed_state or 'unknown',
            result=result,
        ).inc()

        if error:
            self.reconcile_errors.labels(
                name=name,
                namespace=namespace,
                error_type=error.__class__.__name__,
            ).inc()

    def on_cluster_create(
        self,
        name: str,
        namespace: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        self.cluster_create_total.labels(
            name=name,
            namespace=namespace,
            result='success' if success else 'failure',
        ).inc()

    def on_status_update(
        self,
        name: str,
        namespace: str,
        phase: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        metric = self.status_updates_total if success else self.status_write_failures_total
        metric.labels(name=name, namespace=namespace, phase=phase or 'unknown').inc()

    def on_validation_failure(self, name: str, namespace: str, field: str) -> None:
        self.validation_failures_total.labels(
            name=name, namespace=namespace, field=field
        ).inc()
