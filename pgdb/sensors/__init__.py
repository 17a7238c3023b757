"""PostgresDatabase operator sensor framework.

Hook-based instrumentation of operator lifecycle events.

Key components:
- OperatorSensor: Base class defining lifecycle hooks
- SensorDelegate: Fan-out of events to multiple sensor backends
- PrometheusMonitor: Prometheus metrics exporter
"""

from pgdb.sensors.base import OperatorSensor
from pgdb.sensors.delegate import SensorDelegate
from pgdb.sensors.prometheus import PrometheusMonitor
from pgdb.sensors.server import init_metrics_server

__all__ = [
    'OperatorSensor',
    'SensorDelegate',
    'PrometheusMonitor',
    'init_metrics_server',
]
