"""Sensor delegation for fan-out pattern.

SensorDelegate routes sensor events to multiple monitoring backends. Each
backend receives the same events and keeps its own state. Errors raised by a
backend are logged and never reach the caller.
"""

from typing import Set, Dict, Optional, Any
import logging

from pgdb.sensors.base import OperatorSensor

logger = logging.getLogger(__name__)


class SensorDelegate(OperatorSensor):
    """Delegate sensor that fans out events to multiple backends.

    Example:
        delegate = SensorDelegate()
        delegate.add(PrometheusMonitor())

        state = delegate.on_reconcile_start("orders-db", "default")
        delegate.on_reconcile_complete("orders-db", "default", state, "CHILD_MISSING", True)
    """

    def __init__(self) -> None:
        self._sensors: Set[OperatorSensor] = set()

    def add(self, sensor: OperatorSensor) -> None:
        logger.info(f"Adding sensor: {sensor.__class__.__name__}")
        self._sensors.add(sensor)

    def remove(self, sensor: OperatorSensor) -> None:
        logger.info(f"Removing sensor: {sensor.__class__.__name__}")
        self._sensors.discard(sensor)

    def clear(self) -> None:
        logger.info(f"Clearing {len(self._sensors)} sensors")
        self._sensors.clear()

    def __len__(self) -> int:
        return len(self._sensors)

    def _dispatch(self, hook: str, *args, **kwargs) -> Dict[OperatorSensor, Any]:
        results = {}
        for sensor in self._sensors:
            try:
                result = getattr(sensor, hook)(*args, **kwargs)
                if result is not None:
                    results[sensor] = result
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.{hook}: {e}",
                    exc_info=True,
                )
        return results

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        name: str,
        namespace: str,
    ) -> Optional[Dict[OperatorSensor, Any]]:
        """Delegate reconcile_start to all sensors.

        Returns:
            Dict mapping each sensor to its returned state, or None if no sensors
        """
        if not self._sensors:
            return None
        states = self._dispatch("on_reconcile_start", name, namespace)
        return states if states else None

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[OperatorSensor, Any]],
        observed_state: Optional[str],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Delegate reconcile_complete to all sensors with their specific state."""
        for sensor in self._sensors:
            try:
                sensor_state = state.get(sensor) if state else None
                sensor.on_reconcile_complete(
                    name, namespace, sensor_state, observed_state, success, error
                )
            except Exception as e:
                logger.error(
                    f"Error in {sensor.__class__.__name__}.on_reconcile_complete: {e}",
                    exc_info=True,
                )

    def on_cluster_create(
        self,
        name: str,
        namespace: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        self._dispatch("on_cluster_create", name, namespace, success, error)

    def on_status_update(
        self,
        name: str,
        namespace: str,
        phase: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        self._dispatch("on_status_update", name, namespace, phase, success, error)

    def on_validation_failure(self, name: str, namespace: str, field: str) -> None:
        self._dispatch("on_validation_failure", name, namespace, field)
