"""Base sensor classes for operator monitoring.

This module defines the base OperatorSensor class that provides lifecycle hooks
for monitoring operator events. All hooks are no-ops by default, allowing
subclasses to override only the events they care about.

Hooks come in two flavours:
- Paired hooks: on_reconcile_start() returns an optional state dict which is
  handed back to on_reconcile_complete().
- Single events: cluster creation, status writes and validation failures.
"""

from typing import Dict, Optional, Any
import logging

logger = logging.getLogger(__name__)


class OperatorSensor:
    """Base sensor class for PostgresDatabase operator monitoring.

    Example:
        class LoggingSensor(OperatorSensor):
            def on_reconcile_start(self, name: str, namespace: str) -> Dict:
                return {'start_time': time.time()}

            def on_reconcile_complete(self, name, namespace, state, observed_state, success, error=None):
                duration = time.time() - state['start_time']
                logger.info(f"Reconciled {name} in {duration}s")
    """

    # =============================================================================
    # Reconciliation Lifecycle Hooks
    # =============================================================================

    def on_reconcile_start(
        self,
        name: str,
        namespace: str,
    ) -> Optional[Dict[str, Any]]:
        """Called when a reconcile invocation begins.

        Args:
            name: PostgresDatabase name
            namespace: Kubernetes namespace

        Returns:
            Optional state dict passed to on_reconcile_complete
        """
        pass

    def on_reconcile_complete(
        self,
        name: str,
        namespace: str,
        state: Optional[Dict[str, Any]],
        observed_state: Optional[str],
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called when a reconcile invocation completes.

        Args:
            name: PostgresDatabase name
            namespace: Kubernetes namespace
            state: State dict returned from on_reconcile_start
            observed_state: Observed state the invocation acted on, if known
            success: Whether reconciliation succeeded
            error: Exception if reconciliation failed
        """
        pass

    # =============================================================================
    # Child Resource Hooks
    # =============================================================================

    def on_cluster_create(
        self,
        name: str,
        namespace: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called after an attempt to create a PerconaPGCluster."""
        pass

    # =============================================================================
    # Status Hooks
    # =============================================================================

    def on_status_update(
        self,
        name: str,
        namespace: str,
        phase: str,
        success: bool,
        error: Optional[Exception] = None,
    ) -> None:
        """Called after an attempt to write PostgresDatabase status."""
        pass

    def on_validation_failure(
        self,
        name: str,
        namespace: str,
        field: str,
    ) -> None:
        """Called when a PostgresDatabase spec fails validation."""
        pass
