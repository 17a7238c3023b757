from .reconciler import ObservedState, ReconcileResult, PostgresDatabaseReconciler
from .status import (
    ClusterObservation,
    observe_cluster,
    project_status,
    creating_status,
    failed_status,
    dump_status,
)

__all__ = [
    "ObservedState",
    "ReconcileResult",
    "PostgresDatabaseReconciler",
    "ClusterObservation",
    "observe_cluster",
    "project_status",
    "creating_status",
    "failed_status",
    "dump_status",
]
