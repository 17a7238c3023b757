from .client import ResourceClient, KubernetesResourceClient
from .postgresdatabase import PostgresDatabase, apply_defaults, validate, load_spec
from .perconapgcluster import PerconaPGCluster, generate_cluster_manifest

__all__ = [
    "ResourceClient",
    "KubernetesResourceClient",
    "PostgresDatabase",
    "PerconaPGCluster",
    "apply_defaults",
    "validate",
    "load_spec",
    "generate_cluster_manifest",
]
