import re
import marshmallow
from typing import Dict, Iterator, Mapping, Optional, Tuple
from pgdb.types.models.postgresdatabase_spec import (
    PostgresDatabaseSpec,
    ResourceList,
    ResourceRequirements,
)
from pgdb.types.models.postgresdatabase_resources import PostgresDatabaseResources
from pgdb.types.schemas.postgresdatabase_spec import PostgresDatabaseSpecSchema
from pgdb.resources.base import BaseResource
from pgdb.utils.errors import ValidationError

SUPPORTED_VERSIONS = (13, 14, 15, 16, 17)
MIN_REPLICAS = 1
MAX_REPLICAS = 10

CAPACITY_PATTERN = re.compile(r"[0-9]+[KMGT]i")
CPU_PATTERN = re.compile(r"[0-9]+m?")
RETENTION_PATTERN = re.compile(r"[0-9]+[dwmy]")

DEFAULT_BACKUP_ENABLED = True
DEFAULT_MONITORING_ENABLED = True
DEFAULT_BACKUP_RETENTION = "7d"
DEFAULT_REQUESTS_CPU = "100m"
DEFAULT_REQUESTS_MEMORY = "256Mi"
DEFAULT_LIMITS_CPU = "500m"
DEFAULT_LIMITS_MEMORY = "1Gi"

#: Order in which spec fields are checked. The first failure is reported.
FIELD_ORDER = (
    "version",
    "replicas",
    "storageSize",
    "backupRetention",
    "resourceRequirements.requests.cpu",
    "resourceRequirements.requests.memory",
    "resourceRequirements.limits.cpu",
    "resourceRequirements.limits.memory",
)


def default_resource_requirements() -> ResourceRequirements:
    return ResourceRequirements(
        requests=ResourceList(cpu=DEFAULT_REQUESTS_CPU, memory=DEFAULT_REQUESTS_MEMORY),
        limits=ResourceList(cpu=DEFAULT_LIMITS_CPU, memory=DEFAULT_LIMITS_MEMORY),
    )


def apply_defaults(spec: PostgresDatabaseSpec) -> PostgresDatabaseSpec:
    """Return a copy of `spec` with unset optional fields filled in.

    The input is left untouched.
    """
    changes = {}
    if getattr(spec, "backup_enabled", None) is None:
        changes["backup_enabled"] = DEFAULT_BACKUP_ENABLED
    if getattr(spec, "monitoring_enabled", None) is None:
        changes["monitoring_enabled"] = DEFAULT_MONITORING_ENABLED
    if not getattr(spec, "backup_retention", None):
        changes["backup_retention"] = DEFAULT_BACKUP_RETENTION
    if getattr(spec, "resource_requirements", None) is None:
        changes["resource_requirements"] = default_resource_requirements()
    return spec.replace(**changes)


def _resource_quantities(
    spec: PostgresDatabaseSpec,
) -> Iterator[Tuple[str, Optional[str], re.Pattern]]:
    requirements = getattr(spec, "resource_requirements", None)
    if requirements is None:
        return
    for section in ("requests", "limits"):
        resource_list = getattr(requirements, section, None)
        if resource_list is None:
            continue
        yield (
            f"resourceRequirements.{section}.cpu",
            getattr(resource_list, "cpu", None),
            CPU_PATTERN,
        )
        yield (
            f"resourceRequirements.{section}.memory",
            getattr(resource_list, "memory", None),
            CAPACITY_PATTERN,
        )


def validate(spec: PostgresDatabaseSpec) -> None:
    """Check the spec, raising ValidationError for the first malformed field.

    Fields are checked in `FIELD_ORDER`. Resource quantities are only checked
    when set. The spec is never modified.
    """
    if spec.version not in SUPPORTED_VERSIONS:
        raise ValidationError(
            "version",
            f"{spec.version} is not supported, expected one of "
            f"{', '.join(str(v) for v in SUPPORTED_VERSIONS)}",
        )
    if not MIN_REPLICAS <= spec.replicas <= MAX_REPLICAS:
        raise ValidationError(
            "replicas",
            f"{spec.replicas} is out of range [{MIN_REPLICAS}, {MAX_REPLICAS}]",
        )
    if not isinstance(spec.storage_size, str) or not CAPACITY_PATTERN.fullmatch(
        spec.storage_size
    ):
        raise ValidationError(
            "storageSize", f"'{spec.storage_size}' is not a capacity quantity such as 100Gi"
        )
    retention = getattr(spec, "backup_retention", None)
    if retention and not RETENTION_PATTERN.fullmatch(retention):
        raise ValidationError(
            "backupRetention", f"'{retention}' is not a duration such as 7d, 4w, 6m or 1y"
        )
    for field, quantity, pattern in _resource_quantities(spec):
        if quantity and not pattern.fullmatch(quantity):
            raise ValidationError(field, f"'{quantity}' is not a valid quantity")


def _flatten_messages(messages, prefix: str = "") -> Dict[str, str]:
    flat = {}
    for key, value in messages.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten_messages(value, prefix=f"{path}."))
        else:
            flat[path] = "; ".join(value) if isinstance(value, list) else str(value)
    return flat


def load_spec(spec: Mapping) -> PostgresDatabaseSpec:
    """Deserialize a raw CRD spec, reporting type errors as ValidationError."""
    try:
        return PostgresDatabaseSpecSchema().load(dict(spec or {}))
    except marshmallow.ValidationError as ex:
        errors = _flatten_messages(ex.normalized_messages())
        field = next(
            (f for f in FIELD_ORDER if f in errors), next(iter(sorted(errors)), "spec")
        )
        raise ValidationError(field, errors.get(field, str(ex))) from ex


class PostgresDatabase(BaseResource):
    """PostgresDatabase kubernetes resource."""

    KIND = "PostgresDatabase"

    spec: PostgresDatabaseSpec
    cluster_name: str
    endpoint: str
    credentials_secret_name: str

    @classmethod
    def from_spec(
        cls, name: str, namespace: str, spec: PostgresDatabaseSpec
    ) -> "PostgresDatabase":
        db = PostgresDatabase(name, namespace)
        db.spec = spec
        db.cluster_name = PostgresDatabaseResources.cluster_name(name)
        db.endpoint = PostgresDatabaseResources.endpoint(name, namespace)
        db.credentials_secret_name = PostgresDatabaseResources.credentials_secret_name(
            name
        )
        return db

    @classmethod
    def from_body(cls, name: str, namespace: str, spec: Mapping) -> "PostgresDatabase":
        """Load, default and validate a raw spec.

        Raises:
            ValidationError: the first malformed field.
        """
        spec_model = apply_defaults(load_spec(spec))
        validate(spec_model)
        return cls.from_spec(name, namespace, spec_model)
