import mmh3
import hashlib
from typing import Any, Dict, Union
from pgdb.utils.helpers import canonicalize_dict
from pgdb.common.models.labels import Labels


class BaseResource:
    """Base resource model."""

    OPERATOR_NAME = "postgres-database-operator"
    RESOURCE_HASH_ANNOTATION = "pgdb.mycompany.com/resource-hash"

    _name: str
    _namespace: str
    _labels: Labels

    def __init__(self, name: str, namespace: str, labels: Labels = None):
        self._name = name
        self._namespace = namespace
        self._labels = labels if labels is not None else Labels.empty()

    @property
    def name(self) -> str:
        return self._name

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def labels(self) -> Labels:
        return self._labels

    def compute_hash(self, data: Any) -> str:
        """Compute a murmur3 hash."""
        if isinstance(data, dict):
            _data = canonicalize_dict(data)
        elif isinstance(data, str):
            _data = data
        else:
            raise ValueError(f"Hash of {type(data)} is not supported.")
        mumur_str = str(mmh3.hash128(_data))

        hash_obj = hashlib.sha256(mumur_str.encode("utf-8"))
        full_hash = hash_obj.hexdigest()

        # First 16 characters keep annotations readable
        return full_hash[:16]

    def prepare_hash_annotation(self, hash: Union[str, int]) -> Dict[str, str]:
        """Prepare hash annotation for k8s resources."""
        return {self.RESOURCE_HASH_ANNOTATION: str(hash)}
