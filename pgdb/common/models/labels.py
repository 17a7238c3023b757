from typing import Dict


class ResourceLabels:
    CREATED_BY_LABEL = "created-by"

    APP_LABEL = "app"


class Labels(ResourceLabels):
    CONTROLLER_NAME = "postgres-database-controller"

    APPLICATION_NAME = "postgres-database"

    CRUNCHY_DATA_LABEL = "postgres-operator.crunchydata.com/data"

    CRUNCHY_DATA_POSTGRES = "postgres"

    _labels: Dict[str, str]

    def __init__(self, labels: Dict[str, str] = None) -> None:
        self._labels = labels if labels else dict()

    def update(self, labels: Dict[str, str]) -> "Labels":
        self._labels.update(labels.copy())
        return self

    def as_dict(self) -> Dict[str, str]:
        """Return labels as dictionary."""
        return self._labels.copy()

    def as_str(self):
        """Return labels as comma separated string."""
        return ",".join([f"{k}={v}" for k, v in self._labels.items()])

    def include(self, label: str, value: str) -> "Labels":
        self.update({label: value})
        return self

    def include_created_by(self, controller: str) -> "Labels":
        return self.include(self.CREATED_BY_LABEL, controller)

    def include_app(self, application: str) -> "Labels":
        return self.include(self.APP_LABEL, application)

    def contains(self, other: "Labels"):
        """Returns True if all labels in `other` are contained."""
        return all(
            key in self._labels and self._labels[key] == value
            for key, value in other.as_dict().items()
        )

    def __str__(self):
        return f"Labels<{self._labels}>"

    @classmethod
    def empty(cls) -> "Labels":
        return Labels({})

    @classmethod
    def generate_default_labels(cls) -> "Labels":
        """Provenance and application labels set on every generated cluster."""
        return Labels().include_created_by(cls.CONTROLLER_NAME).include_app(
            cls.APPLICATION_NAME
        )

    @classmethod
    def postgres_pod_selector(cls) -> "Labels":
        """Selects the postgres data pods of a cluster."""
        return Labels().include(cls.CRUNCHY_DATA_LABEL, cls.CRUNCHY_DATA_POSTGRES)
