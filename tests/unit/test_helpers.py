"""Unit tests for helpers, labels and error classification."""

import json
import kopf
import pytest
from kubernetes_asyncio.client import ApiException
from pgdb.common.models.labels import Labels
from pgdb.utils.helpers import canonicalize_dict, drop_nulls, retention_to_days
from pgdb.utils.errors import (
    ValidationError,
    already_exists_error,
    convert_api_exception,
    not_found_error,
)


def api_exception(status, reason=None):
    ex = ApiException(status=status, reason="error")
    ex.body = json.dumps({"reason": reason, "message": "details"}) if reason else None
    return ex


class TestRetentionToDays:
    @pytest.mark.parametrize(
        "retention, days", [("1d", 1), ("7d", 7), ("2w", 14), ("3m", 90), ("1y", 365)]
    )
    def test_units(self, retention, days):
        assert retention_to_days(retention) == days

    @pytest.mark.parametrize("retention", ["7", "d", "7x", "-1d"])
    def test_invalid(self, retention):
        with pytest.raises(ValueError):
            retention_to_days(retention)


class TestDropNulls:
    def test_nested(self):
        data = {"a": None, "b": {"c": None, "d": 1}, "e": [{"f": None, "g": 2}]}
        assert drop_nulls(data) == {"b": {"d": 1}, "e": [{"g": 2}]}

    def test_keeps_falsy_values(self):
        assert drop_nulls({"a": False, "b": 0, "c": ""}) == {"a": False, "b": 0, "c": ""}


class TestCanonicalizeDict:
    def test_key_order_does_not_matter(self):
        assert canonicalize_dict({"b": 1, "a": {"d": 2, "c": 3}}) == canonicalize_dict(
            {"a": {"c": 3, "d": 2}, "b": 1}
        )


class TestLabels:
    def test_default_labels(self):
        assert Labels.generate_default_labels().as_dict() == {
            "created-by": "postgres-database-controller",
            "app": "postgres-database",
        }

    def test_pod_selector(self):
        assert Labels.postgres_pod_selector().as_dict() == {
            "postgres-operator.crunchydata.com/data": "postgres"
        }

    def test_as_str(self):
        assert Labels({"a": "1", "b": "2"}).as_str() == "a=1,b=2"

    def test_contains(self):
        labels = Labels.generate_default_labels().include("tier", "db")
        assert labels.contains(Labels.generate_default_labels())
        assert not Labels.empty().contains(labels)


class TestErrors:
    def test_validation_error_message(self):
        ex = ValidationError("replicas", "0 is out of range [1, 10]")
        assert ex.field == "replicas"
        assert str(ex) == "invalid replicas: 0 is out of range [1, 10]"

    def test_already_exists(self):
        assert already_exists_error(api_exception(409, "AlreadyExists"))
        assert already_exists_error(api_exception(409))
        assert not already_exists_error(api_exception(409, "Conflict"))
        assert not already_exists_error(RuntimeError("409"))

    def test_not_found(self):
        assert not_found_error(api_exception(404))
        assert not not_found_error(api_exception(403, "Forbidden"))

    def test_convert_client_error_is_permanent(self):
        with pytest.raises(kopf.PermanentError):
            convert_api_exception(api_exception(403, "Forbidden"))

    @pytest.mark.parametrize("status", [429, 500, 503])
    def test_convert_server_error_is_temporary(self, status):
        with pytest.raises(kopf.TemporaryError):
            convert_api_exception(api_exception(status))

    def test_convert_client_error_as_temporary(self):
        with pytest.raises(kopf.TemporaryError) as exc:
            convert_api_exception(api_exception(403, "Forbidden"), permanent=False, delay=12)
        assert exc.value.delay == 12


class TestBaseModel:
    def test_replace_returns_new_model(self):
        from pgdb.types.models import ResourceList

        original = ResourceList(cpu="100m", memory="256Mi")
        changed = original.replace(cpu="1")
        assert isinstance(changed, ResourceList)
        assert changed.cpu == "1"
        assert changed.memory == "256Mi"
        assert original.cpu == "100m"

    def test_as_dict_is_nested(self):
        from pgdb.types.models import ResourceList, ResourceRequirements

        requirements = ResourceRequirements(
            requests=ResourceList(cpu="100m", memory="256Mi"), limits=None
        )
        assert requirements.as_dict() == {
            "requests": {"cpu": "100m", "memory": "256Mi"},
            "limits": None,
        }
