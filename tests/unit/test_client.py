"""Unit tests for the kubernetes backed ResourceClient."""

import asyncio
import json
import pytest
from unittest.mock import AsyncMock, Mock
from kubernetes_asyncio.client import ApiClient, ApiException
from pgdb.resources.client import KubernetesResourceClient
from pgdb.utils.errors import AlreadyExistsError, StatusWriteError

OWNER = {
    "apiVersion": "databases.mycompany.com/v1",
    "kind": "PostgresDatabase",
    "metadata": {"name": "orders-db", "namespace": "shop", "uid": "uid-1234"},
}


def api_exception(status, reason=None):
    ex = ApiException(status=status, reason="error")
    ex.body = json.dumps({"reason": reason, "message": "details"}) if reason else None
    return ex


@pytest.fixture
def custom_objects_api():
    api = Mock()
    api.get_namespaced_custom_object = AsyncMock()
    api.create_namespaced_custom_object = AsyncMock()
    api.patch_namespaced_custom_object_status = AsyncMock()
    return api


@pytest.fixture
def client(custom_objects_api):
    client = KubernetesResourceClient()
    client._custom_objects_api = custom_objects_api
    return client


def manifest():
    return {
        "apiVersion": "pgv2.percona.com/v2",
        "kind": "PerconaPGCluster",
        "metadata": {"name": "orders-db", "namespace": "shop"},
        "spec": {},
    }


class TestGet:
    def test_returns_object(self, client, custom_objects_api):
        custom_objects_api.get_namespaced_custom_object.return_value = OWNER
        assert asyncio.run(client.get("PostgresDatabase", "orders-db", "shop")) == OWNER
        custom_objects_api.get_namespaced_custom_object.assert_awaited_once_with(
            group="databases.mycompany.com",
            version="v1",
            namespace="shop",
            plural="postgresdatabases",
            name="orders-db",
        )

    def test_uses_cluster_coordinates(self, client, custom_objects_api):
        asyncio.run(client.get("PerconaPGCluster", "orders-db", "shop"))
        kwargs = custom_objects_api.get_namespaced_custom_object.call_args.kwargs
        assert kwargs["group"] == "pgv2.percona.com"
        assert kwargs["version"] == "v2"
        assert kwargs["plural"] == "perconapgclusters"

    def test_not_found_is_none(self, client, custom_objects_api):
        custom_objects_api.get_namespaced_custom_object.side_effect = api_exception(404)
        assert asyncio.run(client.get("PostgresDatabase", "orders-db", "shop")) is None

    def test_other_errors_propagate(self, client, custom_objects_api):
        custom_objects_api.get_namespaced_custom_object.side_effect = api_exception(500)
        with pytest.raises(ApiException):
            asyncio.run(client.get("PostgresDatabase", "orders-db", "shop"))

    def test_unknown_kind(self, client):
        with pytest.raises(ValueError):
            asyncio.run(client.get("Deployment", "orders-db", "shop"))


class TestCreate:
    def test_sets_owner_reference(self, client, custom_objects_api):
        body = manifest()
        asyncio.run(client.create("PerconaPGCluster", body, owner=OWNER))

        kwargs = custom_objects_api.create_namespaced_custom_object.call_args.kwargs
        assert kwargs["namespace"] == "shop"
        assert kwargs["plural"] == "perconapgclusters"
        refs = kwargs["body"]["metadata"]["ownerReferences"]
        assert len(refs) == 1
        assert refs[0]["uid"] == "uid-1234"
        assert refs[0]["kind"] == "PostgresDatabase"
        assert refs[0]["controller"] is True

    def test_does_not_mutate_body(self, client):
        body = manifest()
        asyncio.run(client.create("PerconaPGCluster", body, owner=OWNER))
        assert "ownerReferences" not in body["metadata"]

    def test_conflict_is_already_exists(self, client, custom_objects_api):
        custom_objects_api.create_namespaced_custom_object.side_effect = api_exception(
            409, "AlreadyExists"
        )
        with pytest.raises(AlreadyExistsError):
            asyncio.run(client.create("PerconaPGCluster", manifest(), owner=OWNER))

    def test_other_conflicts_propagate(self, client, custom_objects_api):
        custom_objects_api.create_namespaced_custom_object.side_effect = api_exception(
            409, "Conflict"
        )
        with pytest.raises(ApiException):
            asyncio.run(client.create("PerconaPGCluster", manifest(), owner=OWNER))

    def test_forbidden_propagates(self, client, custom_objects_api):
        custom_objects_api.create_namespaced_custom_object.side_effect = api_exception(
            403, "Forbidden"
        )
        with pytest.raises(ApiException):
            asyncio.run(client.create("PerconaPGCluster", manifest(), owner=OWNER))


class TestUpdateStatus:
    def test_patches_status_subresource(self, client, custom_objects_api):
        asyncio.run(
            client.update_status("PostgresDatabase", "orders-db", "shop", {"phase": "Ready"})
        )
        custom_objects_api.patch_namespaced_custom_object_status.assert_awaited_once_with(
            group="databases.mycompany.com",
            version="v1",
            namespace="shop",
            plural="postgresdatabases",
            name="orders-db",
            body={"status": {"phase": "Ready"}},
            _content_type="application/merge-patch+json",
        )

    def test_sent_as_merge_patch(self):
        response = Mock(status=200, data=b"{}")
        response.getheader.return_value = "application/json"

        async def run():
            api_client = ApiClient()
            api_client.rest_client.request = AsyncMock(return_value=response)
            try:
                await KubernetesResourceClient(api_client).update_status(
                    "PostgresDatabase", "orders-db", "shop", {"phase": "Ready", "endpoint": None}
                )
            finally:
                await api_client.close()
            return api_client.rest_client.request.call_args

        call = asyncio.run(run())
        assert call.args[0] == "PATCH"
        assert call.args[1].endswith(
            "/apis/databases.mycompany.com/v1/namespaces/shop/postgresdatabases/orders-db/status"
        )
        assert call.kwargs["headers"]["Content-Type"] == "application/merge-patch+json"
        assert call.kwargs["body"] == {"status": {"phase": "Ready", "endpoint": None}}

    def test_api_error_is_status_write_error(self, client, custom_objects_api):
        custom_objects_api.patch_namespaced_custom_object_status.side_effect = api_exception(
            422, "Invalid"
        )
        with pytest.raises(StatusWriteError) as exc:
            asyncio.run(
                client.update_status("PostgresDatabase", "orders-db", "shop", {"phase": "Ready"})
            )
        assert "422" in str(exc.value)
        assert "details" in str(exc.value)
