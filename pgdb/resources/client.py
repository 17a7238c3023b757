import copy
import kopf
import logging
from typing import Dict, Optional
from kubernetes_asyncio.client import ApiClient, ApiException, CustomObjectsApi
from pgdb.types.models.kinds import KINDS, ResourceKind
from pgdb.utils.errors import (
    AlreadyExistsError,
    StatusWriteError,
    already_exists_error,
    describe_api_exception,
    not_found_error,
)

logger = logging.getLogger(__name__)

#: Status is written as a JSON merge patch. A null value removes the field.
MERGE_PATCH = "application/merge-patch+json"


class ResourceClient:
    """Operations the reconciler needs from the cluster.

    Implementations look objects up by kind name, name and namespace.
    """

    async def get(self, kind: str, name: str, namespace: str) -> Optional[Dict]:
        """Return the object, or None if it does not exist."""
        raise NotImplementedError()

    async def create(self, kind: str, body: Dict, owner: Dict) -> Dict:
        """Create `body` owned by `owner`.

        Raises:
            AlreadyExistsError: an object with the same identity exists.
        """
        raise NotImplementedError()

    async def update_status(
        self, kind: str, name: str, namespace: str, status: Dict
    ) -> None:
        """Replace fields of the status subresource.

        Raises:
            StatusWriteError: the write was rejected.
        """
        raise NotImplementedError()


class KubernetesResourceClient(ResourceClient):
    """ResourceClient backed by the kubernetes custom objects API."""

    _api_client: ApiClient = None
    _custom_objects_api: CustomObjectsApi = None

    def __init__(self, api_client: ApiClient = None):
        self._api_client = api_client

    @property
    def custom_objects_api(self) -> CustomObjectsApi:
        if self._custom_objects_api is None:
            self._custom_objects_api = CustomObjectsApi(self._api_client)
        return self._custom_objects_api

    def kind(self, kind: str) -> ResourceKind:
        try:
            return KINDS[kind]
        except KeyError:
            raise ValueError(f"Unsupported kind: {kind}") from None

    async def get(self, kind: str, name: str, namespace: str) -> Optional[Dict]:
        rk = self.kind(kind)
        try:
            return await self.custom_objects_api.get_namespaced_custom_object(
                group=rk.group,
                version=rk.version,
                namespace=namespace,
                plural=rk.plural,
                name=name,
            )
        except ApiException as ex:
            if not_found_error(ex):
                return None
            raise

    async def create(self, kind: str, body: Dict, owner: Dict) -> Dict:
        rk = self.kind(kind)
        body = copy.deepcopy(body)
        kopf.append_owner_reference(body, owner=owner)
        namespace = body["metadata"]["namespace"]
        try:
            return await self.custom_objects_api.create_namespaced_custom_object(
                group=rk.group,
                version=rk.version,
                namespace=namespace,
                plural=rk.plural,
                body=body,
            )
        except ApiException as ex:
            if already_exists_error(ex):
                raise AlreadyExistsError(
                    f"{kind} {namespace}/{body['metadata']['name']} already exists"
                ) from ex
            raise

    async def update_status(
        self, kind: str, name: str, namespace: str, status: Dict
    ) -> None:
        rk = self.kind(kind)
        try:
            await self.custom_objects_api.patch_namespaced_custom_object_status(
                group=rk.group,
                version=rk.version,
                namespace=namespace,
                plural=rk.plural,
                name=name,
                body={"status": status},
                _content_type=MERGE_PATCH,
            )
        except ApiException as ex:
            raise StatusWriteError(describe_api_exception(ex)) from ex
