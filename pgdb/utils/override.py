"""
Replacement for kopf._cogs.helpers.thirdparty that recognizes kubernetes_asyncio.

Kopf only detects models from the synchronous `kubernetes` client when it
adopts children or reads owner references. The operator talks to the API
through kubernetes_asyncio, so the thirdparty module is swapped in
sys.modules before Kopf loads its internals (see nolar/kopf#809).

Import this module before anything that imports kopf.
"""
import abc
import sys
import types
from typing import Any, Optional

_THIRDPARTY_MODULE = "kopf._cogs.helpers.thirdparty"


def _kubernetes_asyncio_meta_classes():
    try:
        from kubernetes_asyncio.client import V1ObjectMeta, V1OwnerReference
    except ImportError:
        return None, None
    return V1ObjectMeta, V1OwnerReference


def _pykube_object_class():
    try:
        from pykube.objects import APIObject
    except ImportError:

        class APIObject:
            pass

    return APIObject


def patch_kopf_thirdparty():
    """Install the thirdparty replacement once per process."""
    existing = sys.modules.get(_THIRDPARTY_MODULE)
    if existing is not None and getattr(existing, "_pgdb_patched", False):
        return

    V1ObjectMeta, V1OwnerReference = _kubernetes_asyncio_meta_classes()

    class KubernetesModel(abc.ABC):
        @classmethod
        def __subclasshook__(cls, subcls: Any) -> Any:
            if cls is not KubernetesModel:
                return NotImplemented
            for klass in subcls.__mro__:
                if klass.__module__.startswith(
                    ("kubernetes.client.models.", "kubernetes_asyncio.client.models.")
                ):
                    return True
            return NotImplemented

        @property
        def metadata(self) -> Optional[Any]:
            raise NotImplementedError

        @metadata.setter
        def metadata(self, _: Optional[Any]) -> None:
            raise NotImplementedError

    module = types.ModuleType("thirdparty")
    module.PykubeObject = _pykube_object_class()
    module.KubernetesModel = KubernetesModel
    module.V1ObjectMeta = V1ObjectMeta
    module.V1OwnerReference = V1OwnerReference
    module._pgdb_patched = True
    sys.modules[_THIRDPARTY_MODULE] = module


patch_kopf_thirdparty()
