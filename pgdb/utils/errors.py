import json
import kopf
import kubernetes_asyncio

_ALREADY_EXISTS = "alreadyexists"
_NOT_FOUND = "notfound"


class OperatorError(Exception):
    """Base class for errors raised by the reconciliation core."""


class ValidationError(OperatorError):
    """A PostgresDatabase spec field is malformed."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"invalid {field}: {reason}")


class AlreadyExistsError(OperatorError):
    """The object being created already exists."""


class ChildCreateError(OperatorError):
    """Creating the PerconaPGCluster failed. Retryable."""


class StatusWriteError(OperatorError):
    """Persisting PostgresDatabase status failed."""


def _reason(ex: kubernetes_asyncio.client.ApiException) -> str:
    try:
        err = json.loads(ex.body) if ex.body else {}
    except (json.JSONDecodeError, TypeError):
        return ""
    return str(err.get("reason", "")).lower()


def already_exists_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 409 and _reason(ex) in (_ALREADY_EXISTS, "")


def not_found_error(ex: Exception) -> bool:
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        return False
    return ex.status == 404 or _reason(ex) == _NOT_FOUND


def describe_api_exception(ex: kubernetes_asyncio.client.ApiException) -> str:
    """Human readable summary of an ApiException, including the API message."""
    error_msg = f"Kubernetes API error ({ex.status}): {ex.reason}"
    try:
        if ex.body:
            body = json.loads(ex.body)
            if "message" in body:
                error_msg = f"{error_msg} - {body['message']}"
    except (json.JSONDecodeError, TypeError, AttributeError):
        pass
    return error_msg


def convert_api_exception(
    ex: kubernetes_asyncio.client.ApiException, permanent: bool = None, delay: float = 30
):
    """
    Convert kubernetes ApiException to a Kopf-friendly exception.

    Args:
        ex: The ApiException to convert
        permanent: If True, raises PermanentError (won't retry). If False, raises TemporaryError (will retry).
                   If None, automatically determines based on status code.
        delay: Retry delay for temporary errors.

    Raises:
        kopf.TemporaryError or kopf.PermanentError with serializable error details
    """
    if not isinstance(ex, kubernetes_asyncio.client.ApiException):
        raise ex

    error_msg = describe_api_exception(ex)

    # 4xx errors (except 408, 429) are typically permanent
    if permanent is None:
        is_permanent = 400 <= ex.status < 500 and ex.status not in [408, 429]
    else:
        is_permanent = permanent

    if is_permanent:
        raise kopf.PermanentError(error_msg) from ex
    else:
        raise kopf.TemporaryError(error_msg, delay=delay) from ex
