import kopf
from logging import Logger
from kubernetes_asyncio.client import ApiException
from pgdb.controller.reconciler import PostgresDatabaseReconciler
from pgdb.types.models import POSTGRES_DATABASE
from pgdb.utils.errors import ChildCreateError, ValidationError, convert_api_exception

DATABASE_KIND = POSTGRES_DATABASE.kind


def get_reconciler(memo: kopf.Memo) -> PostgresDatabaseReconciler:
    reconciler = getattr(memo, "reconciler", None)
    if reconciler is None:
        raise kopf.TemporaryError("Operator is not initialized yet.", delay=5)
    return reconciler


@kopf.daemon(kind=DATABASE_KIND, initial_delay=1.0)
async def reconcile_database(
    stopped: kopf.DaemonStopped,
    name: str,
    namespace: str,
    body: kopf.Body,
    memo: kopf.Memo,
    logger: Logger,
    **kwargs,
):
    """Reconcile a PostgresDatabase until it is deleted or the operator stops.

    Each iteration runs one reconcile invocation and waits for the requeue
    interval it returns.
    """
    reconciler = get_reconciler(memo)
    while not stopped:
        try:
            result = await reconciler.reconcile(name, namespace, logger=logger)
        except ValidationError as ex:
            kopf.warn(body, reason="InvalidSpec", message=str(ex))
            raise kopf.TemporaryError(
                str(ex), delay=reconciler.conf.requeue_interval_seconds
            ) from ex
        except ChildCreateError as ex:
            raise kopf.TemporaryError(
                f"{ex}: {ex.__cause__}", delay=reconciler.conf.create_retry_delay_seconds
            ) from ex
        except ApiException as ex:
            convert_api_exception(
                ex, permanent=False, delay=reconciler.conf.requeue_interval_seconds
            )

        if result.requeue_after is None:
            logger.info(f"Stopping reconciliation of {namespace}/{name}")
            return
        logger.debug(
            f"Reconciled {namespace}/{name} ({result.state.name}, phase: {result.phase}), "
            f"next run in {result.requeue_after}s"
        )
        await stopped.wait(result.requeue_after)
