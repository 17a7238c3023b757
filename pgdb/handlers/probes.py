import kopf
from pgdb.utils.helpers import now


@kopf.on.probe(id='now')
def get_current_timestamp(**kwargs):
    return now()


@kopf.on.probe(id='reconciler')
def reconciler_ready(memo: kopf.Memo, **kwargs):
    """Whether startup finished wiring the reconciler."""
    return getattr(memo, "reconciler", None) is not None
