from marshmallow import fields
from pgdb.types.base import BaseSchema
from pgdb.types.models.postgresdatabase_status import PostgresDatabaseStatus


class PostgresDatabaseStatusSchema(BaseSchema):
    """Status document written to the status subresource.

    Dumped attributes that are None stay in the document as null.
    """

    __model__ = PostgresDatabaseStatus

    phase = fields.Str(data_key="phase", load_default=None)
    endpoint = fields.Str(data_key="endpoint", load_default=None)
    ready_replicas = fields.Int(data_key="readyReplicas", load_default=None)
    message = fields.Str(data_key="message", load_default=None)
    credentials_secret_ref = fields.Str(data_key="credentialsSecretRef", load_default=None)
    last_backup_time = fields.Str(data_key="lastBackupTime", load_default=None)
    observed_running_version = fields.Str(
        data_key="observedRunningVersion", load_default=None
    )
    upstream_cluster_state = fields.Str(data_key="upstreamClusterState", load_default=None)
