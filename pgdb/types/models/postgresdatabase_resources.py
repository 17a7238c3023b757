class PostgresDatabaseResources:
    """Encapsulates the naming scheme of the resources the operator derives
    from a PostgresDatabase of a given name."""

    CLUSTER_DOMAIN = "svc.cluster.local"

    @classmethod
    def cluster_name(self, database_name: str):
        """Returns the name of the PerconaPGCluster owned by the database. Always 1:1."""
        return database_name

    @classmethod
    def primary_service_name(self, database_name: str):
        """Returns the name of the read-write service of the cluster."""
        return f"{database_name}-rw"

    @classmethod
    def endpoint(self, database_name: str, namespace: str):
        """Returns the in-cluster DNS name clients connect to."""
        return f"{self.primary_service_name(database_name)}.{namespace}.{self.CLUSTER_DOMAIN}"

    @classmethod
    def credentials_secret_name(self, database_name: str):
        """Returns the name of the secret holding connection credentials."""
        return f"{database_name}.postgres-secret"
