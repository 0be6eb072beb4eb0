"""Deal store readiness check reporting the applied schema revision."""

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from fxdeals.domain import HealthStatus

from .interfaces import DatabaseHealthPort

_DB_SCHEMA_REVISION_SQL = "SELECT version_num FROM alembic_version"
_DB_DEAL_TABLE_CHECK_SQL = "SELECT 1 FROM deal WHERE 1 = 0"


class SQLAlchemyDatabaseHealthService(DatabaseHealthPort):
    """Readiness checks for the deal store.

    The store counts as reachable only when a connection opens, Alembic has
    recorded a revision, and the `deal` table can be queried.
    """

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_connection_label(self) -> str:
        """Return the engine URL with its password masked."""

        return self._engine.url.render_as_string(hide_password=True)

    def db_check_health(self) -> HealthStatus:
        """Check the deal store and report the applied schema revision.

        Returns:
            HealthStatus: `ok` status with dialect and revision detail.

        Raises:
            ConnectionError: Raised when the store is unreachable or not migrated.
        """

        try:
            with self._engine.connect() as connection:
                schema_revision = connection.execute(text(_DB_SCHEMA_REVISION_SQL)).scalar()
                connection.execute(text(_DB_DEAL_TABLE_CHECK_SQL))
        except SQLAlchemyError as error:
            raise ConnectionError("deal store is unreachable or not migrated") from error

        if schema_revision is None:
            raise ConnectionError("deal store has no applied schema revision")
        return HealthStatus(
            status="ok",
            detail=f"{self._engine.dialect.name} deal store at revision {schema_revision}",
        )
