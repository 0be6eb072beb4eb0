"""Database layer package for all SQL and persistence boundaries."""

from .deal_store import SQLAlchemyDealRecordStore
from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, DealRecordStorePort, RecordAlreadyExistsError
from .session import db_create_engine

__all__ = [
	"DatabaseHealthPort",
	"DealRecordStorePort",
	"RecordAlreadyExistsError",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyDealRecordStore",
	"db_create_engine",
]
