from fastapi import Depends
from sqlalchemy.orm import Session

from config.database import get_db
from app.stores.sql_stores import SqlChildDirectory, SqlEntryStore, SqlReportStore
from app.utils.bulk_writer import BulkWriter
from app.utils.report_generator import DailyAggregator


def get_entry_store(db: Session = Depends(get_db)) -> SqlEntryStore:
    return SqlEntryStore(db)


def get_report_store(db: Session = Depends(get_db)) -> SqlReportStore:
    return SqlReportStore(db)


def get_child_directory(db: Session = Depends(get_db)) -> SqlChildDirectory:
    return SqlChildDirectory(db)


def get_bulk_writer(entry_store: SqlEntryStore = Depends(get_entry_store)) -> BulkWriter:
    return BulkWriter(entry_store)


def get_aggregator(
    entry_store: SqlEntryStore = Depends(get_entry_store),
    report_store: SqlReportStore = Depends(get_report_store),
    directory: SqlChildDirectory = Depends(get_child_directory),
) -> DailyAggregator:
    return DailyAggregator(entry_store, report_store, directory)
