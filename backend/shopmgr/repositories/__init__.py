"""Data access"""
from shopmgr.repositories.record_store import AppointmentQuery, RecordStore, SqlAlchemyRecordStore

__all__ = ["AppointmentQuery", "RecordStore", "SqlAlchemyRecordStore"]
