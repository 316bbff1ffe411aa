"""Application interfaces (ports). Infrastructure implements them."""

from app.application.interfaces.record_store import IRecordStore

__all__ = ["IRecordStore"]
