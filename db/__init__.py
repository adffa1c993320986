"""
Database package for the expert directory.
Provides the SQLAlchemy engine, the experts table definition and the directory query layer.
"""

from db.engine import EngineSettings, create_db_engine, dispose_engine, get_engine
from db.tables import experts, metadata

__all__ = [
    "EngineSettings",
    "create_db_engine",
    "dispose_engine",
    "experts",
    "get_engine",
    "metadata",
]
