"""Database layer: connection management, table models and repositories"""

from contract_manager.database.connection import DatabaseManager, DatabaseSettings, get_db_manager

__all__ = ["DatabaseManager", "DatabaseSettings", "get_db_manager"]
