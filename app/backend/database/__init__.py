"""Database module for FastAPI backend"""

from .connection import get_db, get_engine, get_session_factory, ping, close_engine

__all__ = ['get_db', 'get_engine', 'get_session_factory', 'ping', 'close_engine']
