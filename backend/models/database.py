# backend/models/database.py

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()


# O SQLite só aplica as chaves estrangeiras quando a PRAGMA é ligada em cada conexão.
@event.listens_for(Engine, "connect")
def _ativar_chaves_estrangeiras_sqlite(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()
