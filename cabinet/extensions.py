from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy


class DatabaseSingleton:
    _instance = None

    @staticmethod
    def get_instance():
        if DatabaseSingleton._instance is None:
            DatabaseSingleton._instance = SQLAlchemy()
        return DatabaseSingleton._instance


db = DatabaseSingleton.get_instance()


@contextmanager
def unit_of_work(session=None):
    """Commit everything done inside the block, or roll all of it back."""
    session = session or db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
