"""Database Infrastructure - SQLAlchemy declarative Base shared by every model."""
