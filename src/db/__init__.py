"""Practice-session persistence (SQLAlchemy)."""
