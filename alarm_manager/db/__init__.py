"""Database engine and generic CRUD helpers."""
