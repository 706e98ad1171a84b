"""
card_service package

This package contains the backend for the card service. It includes:

- FastAPI application factory (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- Password hashing and JWT logic (`auth.py`)
- Pydantic schemas (`schemas.py`) and settings (`config.py`)
"""
