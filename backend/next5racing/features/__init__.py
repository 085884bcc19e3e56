"""
Feature modules for Next5 Racing.

Each feature is a self-contained module with:
- models.py - dataclasses
- schemas.py - Pydantic schemas
- service.py - Business logic
- repository.py - In-memory state (optional)
"""
