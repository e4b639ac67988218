"""Book Catalog - Core Package

This package contains the layered core of the catalog:
- Entities and transfer records (book.py)
- Error types (errors.py)
- Repository abstraction and in-memory store (repository.py)
- Unit of work / transaction facade (unit_of_work.py)
- Business rules (service.py)
"""
