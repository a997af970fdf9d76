"""
Feature modules for trackdigest.

Each feature is a self-contained module with:
- parser.py - Input decoding
- schemas.py - Pydantic schemas
- service.py - Pipeline orchestration
"""
