"""Test suite for GeneList-Reconciler.

Test organization:
- fixtures/: Mock reference datasets, reference tables and collaborators
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
