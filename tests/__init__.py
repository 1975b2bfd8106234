"""
ElectroMart API Test Suite

Tests are organized into:
- unit/: Unit tests for validators, setters, search and repositories
- integration/: HTTP tests against the FastAPI application
"""
