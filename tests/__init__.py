"""
SOLARWATCH Test Suite

This package contains all tests for SOLARWATCH.

Test Organization:
    tests/
    ├── __init__.py          # This file
    ├── conftest.py          # Shared fixtures (resolver stubs, locations)
    └── unit/                # Unit tests

Running Tests:
    # Run all tests
    pytest tests/

    # Run with coverage
    pytest tests/ --cov=services --cov=solarwatch --cov-report=html

Requirements:
    pip install -e ".[test]"

Some tests use the real pytz timezone database; none need network access.
"""
