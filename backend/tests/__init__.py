"""
Test Suite

Structure:
    tests/
    ├── conftest.py                  # Environment and shared fixtures
    ├── fakes.py                     # In-memory repositories
    ├── test_permission_resolver.py  # Role permission resolution
    ├── test_periods.py              # Pay period and day counting helpers
    ├── test_subject_resolver.py     # Staff lookup for admin queries
    ├── test_dispatcher.py           # Intent table and handlers
    └── test_api.py                  # HTTP endpoints

To run tests:
    pytest
"""
