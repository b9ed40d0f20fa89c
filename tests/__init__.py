"""
SKYPATH Test Suite

Test Organization:
    tests/
    ├── __init__.py          # This file
    ├── conftest.py          # Shared sites, instants and environment isolation
    └── unit/                # Unit tests (no network, no data files)

Running Tests:
    # Run all tests
    pytest tests/

    # Include the Skyfield reference checks (downloads JPL DE440s once)
    SKYPATH_REFERENCE_TESTS=1 pytest tests/ -m reference

Requirements:
    pip install -e .[test]
"""
