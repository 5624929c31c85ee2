"""
Test Suite for the BookShelf API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_security.py: Password hashing and token service
- test_config.py: Settings loading and validation
- test_accounts.py: Registration validation, credential handling, races
- test_auth.py: /api/auth/* endpoints
- test_auth_gate.py: Bearer token gate on protected routes
- test_users.py, test_books.py, test_reviews.py: Resource endpoints
- test_app.py: Root, health check, docs outside production

Running Tests:
    pytest
    pytest tests/test_auth.py -v
"""
