"""
Services Package

Business logic kept separate from HTTP handling (routers):
- accounts.py: Registration, login, profile and password changes
- rate_limiter.py: Rate limiting with slowapi
- ratings.py: Book rating aggregation
- security.py: Password hashing and bearer tokens
"""
