"""
API Routers Package

Router Structure:
- auth.py: /api/auth/* (register, login, me)
- users.py: /api/users/* (profiles)
- books.py: /api/books/* (catalog)
- reviews.py: /api/books/{id}/reviews and /api/reviews/* (reviews, likes, comments)

Each router is imported and registered in main.py.
"""

from bookshelf.routers.auth import router as auth_router
from bookshelf.routers.books import router as books_router
from bookshelf.routers.reviews import router as reviews_router
from bookshelf.routers.users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "books_router",
    "reviews_router",
]
