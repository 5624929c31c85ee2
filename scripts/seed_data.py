#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample users, books and reviews for local
development.

USAGE:
    python scripts/seed_data.py            # create tables if needed, add data
    python scripts/seed_data.py --reset    # drop everything first

Every sample account uses the password "bookshelf123".
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.database import SessionLocal, create_tables, drop_tables
from bookshelf.models import Book, Review, User
from bookshelf.services.accounts import register_user
from bookshelf.services.ratings import recalculate_book_rating
from bookshelf.services.security import PasswordHasher

SAMPLE_PASSWORD = "bookshelf123"


def create_users(db: Session, hasher: PasswordHasher) -> list[User]:
    print("Creating users...")
    return [
        register_user(db, hasher, username=name, email=f"{name}@example.com", password=SAMPLE_PASSWORD)
        for name in ("ryan", "maria", "devon")
    ]


def create_books(db: Session, added_by: User) -> list[Book]:
    print("Creating books...")
    books_data = [
        {
            "title": "1984",
            "author": "George Orwell",
            "isbn": "9780451524935",
            "published_date": date(1949, 6, 8),
            "genres": ["Dystopian", "Classics"],
            "description": "A dystopian novel set in a totalitarian society.",
        },
        {
            "title": "Pride and Prejudice",
            "author": "Jane Austen",
            "isbn": "9780141439518",
            "published_date": date(1813, 1, 28),
            "genres": ["Romance", "Classics"],
        },
        {
            "title": "The Left Hand of Darkness",
            "author": "Ursula K. Le Guin",
            "genres": ["Science Fiction"],
        },
    ]
    books = [Book(added_by_id=added_by.id, **data) for data in books_data]
    db.add_all(books)
    db.commit()
    return books


def create_reviews(db: Session, users: list[User], books: list[Book]) -> int:
    print("Creating reviews...")
    count = 0
    for offset, user in enumerate(users):
        for index, book in enumerate(books):
            db.add(Review(
                author_id=user.id,
                book_id=book.id,
                rating=(index + offset) % 5 + 1,
                review=f"{user.username} on {book.title}",
            ))
            count += 1
    db.commit()
    for book in books:
        recalculate_book_rating(db, book.id)
    return count


def seed_database(reset: bool = False) -> None:
    settings = get_settings()
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    if reset:
        print("Dropping existing tables...")
        drop_tables()
    create_tables()

    db = SessionLocal()
    try:
        users = create_users(db, hasher)
        books = create_books(db, users[0])
        reviews = create_reviews(db, users, books)

        print(f"\nSeeded {len(users)} users, {len(books)} books, {reviews} reviews.")
        print(f"Log in with any of them using the password '{SAMPLE_PASSWORD}'.")
    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the BookShelf database")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    seed_database(reset=args.reset)
