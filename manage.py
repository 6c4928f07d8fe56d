#!/usr/bin/env python3
"""
Management commands for Brainjot API.

Usage:
    python manage.py init_db
    python manage.py check_db
    python manage.py reset_db
    python manage.py create_user <username> <email> <password>
"""

import sys
from sqlalchemy import inspect
from sqlmodel import SQLModel
from database import engine, get_session
from settings import logger
from helpers.auth import hash_password
# Import all models to ensure tables are created
from models.user import User
from models.notes import Note, Comment
from models.chat import ChatMessage


def init_db():
    """Initialize database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def check_db():
    """Check database connection and tables."""
    try:
        tables = inspect(engine).get_table_names()
        logger.info(f"Database connected. Found {len(tables)} tables: {tables}")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)


def reset_db():
    """Drop and recreate all database tables."""
    logger.warning("Dropping all database tables...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database reset successfully")


def create_user(username: str, email: str, password: str):
    """Create a user account directly in the database."""
    try:
        with next(get_session()) as session:
            user = User(
                username=username,
                email=email.strip().lower(),
                hashed_password=hash_password(password)
            )

            session.add(user)
            session.commit()
            session.refresh(user)

            logger.info(f"User '{username}' created successfully with ID: {user.id}")
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        sys.exit(1)


def main():
    if len(sys.argv) < 2:
        print("Usage: python manage.py <command> [args]")
        print("Commands:")
        print("  init_db                                - Initialize database tables")
        print("  check_db                               - Check database connection")
        print("  reset_db                               - Drop and recreate all tables")
        print("  create_user <username> <email> <pass>  - Create a user")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init_db":
        init_db()
    elif command == "check_db":
        check_db()
    elif command == "reset_db":
        reset_db()
    elif command == "create_user":
        if len(sys.argv) != 5:
            print("Usage: python manage.py create_user <username> <email> <password>")
            sys.exit(1)
        create_user(sys.argv[2], sys.argv[3], sys.argv[4])
    else:
        print(f"Unknown command: {command}")
        print("Run 'python manage.py' to see available commands")
        sys.exit(1)


if __name__ == "__main__":
    main()
