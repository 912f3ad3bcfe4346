"""
Database initialization script.

Creates all tables and, with ``--demo``, a demo user with one planned
workout for today.  Production databases use ``alembic upgrade head``.

Usage:
    python scripts/init_db.py [--demo]
"""

import datetime
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.db.init_db import init_db
from app.db.repositories.user import UserRepository
from app.db.repositories.workout import WorkoutRepository
from app.db.session import engine
from app.models.user import User
from app.models.workout import Workout

DEMO_EMAIL = "demo@atlas.local"


def seed_demo() -> None:
    with Session(engine) as session:
        users = UserRepository(session)
        user = users.get_by_email(DEMO_EMAIL)
        if user is None:
            user = users.create(User(email=DEMO_EMAIL, full_name="Demo Athlete"))
        WorkoutRepository(session).create(Workout(
            user_id=user.id,
            date=datetime.date.today(),
            title="Tempo run",
            type="run",
            duration_min=50,
        ))
        session.commit()
        print(f"Demo user id: {user.id} (send it as X-User-Id)")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=" * 50)
    print("ATLAS Database Initialization")
    print("=" * 50)
    print()

    try:
        init_db()
        if "--demo" in sys.argv:
            seed_demo()
        print()
        print("=" * 50)
        print("SUCCESS: Database initialized!")
        print("=" * 50)
        sys.exit(0)

    except SQLAlchemyError as e:
        print()
        print("=" * 50)
        print("ERROR: Database initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
