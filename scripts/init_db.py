import os
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.ejama.models import Base
from app.ejama.modules.community.repository import CommunityRepository
from app.ejama.modules.community.service import seed_defaults
from app.ejama.modules.questions.repository import QuestionRepository
from app.ejama.modules.questions.service import list_public_questions
from scripts._db_utils import create_script_engine, script_store


def create_tables(*, database_url: str) -> None:
    """Create missing tables without alembic (local development)."""
    engine = create_script_engine(database_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()


def seed_only(*, database_url: str | None = None) -> None:
    """
    Seed default community content and sample questions in an idempotent way.
    Existing categories are left alone; seed keys are fixed so re-runs overwrite
    only the seed records themselves.
    """
    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///ejama.db").strip()

    with script_store(db_url) as store:
        community = CommunityRepository(store)
        if not community.list_categories():
            seed_defaults(community)
            print("Seeded default community categories/threads/posts.", flush=True)
        else:
            print("Community categories present; skipping community seed.", flush=True)

        # Seeds sample questions only when no public question exists.
        public = list_public_questions(QuestionRepository(store))
        print(f"Public questions available: {len(public)}", flush=True)


def main() -> None:
    db_url = (os.environ.get("DATABASE_URL") or "sqlite:///ejama.db").strip()
    create_tables(database_url=db_url)
    seed_only(database_url=db_url)
    print("Database initialized.", flush=True)


if __name__ == "__main__":
    main()
