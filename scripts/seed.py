#!/usr/bin/env python
"""
Seed the database for development.

Scenarios:
    default: a small public exercise catalog with no owner
    demo: the catalog plus one user per role (password "demo")
"""

import argparse
import asyncio
import sys

from sqlalchemy import select


# Add src to path for imports
sys.path.insert(0, "src")

from app.core.database import async_session_factory
from app.core.permissions import Role, Visibility, get_role_catalog
from app.modules import load_models
from app.modules.exercises.models import Exercise
from app.modules.users.repos import UserRepository
from app.modules.users.services import CredentialStore


CATALOG = [
    {
        "name": "barbell back squat",
        "target": "quads",
        "body_part": "upper legs",
        "equipment": "barbell",
    },
    {
        "name": "barbell bench press",
        "target": "pectorals",
        "body_part": "chest",
        "equipment": "barbell",
    },
    {
        "name": "barbell deadlift",
        "target": "glutes",
        "body_part": "upper legs",
        "equipment": "barbell",
    },
    {
        "name": "pull-up",
        "target": "lats",
        "body_part": "back",
        "equipment": "body weight",
    },
    {
        "name": "dumbbell shoulder press",
        "target": "delts",
        "body_part": "shoulders",
        "equipment": "dumbbell",
    },
    {
        "name": "plank",
        "target": "abs",
        "body_part": "waist",
        "equipment": "body weight",
    },
]

DEMO_USERS = [
    ("admin", Role.ADMIN),
    ("writer", Role.WRITER),
    ("visitor", Role.VISITOR),
]


async def seed_catalog() -> None:
    """Create the ownerless public exercises that are missing."""
    async with async_session_factory() as session:
        result = await session.execute(
            select(Exercise.name).where(Exercise.owner_id.is_(None))
        )
        existing = set(result.scalars().all())

        for data in CATALOG:
            if data["name"] in existing:
                print(f"Exercise already exists: {data['name']}")
                continue

            slug = data["name"].replace(" ", "-")
            session.add(
                Exercise(
                    **data,
                    gif_url=f"https://cdn.example.com/exercises/{slug}.gif",
                    is_custom=False,
                    visibility=Visibility.PUBLIC,
                    owner_id=None,
                )
            )
            print(f"Created exercise: {data['name']}")

        await session.commit()


async def seed_demo_users() -> None:
    """Create one user per role through the credential store."""
    async with async_session_factory() as session:
        store = CredentialStore(UserRepository(session), get_role_catalog())

        for username, role in DEMO_USERS:
            if await store.find_by_username(username) is not None:
                print(f"User already exists: {username}")
                continue

            user = await store.create(username=username, secret="demo", role=role)
            print(f"Created user: {user.username} ({user.role})")

        await session.commit()


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    load_models()
    if scenario == "default":
        await seed_catalog()
    elif scenario == "demo":
        await seed_catalog()
        await seed_demo_users()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with catalog data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
