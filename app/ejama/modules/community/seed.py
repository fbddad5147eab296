"""
Default forum content written on first load.

Ids are fixed so repeated or concurrent seeding overwrites the same keys.
"""
from __future__ import annotations

from app.ejama.modules.community.models import Category, Post, Thread

SEED_CATEGORIES: tuple[Category, ...] = (
    Category(
        id="c-1",
        title="Menstrual Health Basics",
        description="Ask questions, share experiences, learn the basics.",
        icon="🩸",
        members_count=124,
    ),
    Category(
        id="c-2",
        title="Products & Access",
        description="Talk about pads, tampons, cups, brands, and availability.",
        icon="🧻",
        members_count=88,
    ),
    Category(
        id="c-3",
        title="Cramps & Pain Support",
        description="Home tips, comfort routines, when to seek help.",
        icon="💊",
        members_count=67,
    ),
    Category(
        id="c-4",
        title="Myths & Stigma",
        description="Break stigma, share facts, and support each other.",
        icon="💬",
        members_count=52,
    ),
)

SEED_THREADS: tuple[Thread, ...] = (
    Thread(
        id="t-1",
        category_id="c-1",
        title="What's considered a normal cycle length?",
        created_by="Ejama Team",
        created_at="Today",
    ),
    Thread(
        id="t-2",
        category_id="c-3",
        title="What helps you most with cramps?",
        created_by="Community",
        created_at="Today",
    ),
    Thread(
        id="t-3",
        category_id="c-2",
        title="Pads vs tampons: how did you choose?",
        created_by="Community",
        created_at="Today",
    ),
)

SEED_POSTS: tuple[Post, ...] = (
    Post(
        id="p-1",
        thread_id="t-1",
        author="Ejama Team",
        created_at="Today",
        content=(
            "Many people have cycles between 21–35 days. What's \"normal\" can vary — the key is "
            "consistency for YOU. If there's a sudden change, it may be worth checking with a "
            "healthcare professional."
        ),
        likes=4,
    ),
    Post(
        id="p-2",
        thread_id="t-2",
        author="Amina",
        created_at="Today",
        content=(
            "Heat pad + ginger tea + light stretching works for me. If it's really bad I rest "
            "and avoid caffeine."
        ),
        likes=7,
    ),
    Post(
        id="p-3",
        thread_id="t-3",
        author="Chidera",
        created_at="Today",
        content=(
            "I started with pads then tried tampons later. Comfort + activity level mattered "
            "most. Also having access and good hygiene helped."
        ),
        likes=3,
    ),
)
