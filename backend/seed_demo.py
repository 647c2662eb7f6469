#!/usr/bin/env python3
"""
Seed script for the NavLearn demo environment.

This script sets up:
- A demo trainee account with some recorded progress
- Sample knowledge documents so the training chat can answer right away
- No PII - all data is synthetic for demo purposes
"""

from navlearn.core.auth import hash_password
from navlearn.core.config import settings
from navlearn.core.storage import DataRepository, JsonFileRepository
from navlearn.models.knowledge import KnowledgeEntry
from navlearn.models.records import UserRecord


DEMO_USER_EMAIL = "demo.trainee@navlearn.example.com"
DEMO_USER_PASSWORD = "demo-password"

SAMPLE_DOCUMENTS = [
    {
        "title": "Anatomy",
        "text": (
            "The skull protects the brain. The spine supports the body. "
            "Cartilage cushions the joints between vertebrae."
        ),
    },
    {
        "title": "Cranial Navigation",
        "text": (
            "Register the patient before starting cranial navigation. "
            "Surface registration uses anatomical landmarks on the face. "
            "Verify accuracy by touching a known landmark with the probe!"
        ),
    },
    {
        "title": "ENT Navigation",
        "text": (
            "Sinus surgery relies on accurate tracking of the instrument tip. "
            "Recalibrate the tracked instrument whenever it is replaced."
        ),
    },
]


def seed_demo_data(repository: DataRepository) -> dict:
    """Seed the store with demo data; existing records are left untouched."""
    print("🌱 Starting demo data seeding...")
    data = repository.read()

    # 1. Demo trainee
    if DEMO_USER_EMAIL in data.users:
        print(f"   ⚠️  Trainee '{DEMO_USER_EMAIL}' already exists, skipping...")
    else:
        data.users[DEMO_USER_EMAIL] = UserRecord(
            email=DEMO_USER_EMAIL,
            first_name="Demo",
            last_name="Trainee",
            serial="NAV-0001",
            hospital="Demo General Hospital",
            password_hash=hash_password(DEMO_USER_PASSWORD),
        )
        data.progress.setdefault(DEMO_USER_EMAIL, {"cranial": 40, "spine": 10})
        print(f"   ✅ Created trainee: {DEMO_USER_EMAIL}")

    # 2. Knowledge documents for the chat
    existing_titles = {e.title for e in data.knowledge}
    created = 0
    for doc in SAMPLE_DOCUMENTS:
        if doc["title"] in existing_titles:
            print(f"   ⚠️  Document '{doc['title']}' already exists, skipping...")
            continue

        data.knowledge.append(KnowledgeEntry(
            title=doc["title"],
            original_name=f"{doc['title'].lower().replace(' ', '-')}.txt",
            mime_type="text/plain",
            size=len(doc["text"].encode("utf-8")),
            text=doc["text"],
        ))
        created += 1
        print(f"   ✅ Created knowledge document: {doc['title']}")

    repository.write(data)

    print("\n✨ Demo data seeding complete!")
    return {
        "user": DEMO_USER_EMAIL,
        "documents_created": created,
        "documents_total": len(data.knowledge),
    }


def main():
    """Run the seeding process against the configured data file."""
    seed_demo_data(JsonFileRepository(settings.DATA_FILE))


if __name__ == "__main__":
    main()
