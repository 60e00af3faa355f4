"""
Script to seed the public interview templates.
Run: python -m scripts.seed_templates

Idempotent: templates are matched by title and only missing ones are created.
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mockprep.db.session import session_scope
from mockprep.db.models.interview import (
    Interview,
    InterviewCategory,
    InterviewDifficulty,
    InterviewStatus,
)
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATES = [
    {
        "title": "Frontend Developer Interview",
        "description": "React, TypeScript, CSS, and modern web development best practices",
        "category": InterviewCategory.TECHNICAL,
        "difficulty": InterviewDifficulty.INTERMEDIATE,
        "duration": 45,
        "topics": ["React", "TypeScript", "CSS"],
        "role": "frontend",
        "icon": "code",
        "color": "bg-blue-500/10 text-blue-600",
    },
    {
        "title": "Backend Systems Design",
        "description": "Scalable architecture, databases, and distributed systems",
        "category": InterviewCategory.SYSTEM_DESIGN,
        "difficulty": InterviewDifficulty.ADVANCED,
        "duration": 60,
        "topics": ["Microservices", "Databases", "Caching"],
        "role": "backend",
        "icon": "database",
        "color": "bg-purple-500/10 text-purple-600",
    },
    {
        "title": "Leadership & Management",
        "description": "Team leadership, conflict resolution, and strategic thinking",
        "category": InterviewCategory.BEHAVIORAL,
        "difficulty": InterviewDifficulty.ADVANCED,
        "duration": 30,
        "topics": ["Leadership", "Communication", "Strategy"],
        "icon": "users",
        "color": "bg-green-500/10 text-green-600",
    },
    {
        "title": "Product Strategy Case",
        "description": "Market sizing, prioritisation, and structured business reasoning",
        "category": InterviewCategory.CASE_STUDY,
        "difficulty": InterviewDifficulty.INTERMEDIATE,
        "duration": 60,
        "topics": ["Market Sizing", "Prioritization", "Metrics"],
        "icon": "briefcase",
        "color": "bg-orange-500/10 text-orange-600",
    },
    {
        "title": "Quick Practice: Data Structures",
        "description": "Rapid-fire questions on arrays, hash maps, trees and graphs",
        "category": InterviewCategory.TECHNICAL,
        "difficulty": InterviewDifficulty.BEGINNER,
        "duration": 15,
        "topics": ["Arrays", "Hash Maps", "Trees"],
        "icon": "zap",
        "color": "bg-yellow-500/10 text-yellow-600",
    },
]


def seed_templates(db) -> int:
    """Create every template whose title is not stored yet. Returns the number created."""
    existing = {
        title for (title,) in db.query(Interview.title).filter(Interview.is_template.is_(True)).all()
    }

    created = 0
    for template in TEMPLATES:
        if template["title"] in existing:
            logger.info(f"Template already present: {template['title']}")
            continue
        db.add(Interview(
            user_id=None,
            is_template=True,
            status=InterviewStatus.NOT_STARTED,
            **template,
        ))
        created += 1

    db.flush()
    return created


def main() -> bool:
    try:
        with session_scope() as db:
            created = seed_templates(db)
    except Exception as e:
        logger.error(f"Error seeding templates: {e}", exc_info=True)
        return False

    logger.info(f"Seeded {created} template(s), {len(TEMPLATES) - created} already present")
    return True


if __name__ == "__main__":
    if not main():
        sys.exit(1)
