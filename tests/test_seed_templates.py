"""
Tests for the template seeding script.
"""
from mockprep.db.models.interview import Interview

from scripts.seed_templates import TEMPLATES, seed_templates


def test_seed_templates_is_idempotent(db):
    assert seed_templates(db) == len(TEMPLATES)
    db.commit()
    assert seed_templates(db) == 0

    templates = db.query(Interview).filter(Interview.is_template.is_(True)).all()
    assert len(templates) == len(TEMPLATES)
    assert all(t.user_id is None for t in templates)


def test_seed_templates_only_adds_missing(db):
    db.add(Interview(title=TEMPLATES[0]["title"], is_template=True, topics=[]))
    db.commit()

    assert seed_templates(db) == len(TEMPLATES) - 1
