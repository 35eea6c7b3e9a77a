"""Shared fixtures for FactorTutor tests."""

from __future__ import annotations

import pytest
import yaml

from factortutor.courses.registry import CourseRegistry
from factortutor.engine.lesson_loader import load_catalog


@pytest.fixture
def sample_course_dir(tmp_path):
    """Create a minimal course directory for testing."""
    course_dir = tmp_path / "test_course"
    course_dir.mkdir()

    course_data = {
        "course": {
            "id": "test_course",
            "title": "Test Course",
            "description": "A test course",
            "version": "1.0.0",
        }
    }
    with open(course_dir / "course.yaml", "w") as f:
        yaml.dump(course_data, f)

    slides = [
        {
            "order": 2,
            "title": "Second",
            "content": "1. one\n2. two",
        },
        {
            "order": 1,
            "title": "First",
            "content": "**Factorization** undoes multiplication.\n\n* a\n* b",
            "simpleAltContent": "Think of 6 = 2 x 3.",
        },
    ]
    with open(course_dir / "slides.yaml", "w") as f:
        yaml.dump(slides, f)

    problems = [
        {
            "id": 1,
            "question": "x^2+8x+15",
            "correctAnswer": "(x+3)(x+5)",
            "type": "plain",
            "hint": "Multiply to 15, add to 8.",
            "solutionSteps": ["**Step 1:** find 3 and 5", "**Step 2:** write (x+3)(x+5)"],
        },
        {
            "id": 2,
            "question": "5x^2+15x+10",
            "correctAnswer": "5(x+1)(x+2)",
            "type": "gcf",
            "hint": "GCF first.",
        },
        {
            "id": 3,
            "question": "x^2+10x+25",
            "correctAnswer": "(x+5)^2",
            "type": "perfectSquare",
        },
        {
            "id": 4,
            "question": "2x^2+7x+3",
            "correctAnswer": "(2x+1)(x+3)",
            "type": "a!=1",
        },
    ]
    with open(course_dir / "problems.yaml", "w") as f:
        yaml.dump(problems, f)

    return course_dir


@pytest.fixture
def sample_catalog(sample_course_dir):
    return load_catalog(sample_course_dir)


@pytest.fixture
def sample_registry(sample_course_dir):
    return CourseRegistry(courses_dir=sample_course_dir.parent)


@pytest.fixture
def bundled_catalog():
    return CourseRegistry().load("trinomial_factoring")
