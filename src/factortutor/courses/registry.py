"""Course discovery and catalog loading."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from factortutor.config.settings import Settings
from factortutor.engine.lesson_loader import Catalog, CourseMeta, catalog_from_dict, load_catalog, load_course

logger = logging.getLogger(__name__)


class CourseRegistry:
    """Discovers and loads courses bundled with the package."""

    def __init__(self, courses_dir: Path | None = None):
        self.courses_dir = courses_dir or (
            Path(__file__).parent
        )

    def list_courses(self) -> list[CourseMeta]:
        """Discover all courses with a course.yaml."""
        courses = []
        for path in sorted(self.courses_dir.iterdir()):
            if path.is_dir() and (path / "course.yaml").exists():
                try:
                    courses.append(load_course(path))
                except (OSError, KeyError, ValueError) as e:
                    logger.warning("Skipping unreadable course %s: %s", path.name, e)
        return courses

    def get_course(self, course_id: str) -> CourseMeta | None:
        for course in self.list_courses():
            if course.id == course_id:
                return course
        return None

    def load(self, course_id: str) -> Catalog:
        if self.get_course(course_id) is None:
            raise ValueError(f"Unknown course: {course_id}")
        return load_catalog(self.courses_dir / course_id)


def fetch_remote_catalog(url: str, timeout: float) -> Catalog:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return catalog_from_dict(response.json(), source="remote")


def load_problem_catalog(
    settings: Settings | None = None, registry: CourseRegistry | None = None
) -> Catalog:
    """Load the catalog from the remote source, falling back to bundled content.

    A missing remote URL, a network failure or a malformed remote document all
    fall back to the bundled course named by ``settings.catalog.course_id``.
    """
    settings = settings or Settings.load()
    registry = registry or CourseRegistry()

    url = settings.catalog.get_remote_url()
    if url:
        try:
            catalog = fetch_remote_catalog(url, settings.catalog.timeout_seconds)
            logger.info("Loaded catalog %s from %s", catalog.course.id, url)
            return catalog
        except requests.RequestException as e:
            logger.warning("Remote catalog unavailable (%s); using bundled content", e)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Remote catalog malformed (%s); using bundled content", e)

    return registry.load(settings.catalog.course_id)
