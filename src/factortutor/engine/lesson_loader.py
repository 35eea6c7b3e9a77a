"""YAML course parser for FactorTutor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from factortutor.engine.checker import ProblemType


@dataclass(frozen=True)
class CourseMeta:
    id: str
    title: str
    description: str
    version: str


@dataclass(frozen=True)
class Slide:
    order: int
    title: str
    content: str
    simple_alt_content: str = ""


@dataclass(frozen=True)
class ProblemSpec:
    id: int
    question: str
    correct_answer: str
    type: ProblemType = ProblemType.PLAIN
    hint: str = ""
    solution_steps: tuple[str, ...] = ()


@dataclass
class Catalog:
    course: CourseMeta
    slides: list[Slide] = field(default_factory=list)
    problems: list[ProblemSpec] = field(default_factory=list)
    source: str = "bundled"  # "bundled" or "remote"

    def get_problem(self, problem_id: int) -> ProblemSpec:
        for problem in self.problems:
            if problem.id == problem_id:
                return problem
        raise KeyError(f"Unknown problem: {problem_id}")


def _parse_course(raw: dict) -> CourseMeta:
    c = raw["course"]
    return CourseMeta(
        id=c["id"],
        title=c["title"],
        description=c.get("description", ""),
        version=str(c.get("version", "")),
    )


def _parse_slides(raw_slides) -> list[Slide]:
    slides = [
        Slide(
            order=int(raw["order"]),
            title=raw["title"],
            content=raw["content"],
            simple_alt_content=raw.get("simpleAltContent", ""),
        )
        for raw in raw_slides or []
    ]
    return sorted(slides, key=lambda s: s.order)


def _parse_problems(raw_problems) -> list[ProblemSpec]:
    problems = []
    seen: set[int] = set()
    for raw in raw_problems or []:
        pid = int(raw["id"])
        if pid in seen:
            raise ValueError(f"Duplicate problem id: {pid}")
        seen.add(pid)
        problems.append(ProblemSpec(
            id=pid,
            question=raw["question"],
            correct_answer=raw["correctAnswer"],
            type=ProblemType.from_tag(raw.get("type", "plain")),
            hint=raw.get("hint", ""),
            solution_steps=tuple(raw.get("solutionSteps") or ()),
        ))
    return problems


def _read_yaml(path: Path):
    with open(path) as f:
        return yaml.safe_load(f)


def load_course(course_dir: Path) -> CourseMeta:
    """Load course.yaml from a course directory."""
    return _parse_course(_read_yaml(course_dir / "course.yaml"))


def load_slides(path: Path) -> list[Slide]:
    return _parse_slides(_read_yaml(path))


def load_problems(path: Path) -> list[ProblemSpec]:
    return _parse_problems(_read_yaml(path))


def load_catalog(course_dir: Path) -> Catalog:
    """Load a course directory: course.yaml, slides.yaml and problems.yaml."""
    slides_file = course_dir / "slides.yaml"
    problems_file = course_dir / "problems.yaml"
    return Catalog(
        course=load_course(course_dir),
        slides=load_slides(slides_file) if slides_file.exists() else [],
        problems=load_problems(problems_file) if problems_file.exists() else [],
    )


def catalog_from_dict(data: dict, source: str = "remote") -> Catalog:
    """Build a catalog from decoded JSON/YAML with ``course``, ``slides`` and ``problems`` keys."""
    if not isinstance(data, dict):
        raise ValueError("Catalog document must be a mapping")
    return Catalog(
        course=_parse_course(data),
        slides=_parse_slides(data.get("slides")),
        problems=_parse_problems(data.get("problems")),
        source=source,
    )
