"""Lesson session state: slides → practice problems → grading feedback.

All UI state lives in ``SessionState`` and changes only through the command
objects below, so the grading and formatting functions stay free of it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from factortutor.engine.checker import EquivalenceChecker, GradingResult
from factortutor.engine.formatter import DisplayBlock, format_content
from factortutor.engine.lesson_loader import Catalog, ProblemSpec, Slide


# --- Commands ---

@dataclass(frozen=True)
class NextSlide:
    pass


@dataclass(frozen=True)
class PrevSlide:
    pass


@dataclass(frozen=True)
class GoToSlide:
    index: int


@dataclass(frozen=True)
class ToggleAltMode:
    pass


@dataclass(frozen=True)
class ShowProblems:
    pass


@dataclass(frozen=True)
class ShowSlides:
    pass


@dataclass(frozen=True)
class NextProblem:
    pass


@dataclass(frozen=True)
class PrevProblem:
    pass


@dataclass(frozen=True)
class SubmitAnswer:
    problem_id: int
    answer: str


@dataclass(frozen=True)
class ShowNextStep:
    problem_id: int


@dataclass(frozen=True)
class HideSolution:
    problem_id: int


Command = Union[
    NextSlide, PrevSlide, GoToSlide, ToggleAltMode, ShowProblems, ShowSlides,
    NextProblem, PrevProblem, SubmitAnswer, ShowNextStep, HideSolution,
]


# --- State ---

@dataclass
class ProblemState:
    user_answer: str = ""
    is_correct: Optional[bool] = None  # None until checked
    visible_steps: int = 0


@dataclass
class SessionState:
    slide_index: int = 0
    simple_alt_mode: bool = False
    showing_problems: bool = False
    problem_index: int = 0
    problems: dict[int, ProblemState] = field(default_factory=dict)


class LessonSession:
    """Owns one learner's session over a catalog and applies commands to it."""

    def __init__(self, catalog: Catalog, checker: Optional[EquivalenceChecker] = None):
        self.catalog = catalog
        self.checker = checker or EquivalenceChecker()
        self.state = SessionState(
            problems={p.id: ProblemState() for p in catalog.problems}
        )

    def handle(self, command: Command) -> Optional[GradingResult]:
        """Apply a command. Only ``SubmitAnswer`` returns a value."""
        if isinstance(command, NextSlide):
            if self.state.slide_index < len(self.catalog.slides) - 1:
                self.state.slide_index += 1
            else:
                # Past the last slide the lesson moves on to practice
                self.state.showing_problems = True
                self.state.problem_index = 0
        elif isinstance(command, PrevSlide):
            self._move_slide(self.state.slide_index - 1)
        elif isinstance(command, GoToSlide):
            if not 0 <= command.index < len(self.catalog.slides):
                raise ValueError(f"Slide index {command.index} out of range")
            self.state.slide_index = command.index
        elif isinstance(command, ToggleAltMode):
            self.state.simple_alt_mode = not self.state.simple_alt_mode
        elif isinstance(command, ShowProblems):
            self.state.showing_problems = True
        elif isinstance(command, ShowSlides):
            self.state.showing_problems = False
        elif isinstance(command, NextProblem):
            self._move_problem(self.state.problem_index + 1)
        elif isinstance(command, PrevProblem):
            self._move_problem(self.state.problem_index - 1)
        elif isinstance(command, SubmitAnswer):
            return self._submit(command.problem_id, command.answer)
        elif isinstance(command, ShowNextStep):
            problem = self.catalog.get_problem(command.problem_id)
            ps = self._problem_state(command.problem_id)
            ps.visible_steps = min(ps.visible_steps + 1, len(problem.solution_steps))
        elif isinstance(command, HideSolution):
            self._problem_state(command.problem_id).visible_steps = 0
        else:
            raise TypeError(f"Unsupported command: {command!r}")
        return None

    def _move_slide(self, index: int) -> None:
        last = max(len(self.catalog.slides) - 1, 0)
        self.state.slide_index = min(max(index, 0), last)

    def _move_problem(self, index: int) -> None:
        last = max(len(self.catalog.problems) - 1, 0)
        self.state.problem_index = min(max(index, 0), last)

    def _problem_state(self, problem_id: int) -> ProblemState:
        if problem_id not in self.state.problems:
            raise KeyError(f"Unknown problem: {problem_id}")
        return self.state.problems[problem_id]

    def _submit(self, problem_id: int, answer: str) -> GradingResult:
        problem = self.catalog.get_problem(problem_id)
        result = self.checker.grade(answer, problem)
        ps = self._problem_state(problem_id)
        ps.user_answer = answer
        ps.is_correct = result.is_correct
        return result

    # --- Queries ---

    def current_slide(self) -> Optional[Slide]:
        if 0 <= self.state.slide_index < len(self.catalog.slides):
            return self.catalog.slides[self.state.slide_index]
        return None

    def slide_blocks(self) -> list[DisplayBlock]:
        """Format the current slide in whichever explanation mode is active."""
        slide = self.current_slide()
        if slide is None:
            return []
        if self.state.simple_alt_mode and slide.simple_alt_content:
            return format_content(slide.simple_alt_content)
        return format_content(slide.content)

    def current_problem(self) -> Optional[ProblemSpec]:
        if 0 <= self.state.problem_index < len(self.catalog.problems):
            return self.catalog.problems[self.state.problem_index]
        return None

    def problem_state(self, problem_id: int) -> ProblemState:
        return self._problem_state(problem_id)

    def visible_solution(self, problem_id: int) -> list[list[DisplayBlock]]:
        """Formatted blocks for each revealed solution step."""
        problem = self.catalog.get_problem(problem_id)
        count = self._problem_state(problem_id).visible_steps
        return [format_content(step) for step in problem.solution_steps[:count]]

    def hint(self, problem_id: int) -> str:
        return self.catalog.get_problem(problem_id).hint

    def feedback(self, problem_id: int) -> Optional[str]:
        """Verdict text for the last check, or None if unchecked."""
        ps = self._problem_state(problem_id)
        if ps.is_correct is None:
            return None
        if ps.is_correct:
            return "Correct!"
        return f"Incorrect. The correct answer is: {self.catalog.get_problem(problem_id).correct_answer}"

    def score(self) -> tuple[int, int]:
        correct = sum(1 for ps in self.state.problems.values() if ps.is_correct)
        return correct, len(self.state.problems)
