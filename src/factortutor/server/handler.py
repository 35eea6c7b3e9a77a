"""Server handler: dispatches JSON-lines requests to the lesson session."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from factortutor.config.settings import Settings
from factortutor.courses.registry import load_problem_catalog
from factortutor.engine.formatter import DisplayBlock, InlineText, format_content
from factortutor.engine.lesson_loader import Catalog
from factortutor.engine.lesson_runner import (
    GoToSlide,
    HideSolution,
    LessonSession,
    NextProblem,
    NextSlide,
    PrevProblem,
    PrevSlide,
    ShowNextStep,
    ShowProblems,
    ShowSlides,
    SubmitAnswer,
    ToggleAltMode,
)

from .protocol import Notification

logger = logging.getLogger(__name__)


def _inline_to_list(inline: InlineText) -> list[dict]:
    return [{"text": s.text, "bold": s.bold} for s in inline.spans]


def _block_to_dict(block: DisplayBlock) -> dict:
    """Serialize a DisplayBlock to a JSON-friendly dict."""
    return {
        "kind": block.kind.value,
        "items": [_inline_to_list(i) for i in block.items],
        "breaks": [_inline_to_list(b) for b in block.breaks],
    }


def _blocks_to_list(blocks: list[DisplayBlock]) -> list[dict]:
    return [_block_to_dict(b) for b in blocks]


class ServerHandler:
    """Routes incoming requests to session commands and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
        catalog: Optional[Catalog] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)

        self.catalog = catalog or load_problem_catalog(self.settings)
        self.session = LessonSession(self.catalog)
        if self.catalog.source != "bundled":
            self._write_notification(
                Notification("catalogLoaded", {"source": self.catalog.source})
            )

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params") or {}

        handler_map = {
            "getCatalog": self._get_catalog,
            "getSlide": self._get_slide,
            "nextSlide": self._next_slide,
            "prevSlide": self._prev_slide,
            "goToSlide": self._go_to_slide,
            "toggleAltMode": self._toggle_alt_mode,
            "showProblems": self._show_problems,
            "showSlides": self._show_slides,
            "getProblem": self._get_problem,
            "nextProblem": self._next_problem,
            "prevProblem": self._prev_problem,
            "checkAnswer": self._check_answer,
            "showNextStep": self._show_next_step,
            "hideSolution": self._hide_solution,
            "getHint": self._get_hint,
            "formatText": self._format_text,
            "getScore": self._get_score,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        logger.debug("dispatch %s %s", method, params)
        return await handler(params)

    # --- Slides ---

    async def _get_catalog(self, params: dict) -> dict:
        c = self.catalog
        return {
            "course": {
                "id": c.course.id,
                "title": c.course.title,
                "description": c.course.description,
                "version": c.course.version,
            },
            "source": c.source,
            "slides": [{"order": s.order, "title": s.title} for s in c.slides],
            "problems": [
                {"id": p.id, "question": p.question, "type": p.type.value}
                for p in c.problems
            ],
        }

    async def _get_slide(self, params: dict) -> dict:
        state = self.session.state
        slide = self.session.current_slide()
        return {
            "index": state.slide_index,
            "totalSlides": len(self.catalog.slides),
            "title": slide.title if slide else "",
            "simpleAltMode": state.simple_alt_mode,
            "hasSimpleAlt": bool(slide and slide.simple_alt_content),
            "showingProblems": state.showing_problems,
            "blocks": _blocks_to_list(self.session.slide_blocks()),
        }

    async def _next_slide(self, params: dict) -> dict:
        self.session.handle(NextSlide())
        return await self._get_slide(params)

    async def _prev_slide(self, params: dict) -> dict:
        self.session.handle(PrevSlide())
        return await self._get_slide(params)

    async def _go_to_slide(self, params: dict) -> dict:
        self.session.handle(GoToSlide(index=int(params["index"])))
        return await self._get_slide(params)

    async def _toggle_alt_mode(self, params: dict) -> dict:
        self.session.handle(ToggleAltMode())
        return await self._get_slide(params)

    async def _show_problems(self, params: dict) -> dict:
        self.session.handle(ShowProblems())
        return await self._get_problem({})

    async def _show_slides(self, params: dict) -> dict:
        self.session.handle(ShowSlides())
        return await self._get_slide(params)

    # --- Problems ---

    def _problem_id(self, params: dict) -> int:
        if "problemId" in params:
            return int(params["problemId"])
        problem = self.session.current_problem()
        if problem is None:
            raise ValueError("No problems in catalog")
        return problem.id

    async def _get_problem(self, params: dict) -> dict:
        pid = self._problem_id(params)
        problem = self.catalog.get_problem(pid)
        ps = self.session.problem_state(pid)
        return {
            "id": problem.id,
            "index": self.session.state.problem_index,
            "totalProblems": len(self.catalog.problems),
            "question": problem.question,
            "type": problem.type.value,
            "userAnswer": ps.user_answer,
            "isCorrect": ps.is_correct,
            "feedback": self.session.feedback(pid),
            "visibleSteps": ps.visible_steps,
            "totalSteps": len(problem.solution_steps),
            "solution": [_blocks_to_list(b) for b in self.session.visible_solution(pid)],
        }

    async def _next_problem(self, params: dict) -> dict:
        self.session.handle(NextProblem())
        return await self._get_problem({})

    async def _prev_problem(self, params: dict) -> dict:
        self.session.handle(PrevProblem())
        return await self._get_problem({})

    async def _check_answer(self, params: dict) -> dict:
        pid = self._problem_id(params)
        result = self.session.handle(SubmitAnswer(problem_id=pid, answer=params.get("answer", "")))
        return {
            "problemId": pid,
            "submitted": result.submitted,
            "isCorrect": result.is_correct,
            "feedback": self.session.feedback(pid),
        }

    async def _show_next_step(self, params: dict) -> dict:
        self.session.handle(ShowNextStep(problem_id=self._problem_id(params)))
        return await self._get_problem(params)

    async def _hide_solution(self, params: dict) -> dict:
        self.session.handle(HideSolution(problem_id=self._problem_id(params)))
        return await self._get_problem(params)

    async def _get_hint(self, params: dict) -> dict:
        hint = self.session.hint(self._problem_id(params))
        return {"hint": hint or "No hint available for this problem."}

    async def _format_text(self, params: dict) -> dict:
        return {"blocks": _blocks_to_list(format_content(params.get("text", "")))}

    async def _get_score(self, params: dict) -> dict:
        correct, total = self.session.score()
        return {"correct": correct, "total": total}
