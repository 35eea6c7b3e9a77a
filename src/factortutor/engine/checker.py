"""Factored-form equivalence checking, dispatched on problem type."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from factortutor.engine.normalizer import FactoredAnswer, normalize_answer, squash

if TYPE_CHECKING:
    from factortutor.engine.lesson_loader import ProblemSpec

logger = logging.getLogger(__name__)

_SQUARE_MARKUP = re.compile(r"\^2|[()]")


class ProblemType(str, Enum):
    PLAIN = "plain"
    GCF = "gcf"
    PERFECT_SQUARE = "perfectSquare"

    @classmethod
    def from_tag(cls, tag: str) -> ProblemType:
        """Parse a catalog type tag. ``a=1`` and ``a!=1`` are older names for plain."""
        if tag in ("a=1", "a!=1"):
            return cls.PLAIN
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(f"Unknown problem type: {tag!r}") from None


@dataclass(frozen=True)
class GradingResult:
    submitted: str
    is_correct: bool


def _plain_equivalent(submitted: str, canonical: str) -> bool:
    return normalize_answer(submitted) == normalize_answer(canonical)


def _gcf_equivalent(submitted: str, canonical: str) -> bool:
    if ")(" not in canonical:
        return _plain_equivalent(submitted, canonical)

    user = FactoredAnswer.parse(submitted)
    correct = FactoredAnswer.parse(canonical)
    if user.coefficient != correct.coefficient:
        return False

    user_factors, correct_factors = user.binomials, correct.binomials
    if len(user_factors) != 2 or len(correct_factors) != 2 or user.has_exponent:
        return False
    if user.normalized != user.coefficient + "".join(f"({b})" for b in user_factors):
        # stray text between or after the factors
        return False
    return sorted(user_factors) == sorted(correct_factors)


def _square_operands(text: str) -> list[str]:
    stripped = _SQUARE_MARKUP.sub("", squash(text))
    return [part.strip() for part in stripped.split("+")]


def _perfect_square_equivalent(submitted: str, canonical: str) -> bool:
    user_parts = _square_operands(submitted)
    correct_parts = _square_operands(canonical)
    if len(user_parts) != 2 or len(correct_parts) != 2:
        return _plain_equivalent(submitted, canonical)
    return sorted(user_parts) == sorted(correct_parts) and "^2" in submitted


_RULES = {
    ProblemType.PLAIN: _plain_equivalent,
    ProblemType.GCF: _gcf_equivalent,
    ProblemType.PERFECT_SQUARE: _perfect_square_equivalent,
}


def answers_equivalent(
    submitted: str, canonical: str, problem_type: ProblemType | str = ProblemType.PLAIN
) -> bool:
    """Decide whether ``submitted`` denotes the canonical factorization.

    Only the single canonical answer counts as ground truth: a mathematically
    equal factorization written in a different shape is graded incorrect.
    """
    submitted = submitted or ""
    canonical = canonical or ""
    rule = _RULES[ProblemType.from_tag(problem_type)]
    return rule(submitted, canonical)


class EquivalenceChecker:
    """Grades submitted answers against a problem's canonical answer."""

    def check(self, submitted: str, problem: ProblemSpec) -> bool:
        ptype = ProblemType.from_tag(problem.type)
        correct = answers_equivalent(submitted, problem.correct_answer, ptype)
        logger.debug(
            "problem %s (%s): %r -> %s",
            problem.id, ptype.value, submitted, "correct" if correct else "incorrect",
        )
        return correct

    def grade(self, submitted: str, problem: ProblemSpec) -> GradingResult:
        return GradingResult(submitted=submitted, is_correct=self.check(submitted, problem))
