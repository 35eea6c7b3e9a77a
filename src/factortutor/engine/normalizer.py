"""Answer normalization for comparison."""

from __future__ import annotations

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")
_EXPONENT = re.compile(r"\^\d+")


def squash(text: str) -> str:
    """Remove all whitespace and lowercase."""
    return _WHITESPACE.sub("", text or "").lower()


def normalize_answer(text: str) -> str:
    """Normalize a factored answer so two-factor products compare order-free.

    ``(x+5)(x+2)`` and ``(X + 2)(x+5)`` both become ``x+2)(x+5``: the outer
    parentheses are dropped and the two interiors sorted. Products of three
    or more binomials are left as written.
    """
    normalized = squash(text)
    if normalized.startswith("(") and normalized.endswith(")"):
        parts = normalized[1:-1].split(")(")
        if len(parts) == 2:
            return ")(".join(sorted(parts))
    return normalized


@dataclass(frozen=True)
class FactorToken:
    """One written factor: ``5``, ``(x+3)`` or a trailing ``^2``."""
    raw: str
    normalized: str

    @classmethod
    def from_raw(cls, raw: str) -> FactorToken:
        return cls(raw=raw, normalized=squash(raw))

    @property
    def is_binomial(self) -> bool:
        return self.normalized.startswith("(") and self.normalized.endswith(")")

    @property
    def is_exponent(self) -> bool:
        return bool(_EXPONENT.fullmatch(self.normalized))

    @property
    def interior(self) -> str:
        if self.is_binomial:
            return self.normalized[1:-1]
        return self.normalized


@dataclass(frozen=True)
class FactoredAnswer:
    raw: str
    tokens: tuple[FactorToken, ...]

    @classmethod
    def parse(cls, text: str) -> FactoredAnswer:
        """Split an answer into its written factors.

        Never raises: an unbalanced tail is kept as a final token so that
        joining the tokens always gives back ``squash(text)``. Each token's
        ``raw`` is the slice of ``text`` it came from, spacing and case kept.
        """
        text = text or ""
        offsets = [k for k, ch in enumerate(text) if not ch.isspace()]
        s = "".join(text[k] for k in offsets)
        tokens: list[FactorToken] = []

        def emit(start: int, end: int) -> None:
            tokens.append(FactorToken.from_raw(text[offsets[start] : offsets[end - 1] + 1]))

        i = 0
        while i < len(s):
            if s[i] == "(":
                depth = 0
                j = i
                while j < len(s):
                    if s[j] == "(":
                        depth += 1
                    elif s[j] == ")":
                        depth -= 1
                        if depth == 0:
                            break
                    j += 1
                if j >= len(s):
                    emit(i, len(s))
                    break
                emit(i, j + 1)
                i = j + 1
                continue

            m = _EXPONENT.match(s, i)
            if m:
                emit(i, m.end())
                i = m.end()
                continue

            j = s.find("(", i)
            end = len(s) if j == -1 else j
            emit(i, end)
            i = end
        return cls(raw=text, tokens=tuple(tokens))

    @property
    def normalized(self) -> str:
        return "".join(t.normalized for t in self.tokens)

    @property
    def coefficient(self) -> str:
        """Everything written before the first ``(``."""
        return self.normalized.split("(", 1)[0]

    @property
    def binomials(self) -> list[str]:
        return [t.interior for t in self.tokens if t.is_binomial]

    @property
    def has_exponent(self) -> bool:
        return any(t.is_exponent for t in self.tokens)
