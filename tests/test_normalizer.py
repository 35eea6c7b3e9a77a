"""Tests for answer normalization and factor tokenizing."""

import pytest

from factortutor.engine.normalizer import FactoredAnswer, FactorToken, normalize_answer, squash


class TestNormalizeAnswer:
    def test_strips_whitespace_and_case(self):
        assert normalize_answer(" (X + 2)( x+5 ) ") == "x+2)(x+5"

    def test_two_factors_sorted(self):
        assert normalize_answer("(x+5)(x+2)") == "x+2)(x+5"

    def test_bare_interiors_match_parenthesized_form(self):
        assert normalize_answer("x+5)(x+2") == normalize_answer("(x+2)(x+5)")

    def test_three_factors_keep_order(self):
        assert normalize_answer("(x+5)(x+2)(x+1)") == "(x+5)(x+2)(x+1)"

    def test_leading_coefficient_not_reordered(self):
        assert normalize_answer("5(x+2)(x+1)") == "5(x+2)(x+1)"

    def test_exponent_form_untouched(self):
        assert normalize_answer("(x+5)^2") == "(x+5)^2"

    def test_empty(self):
        assert normalize_answer("") == ""

    def test_none_is_empty(self):
        assert normalize_answer(None) == ""

    @pytest.mark.parametrize("raw", [
        "(x+5)(x+2)",
        " (B)(a) ",
        "5(x+1)(x+2)",
        "(x+1)(x+2)(x+3)",
        "((x))(y)",
        "(x+5)^2",
        ")(",
        "()()",
        "",
    ])
    def test_idempotent(self, raw):
        once = normalize_answer(raw)
        assert normalize_answer(once) == once


class TestFactorToken:
    def test_binomial(self):
        token = FactorToken.from_raw("( X+3 )")
        assert token.normalized == "(x+3)"
        assert token.is_binomial
        assert token.interior == "x+3"

    def test_coefficient(self):
        token = FactorToken.from_raw("5")
        assert not token.is_binomial
        assert token.interior == "5"

    def test_exponent(self):
        assert FactorToken.from_raw("^2").is_exponent


class TestFactoredAnswer:
    def test_gcf_shape(self):
        answer = FactoredAnswer.parse("5 (x+1)(x+2)")
        assert [t.normalized for t in answer.tokens] == ["5", "(x+1)", "(x+2)"]
        assert answer.coefficient == "5"
        assert answer.binomials == ["x+1", "x+2"]
        assert not answer.has_exponent

    def test_perfect_square_shape(self):
        answer = FactoredAnswer.parse("(x+5)^2")
        assert answer.binomials == ["x+5"]
        assert answer.has_exponent
        assert answer.coefficient == ""

    def test_nested_parentheses_stay_one_factor(self):
        answer = FactoredAnswer.parse("((x+1))(x+2)")
        assert answer.binomials == ["(x+1)", "x+2"]

    @pytest.mark.parametrize("raw", ["5(x+1)(x+2)", "(x+1", "x)(", "-2(3x-4)^2y", "", "  "])
    def test_tokens_reproduce_input(self, raw):
        answer = FactoredAnswer.parse(raw)
        assert answer.normalized == squash(raw)
        assert answer.raw == raw

    def test_token_raw_keeps_original_text(self):
        answer = FactoredAnswer.parse(" 5 ( X+1 )(x + 2)^2 ")
        assert [t.raw for t in answer.tokens] == ["5", "( X+1 )", "(x + 2)", "^2"]
        assert [t.normalized for t in answer.tokens] == ["5", "(x+1)", "(x+2)", "^2"]

    def test_unbalanced_tail_kept(self):
        answer = FactoredAnswer.parse("(x+1)(x+2")
        assert answer.binomials == ["x+1"]
        assert answer.tokens[-1].normalized == "(x+2"
