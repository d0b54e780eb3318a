"""Unit tests for the boolean query evaluator.

The evaluator reduces queries in a fixed order: groups, proximity, OR, NOT,
then AND. These tests pin that order and the atom rules for phrases,
wildcards and plain substrings.
"""

import pytest

from card_query.search.evaluator import evaluate_query, mask_quoted


TEXTS = [
    "",
    "alpha",
    "alpha beta",
    "alpha gamma",
    "beta gamma",
    "alpha beta gamma",
    "gamma delta",
]


@pytest.mark.unit
class TestAtoms:
    """Single terms: plain substrings, wildcards and quoted phrases."""

    def test_plain_term(self):
        assert evaluate_query("python", "python tutorial") is True
        assert evaluate_query("rust", "python tutorial") is False

    @pytest.mark.parametrize("term", ["py", "thon", "Rust", "INTRO", "xyz", "and", "o"])
    def test_substring_contract(self, term):
        text = "Python And Rust intro"
        assert evaluate_query(term, text) == (term.lower() in text.lower())

    def test_wildcard_word_boundary(self):
        assert evaluate_query("inter*", "international") is True
        assert evaluate_query("inter*", "counterintelligence") is False

    def test_double_quoted_phrase(self):
        assert evaluate_query('"hello world"', "say hello world now") is True
        assert evaluate_query('"hello world"', "hello, world") is False

    def test_single_quoted_phrase(self):
        assert evaluate_query("'hello world'", "say hello world now") is True
        assert evaluate_query("'hello world'", "world hello") is False

    def test_phrase_with_operator_words_is_literal(self):
        assert evaluate_query('"cats or dogs"', "i like cats or dogs") is True
        assert evaluate_query('"cats or dogs"', "cats and dogs") is False

    def test_phrase_with_parentheses_is_literal(self):
        assert evaluate_query('"f(x)"', "where f(x) grows") is True
        assert evaluate_query('"f(x)"', "where f grows") is False

    def test_apostrophe_inside_word_is_not_a_quote(self):
        assert evaluate_query("don't", "i don't know") is True
        assert evaluate_query("don't panic", "don't ever panic") is True

    def test_lone_quote_matches_everything(self):
        assert evaluate_query('"', "anything") is True


@pytest.mark.unit
class TestAnd:
    """AND is explicit ' and ' or implicit whitespace."""

    @pytest.mark.parametrize("text", TEXTS)
    def test_explicit_and_identity(self, text):
        expected = evaluate_query("alpha", text) and evaluate_query("beta", text)
        assert evaluate_query("alpha and beta", text) == expected

    @pytest.mark.parametrize("text", TEXTS)
    def test_implicit_and_matches_explicit(self, text):
        assert evaluate_query("alpha beta", text) == evaluate_query("alpha and beta", text)

    def test_extra_whitespace_between_terms(self):
        assert evaluate_query("alpha   beta", "beta alpha") is True

    def test_explicit_and_keeps_multiword_parts_literal(self):
        # With an explicit ' and ', each side is one atom
        assert evaluate_query("alpha beta and gamma", "alpha beta gamma") is True
        assert evaluate_query("alpha beta and gamma", "beta alpha gamma") is False


@pytest.mark.unit
class TestOr:
    """OR splits first among the binary operators."""

    @pytest.mark.parametrize("text", TEXTS)
    def test_or_identity(self, text):
        expected = evaluate_query("alpha", text) or evaluate_query("delta", text)
        assert evaluate_query("alpha or delta", text) == expected

    def test_many_alternatives(self):
        assert evaluate_query("x or y or z or delta", "gamma delta") is True
        assert evaluate_query("x or y or z", "gamma delta") is False


@pytest.mark.unit
class TestNot:
    """NOT splits on its first occurrence, below OR."""

    def test_excludes_after_part(self):
        assert evaluate_query("alpha not beta", "alpha gamma") is True
        assert evaluate_query("alpha not beta", "alpha beta") is False

    @pytest.mark.parametrize("text", TEXTS)
    def test_not_binds_tighter_than_or(self, text):
        expected = evaluate_query("alpha", text) or (
            evaluate_query("beta", text) and not evaluate_query("gamma", text)
        )
        assert evaluate_query("alpha or beta not gamma", text) == expected

    def test_precedence_differs_from_conventional(self):
        # Conventional precedence would read (alpha or beta) and not gamma
        assert evaluate_query("alpha or beta not gamma", "alpha gamma") is True

    def test_wildcard_in_not_clause(self):
        assert evaluate_query("python not tutorial*", "python tutorial for beginners") is False
        assert evaluate_query("python not tutorial*", "python and rust interop guide") is True

    def test_not_chain_nests_to_the_right(self):
        # a not b not c == a and not (b and not c)
        assert evaluate_query("alpha not beta not gamma", "alpha beta gamma") is True
        assert evaluate_query("alpha not beta not gamma", "alpha beta") is False
        assert evaluate_query("alpha not beta not gamma", "alpha gamma") is True

    def test_not_remainder_is_checked_for_proximity_first(self):
        # A newline keeps the whole query from parsing as one clause, so the
        # remainder "beta near/1 gamma not delta" is read as a single clause
        query = "alpha\nzeta not beta near/1 gamma not delta"
        assert evaluate_query(query, "alpha zeta beta gamma") is True
        assert evaluate_query(query, "alpha zeta") is True

    def test_long_not_chain_does_not_overflow(self):
        query = " not ".join(["alpha"] + ["zz"] * 1500)
        assert evaluate_query(query, "alpha") in (True, False)


@pytest.mark.unit
class TestGroups:
    """Parenthesised groups reduce to placeholders before anything else."""

    def test_group_then_and(self):
        assert evaluate_query("(cat or dog) and fish", "dog fish") is True
        assert evaluate_query("(cat or dog) and fish", "dog bird") is False

    def test_group_with_implicit_and(self):
        assert evaluate_query("(cat or dog) fish", "cat fish") is True

    def test_group_overrides_precedence(self):
        assert evaluate_query("(alpha or beta) not gamma", "alpha gamma") is False

    def test_multiple_groups(self):
        assert evaluate_query("(a1 or a2) and (b1 or b2)", "a2 b1") is True
        assert evaluate_query("(a1 or a2) and (b1 or b2)", "a2 c1") is False

    def test_nested_groups_resolve_innermost_first(self):
        assert evaluate_query("((cat))", "cat") is True
        assert evaluate_query("(fish and (cat or dog))", "dog fish") is True
        assert evaluate_query("(fish and (cat or dog))", "dog bird") is False

    def test_not_group(self):
        assert evaluate_query("fish not (cat or dog)", "fish cat") is False
        assert evaluate_query("fish not (cat or dog)", "fish bird") is True

    def test_unbalanced_parenthesis_is_literal(self):
        assert evaluate_query("(cat", "(cat") is True
        assert evaluate_query("(cat", "cat") is False

    def test_empty_parentheses_are_literal(self):
        assert evaluate_query("()", "call()") is True
        assert evaluate_query("()", "call") is False


@pytest.mark.unit
class TestProximityInQueries:
    """Proximity clauses stand alone or inside a group."""

    HAYSTACK = "alpha beta gamma delta"

    def test_proximity_bound(self):
        assert evaluate_query("alpha near/1 beta", self.HAYSTACK) is True
        assert evaluate_query("alpha near/0 delta", self.HAYSTACK) is False

    def test_short_form_and_case(self):
        assert evaluate_query("alpha N/3 delta", self.HAYSTACK) is True

    def test_grouped_proximity_composes(self):
        assert evaluate_query("(alpha near/1 beta) and delta", self.HAYSTACK) is True
        assert evaluate_query("(alpha near/1 delta) or zeta", self.HAYSTACK) is False

    def test_inline_composition_is_not_supported(self):
        # The whole query is one clause whose second term is "beta or zeta"
        assert evaluate_query("alpha near/1 beta or zeta", self.HAYSTACK) is False

    def test_malformed_distance_falls_through_to_terms(self):
        assert evaluate_query("alpha near/x beta", "alpha near/x beta") is True
        assert evaluate_query("alpha near/x beta", "alpha beta") is False

    def test_proximity_marker_inside_phrase_is_literal(self):
        assert evaluate_query('"alpha near/1 beta"', "say alpha near/1 beta") is True
        assert evaluate_query('"alpha near/1 beta"', self.HAYSTACK) is False


@pytest.mark.unit
class TestTotality:
    """evaluate_query always returns a bool and never raises."""

    @pytest.mark.parametrize(
        "query",
        [
            "",
            " ",
            "(",
            ")",
            ")(",
            "()",
            '"',
            "'",
            '""',
            "*",
            "**",
            " or ",
            "or",
            "not",
            "a not",
            "not b",
            "and and and",
            "(a (b) c",
            "near/1",
            "a near/99999999999999999999 b",
            "a near/" + "1" * 5000 + " b",
            "a{99999999999}*",
            "[",
            "a[*",
            "a(*",
            "\\",
            "a\\*",
            "((((((((",
            "__TRUE__",
            "__FALSE__ or x",
            '"unterminated phrase',
            "'it's' here",
        ],
    )
    @pytest.mark.parametrize("raw_regex", [False, True])
    def test_malformed_queries(self, query, raw_regex):
        result = evaluate_query(query, "some (text) with * and 'quotes'", raw_regex=raw_regex)
        assert isinstance(result, bool)

    def test_oversized_proximity_distance_is_literal_text(self):
        query = "a near/" + "1" * 5000 + " b"
        assert evaluate_query(query, "a b") is False
        assert evaluate_query(query, query) is True

    def test_deep_nesting(self):
        query = "(" * 400 + "alpha" + ")" * 400
        assert evaluate_query(query, "alpha") is True

    @pytest.mark.parametrize("query, text", [(None, "x"), ("x", None), (3, 4), (["a"], {"b": 1})])
    def test_non_string_inputs(self, query, text):
        assert isinstance(evaluate_query(query, text), bool)

    def test_empty_query_matches(self):
        assert evaluate_query("", "anything") is True

    def test_repeated_calls_are_identical(self):
        query = '(alpha or "beta gamma") not delta*'
        results = {evaluate_query(query, "alpha beta gamma") for _ in range(5)}
        assert results == {True}


@pytest.mark.unit
class TestMaskQuoted:
    """mask_quoted blanks phrase content and keeps string length."""

    def test_masks_double_quoted_content(self):
        assert mask_quoted('a "b or c" d') == 'a "______" d'

    def test_masks_single_quoted_content(self):
        assert mask_quoted("'x y'") == "'___'"

    def test_leaves_apostrophes_in_words(self):
        assert mask_quoted("don't won't") == "don't won't"

    def test_masks_phrase_inside_group(self):
        assert mask_quoted('("a b")') == '("___")'

    @pytest.mark.parametrize("query", ['"a', "it's 'x' ok", '"a" "b c"', ""])
    def test_length_preserved(self, query):
        assert len(mask_quoted(query)) == len(query)
