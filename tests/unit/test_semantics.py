"""
Unit tests for extension/intension closures and query evaluation.
"""

import pytest
from nal_engine.core.types import NO_MATCHES_FOUND, Query, QueryStatus, Term, TruthValue
from nal_engine.experience import ExperienceBase
from nal_engine.semantics import count_evidence, evaluate_query, extension, intension


def words(terms):
    return sorted(t.word for t in terms)


class TestMeaning:
    """Tests for extension and intension."""

    def test_extension_of_animal(self, animal_base):
        """Test the extension of a root term."""
        assert words(extension(Term("animal"), animal_base)) == [
            "animal",
            "bird",
            "chicken",
            "human",
            "penguin",
            "robin",
            "saul",
        ]

    def test_intension_of_penguin(self, animal_base):
        """Test the intension of a leaf term."""
        assert words(intension(Term("penguin"), animal_base)) == ["animal", "bird", "penguin"]

    def test_leaf_closures_contain_the_term(self, animal_base):
        """Test closures always contain the term itself."""
        assert words(extension(Term("robin"), animal_base)) == ["robin"]
        assert words(intension(Term("animal"), animal_base)) == ["animal"]

    def test_unknown_term_is_empty(self, animal_base):
        """Test closures of an unknown term."""
        assert extension(Term("fish"), animal_base) == set()
        assert intension(Term("fish"), animal_base) == set()

    def test_similarity_is_ignored(self):
        """Test closures follow inheritance only."""
        base = ExperienceBase.from_statements(["a similar b", "c is a"])
        assert words(extension(Term("a"), base)) == ["a", "c"]
        assert words(intension(Term("a"), base)) == ["a"]

    def test_cycles_terminate(self):
        """Test closures over a cycle."""
        base = ExperienceBase.from_statements(["a is b", "b is c", "c is a"])
        assert words(extension(Term("a"), base)) == ["a", "b", "c"]


class TestQueryEvaluation:
    """Tests for evaluate_query and ExperienceBase.query."""

    def test_wildcard_returns_stored_line(self):
        """Test a wildcard query returns the stored line."""
        base = ExperienceBase.from_statements(["a is b"])
        answer = base.query("a is ?")

        assert answer.status == QueryStatus.MATCHED
        assert answer.element.id == 1
        assert answer.to_text() == "1: a -> b <1.00, 0.99>"

    def test_first_match_wins(self):
        """Test the first stored match is returned."""
        base = ExperienceBase.from_statements(["x is a", "y is a"])
        assert base.query("? is a").element.id == 1

    def test_closed_exact_match(self, chain_base):
        """Test a closed query with a stored match."""
        answer = chain_base.query(Query.parse("b is c"))
        assert answer.status == QueryStatus.MATCHED
        assert answer.truth_value == TruthValue.default()

    def test_copula_is_not_compared(self, chain_base):
        """Test a query matches stored statements whatever their copula."""
        answer = chain_base.query("a similar ?")

        assert answer.status == QueryStatus.MATCHED
        assert answer.to_text() == "1: a -> b <1.00, 0.99>"

    def test_closed_query_matches_other_copula(self):
        """Test a closed similarity query returns the stored inheritance line."""
        base = ExperienceBase.from_statements(["a is b"])
        answer = base.query("a similar b")

        assert answer.status == QueryStatus.MATCHED
        assert answer.element.id == 1
        assert answer.to_text() == "1: a -> b <1.00, 0.99>"

    def test_open_query_without_match(self, animal_base):
        """Test an open query with no match."""
        answer = animal_base.query("fish is ?")
        assert answer.status == QueryStatus.NO_MATCH
        assert not answer.found
        assert answer.to_text() == NO_MATCHES_FOUND

    def test_derived_from_closures(self, chain_base):
        """Test evidence counts from closures."""
        answer = evaluate_query(Query.parse("a is c"), chain_base)

        assert answer.status == QueryStatus.DERIVED
        assert answer.positive_evidence == 2
        assert answer.negative_evidence == 2
        assert answer.truth_value.frequency == pytest.approx(0.5)
        assert answer.truth_value.confidence == pytest.approx(0.8)

    def test_derived_text(self):
        """Test the derived answer text."""
        base = ExperienceBase.from_statements(["a is b", "b is c"])
        # E(a)={a}, E(c)={a,b,c}, I(a)={a,b,c}, I(c)={c}
        assert count_evidence(Term("a"), Term("c"), base) == (2, 2)
        assert base.query("a is c").to_text() == "a -> c <0.50, 0.80>"

    def test_zero_evidence_is_ignorance(self, animal_base):
        """Test a query without evidence yields ignorance."""
        answer = animal_base.query("fish is bird")

        assert answer.status == QueryStatus.DERIVED
        assert answer.truth_value == TruthValue.ignorance()
        assert answer.to_text() == "fish -> bird <0.50, 0.00>"

    def test_ignorance_frequency_from_config(self, animal_base):
        """Test the ignorance frequency comes from config."""
        from nal_engine.core.config import Config, TruthConfig, set_config

        set_config(Config(truth=TruthConfig(ignorance_frequency=0.0)))
        assert animal_base.query("fish is bird").to_text() == "fish -> bird <0.00, 0.00>"
