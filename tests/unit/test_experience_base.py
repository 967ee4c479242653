"""
Unit tests for ExperienceBase.
"""

import pytest
from nal_engine.core.config import Config, ExperienceConfig, set_config
from nal_engine.core.exceptions import ExperienceNotFoundError, InvalidStatementError
from nal_engine.core.types import ExperienceElement, Statement, Term, TruthValue
from nal_engine.experience import ExperienceBase


class TestExperienceBase:
    """Tests for ExperienceBase class."""

    def test_empty_base(self, empty_base):
        """Test empty base properties."""
        assert empty_base.num_experiences == 0
        assert empty_base.num_terms == 0
        assert empty_base.name == "TestBase"
        assert empty_base.get_next_id() == 1
        assert empty_base.render() == ""

    def test_default_name_from_config(self):
        """Test the name falls back to the configured one."""
        assert ExperienceBase().name == "ExperienceBase"

    def test_add(self, empty_base):
        """Test adding a single experience."""
        element = ExperienceElement(id=1, stmt=Statement.parse("a is b"))
        empty_base.add(element)

        assert len(empty_base) == 1
        assert empty_base.last_id == 1
        assert empty_base.get_next_id() == 2
        assert empty_base.terms == frozenset({Term("a"), Term("b")})

    def test_add_duplicates_kept(self, empty_base):
        """Test duplicate statements are stored as distinct experiences."""
        empty_base.add_statement("a is b")
        empty_base.add_statement("a is b")

        assert len(empty_base) == 2
        assert [e.id for e in empty_base] == [1, 2]

    def test_add_statement_with_truth(self, empty_base):
        """Test adding a statement with an explicit truth literal."""
        element = empty_base.add_statement("a is b", "<0.787, 0.5678>")

        assert element.id == 1
        assert element.truth_value == TruthValue(0.787, 0.5678)
        assert empty_base.render() == "1: a -> b <0.79, 0.57>"

    def test_add_statement_invalid(self, empty_base):
        """Test malformed statements leave the base untouched."""
        with pytest.raises(InvalidStatementError):
            empty_base.add_statement("a is")
        assert len(empty_base) == 0

    def test_add_then_remove_restores_count(self, animal_base):
        """Test add followed by remove restores the element count."""
        before = len(animal_base)
        element = animal_base.add_statement("sparrow is bird")
        animal_base.remove(element.id)

        assert len(animal_base) == before

    def test_remove_preserves_order(self, empty_base):
        """Test removal keeps the order of the remaining experiences."""
        empty_base.add_statements(["a is b", "c is d", "e is f"])
        removed = empty_base.remove(2)

        assert removed.stmt == Statement.parse("c is d")
        assert [e.id for e in empty_base] == [1, 3]
        assert 2 not in empty_base

    def test_remove_not_found(self, animal_base):
        """Test removing an unknown id."""
        with pytest.raises(ExperienceNotFoundError) as exc_info:
            animal_base.remove(99)
        assert exc_info.value.experience_id == 99
        assert len(animal_base) == 6

    def test_ids_keep_increasing_after_remove(self, empty_base):
        """Test ids are never reused after removal."""
        empty_base.add_statements(["a is b", "b is c"])
        empty_base.remove(2)

        assert empty_base.add_statement("c is d").id == 3

    def test_remove_discards_shared_terms(self, empty_base):
        """Test the default index forgets a term still used elsewhere."""
        empty_base.add_statements(["a is b", "b is c"])
        empty_base.remove(1)

        assert not empty_base.has_term(Term("b"))
        assert empty_base.has_term(Term("c"))

    def test_clear_keeps_term_index(self, animal_base):
        """Test clear leaves the default term index untouched."""
        animal_base.clear()

        assert len(animal_base) == 0
        assert animal_base.has_term(Term("animal"))
        assert animal_base.get_next_id() == 7

    def test_get(self, animal_base):
        """Test getting an experience by id."""
        assert animal_base.get(1).stmt == Statement.parse("robin is bird")
        assert animal_base.find(42) is None
        with pytest.raises(ExperienceNotFoundError):
            animal_base.get(42)

    def test_render(self, chain_base):
        """Test rendering one line per experience."""
        assert chain_base.render() == "1: a -> b <1.00, 0.99>\n2: b -> c <1.00, 0.99>"
        assert str(chain_base) == chain_base.render()

    def test_non_monotonic_id_still_advances(self, empty_base):
        """Test a stale id still advances last_id."""
        empty_base.add(ExperienceElement(id=5, stmt=Statement.parse("a is b")))
        empty_base.add(ExperienceElement(id=2, stmt=Statement.parse("b is c")))

        assert empty_base.last_id == 6

    def test_stats(self, chain_base):
        """Test operation counters."""
        chain_base.query("a is ?")
        chain_base.remove(1)
        stats = chain_base.stats

        assert stats["additions"] == 2
        assert stats["removals"] == 1
        assert stats["queries"] == 1

    def test_from_statements_with_pairs(self):
        """Test building a base from mixed sources."""
        base = ExperienceBase.from_statements(
            [
                Statement.parse("a is b"),
                ("b is c", "<0.5, 0.5>"),
                ("c is d", TruthValue(0.2, 0.3)),
            ]
        )
        assert [str(e.truth_value) for e in base] == [
            "<1.00, 0.99>",
            "<0.50, 0.50>",
            "<0.20, 0.30>",
        ]

    def test_repr_and_summary(self, animal_base):
        """Test repr and summary text."""
        assert repr(animal_base) == "ExperienceBase(experiences=6, terms=7)"

        summary = animal_base.summary()
        assert "AnimalBase" in summary
        assert "Experiences: 6" in summary
        assert "inheritance: 6" in summary


class TestReferenceCountedTerms:
    """Tests for the reference-counted term index."""

    @pytest.fixture
    def counted_base(self):
        return ExperienceBase.from_statements(
            ["a is b", "b is c"], reference_counted_terms=True
        )

    def test_remove_keeps_shared_terms(self, counted_base):
        """Test removal keeps terms still in use."""
        counted_base.remove(1)

        assert counted_base.has_term(Term("b"))
        assert not counted_base.has_term(Term("a"))

    def test_clear_empties_index(self, counted_base):
        """Test clear empties the counted index."""
        counted_base.clear()

        assert counted_base.num_terms == 0

    def test_enabled_from_config(self):
        """Test the counted index can be enabled from config."""
        set_config(Config(experience=ExperienceConfig(reference_counted_terms=True)))

        assert ExperienceBase().reference_counted_terms is True


class TestNetworkXExport:
    """Tests for the NetworkX export."""

    def test_to_networkx(self):
        """Test exporting to a NetworkX graph."""
        nx = pytest.importorskip("networkx")
        base = ExperienceBase.from_statements(["a is b", "b similar c"])
        graph = base.to_networkx()

        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == 3
        assert graph.has_edge("a", "b")
        assert graph.has_edge("c", "b")
        assert not graph.has_edge("b", "a")
