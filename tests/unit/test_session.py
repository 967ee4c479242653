"""
Unit tests for Session command execution.
"""

import pytest
from nal_engine import NO_MATCHES_FOUND
from nal_engine.core.config import Config, TruthConfig
from nal_engine.experience import ExperienceBase
from nal_engine.session import HELP_TEXT, Session, SessionOutput


class TestSessionCommands:
    """Tests for single command lines."""

    def test_blank_line(self, session):
        """Test a blank line produces no output."""
        assert session.execute("   ") == SessionOutput()

    @pytest.mark.parametrize("line", ["/help", "/h"])
    def test_help(self, session, line):
        """Test the help text."""
        output = session.execute(line)
        assert output.text == HELP_TEXT
        assert "deduction | ded | d <id1> <id2>" in output.text

    @pytest.mark.parametrize("line", ["/exit", "/e"])
    def test_exit(self, session, line):
        """Test the exit commands."""
        assert session.execute(line).exit is True

    def test_unknown_command(self, session):
        """Test unknown commands and bare statements."""
        assert session.execute("/fly away").text == "Unknown command."
        assert session.execute("robin is bird").text == "Unknown command."

    def test_assert_and_list(self, session):
        """Test asserting and listing experiences."""
        assert session.execute("/assert robin is bird").text == "Ok."
        assert session.execute("/a bird is animal <0.787, 0.5678>").text == "Ok."

        assert session.execute("/list").text == (
            "1: robin -> bird <1.00, 0.99>\n2: bird -> animal <0.79, 0.57>"
        )
        assert session.execute("/l").text == session.execute("/list").text

    def test_assert_malformed(self, session):
        """Test malformed assertions are reported."""
        assert session.execute("/a robin is").text == (
            "Invalid statement: Expected <term> <copula> <term>"
        )
        assert session.execute("/a ? is bird").text == "Term can't be a question mark (?)"
        assert session.execute("/a robin isa bird").text == "Invalid copula"
        assert session.execute("/a robin is bird <2, 0.5>").text.startswith("Invalid truth value")
        assert session.execute("/l").text == ""

    def test_remove(self, session):
        """Test removing experiences."""
        session.execute("/a a is b")
        session.execute("/a b is c")

        assert session.execute("/remove 1").text == "Ok."
        assert session.execute("/l").text == "2: b -> c <1.00, 0.99>"
        assert session.execute("/r 1").text == "Experience 1 not found in ExperienceBase."
        assert session.execute("/r x").text == "Invalid command: Expected /remove <id>"

    def test_query(self, session):
        """Test query commands."""
        session.execute("/a a is b")
        session.execute("/a b is c")

        assert session.execute("/query a is ?").text == "1: a -> b <1.00, 0.99>"
        assert session.execute("/q a is c").text == "a -> c <0.50, 0.80>"
        assert session.execute("/q z is ?").text == NO_MATCHES_FOUND
        assert session.execute("/q ? is ?").text == (
            "Invalid query: At most one side can be a wildcard (?)"
        )

    def test_infer_does_not_store(self, session):
        """Test /infer shows the derivation without storing it."""
        session.execute("/a a is b")
        session.execute("/a b is c")

        assert session.execute("/infer ded 1 2").text == (
            "1: a -> b <1.00, 0.99>\n"
            "2: b -> c <1.00, 0.99>\n"
            "RESULT: a -> c <1.00, 0.98>"
        )
        assert len(session.base) == 2

    def test_apply_stores(self, session):
        """Test /apply stores the conclusion."""
        session.execute("/a a is b")
        session.execute("/a b is c")
        session.execute("/ap d 1 2")

        assert session.execute("/q a is ?").text == "1: a -> b <1.00, 0.99>"
        assert session.execute("/l").text.splitlines()[-1] == "3: a -> c <1.00, 0.98>"

    def test_infer_errors(self, session):
        """Test inference errors are reported."""
        session.execute("/a a is b")

        assert session.execute("/i ded 1 2").text == "Experience 2 not found."
        assert session.execute("/i transitivity 1 2").text == "Invalid inference instruction"
        assert session.execute("/i ded 1").text == (
            "Invalid inference instruction: Expected <id1> <id2>"
        )
        assert session.execute("/i ana 1 1").text == "Analogy not possible."

    @pytest.mark.parametrize("line", ["/i ded \u00b2 1", "/ap ded 1 \u00b2", "/i cnv \u0663"])
    def test_non_ascii_digit_ids(self, session, line):
        """Test ids written with non-ASCII digits are reported, not raised."""
        session.execute("/a a is b")

        assert session.execute(line).text.startswith("Invalid inference instruction: Expected")
        assert len(session.base) == 1

    def test_remove_non_ascii_digit_id(self, session):
        """Test /remove rejects non-ASCII digit ids as a command error."""
        session.execute("/a a is b")

        assert session.execute("/r \u00b2").text == "Invalid command: Expected /remove <id>"
        assert len(session.base) == 1

    def test_clear(self, session):
        """Test clear keeps ids increasing."""
        session.execute("/a a is b")
        assert session.execute("/clear").text == "Ok."
        assert session.execute("/l").text == ""
        session.execute("/a c is d")
        assert session.execute("/l").text == "2: c -> d <1.00, 0.99>"

    def test_given_base_and_config(self):
        """Test a session over a given base and config."""
        base = ExperienceBase.from_statements(["a is b"])
        session = Session(base=base, config=Config(truth=TruthConfig(default_confidence=0.9)))
        session.execute("/a b is c")

        assert session.base is base
        assert str(base.get(2).truth_value) == "<1.00, 0.90>"


@pytest.mark.integration
class TestSessionScripts:
    """Tests for execute_script."""

    def test_script(self, session):
        """Test running a script with comments and blank lines."""
        script = [
            "# animals",
            "/a robin is bird",
            "",
            "/a bird is animal",
            "   # indented comment",
            "/apply deduction 1 2",
            "/q robin is animal",
        ]
        outputs = session.execute_script(script)

        assert [o.text for o in outputs[:2]] == ["Ok.", "Ok."]
        assert outputs[-1].text == "3: robin -> animal <1.00, 0.98>"
        assert len(outputs) == 4

    def test_script_stops_at_exit(self, session):
        """Test a script stops at /exit."""
        outputs = session.execute_script(["/a a is b", "/exit", "/a b is c"])

        assert outputs[-1].exit
        assert len(outputs) == 2
        assert len(session.base) == 1

    def test_script_reports_errors_and_continues(self, session):
        """Test script errors do not stop the script."""
        outputs = session.execute_script(["/r 5", "/a a is b"])

        assert outputs[0].text.startswith("Experience 5 not found")
        assert outputs[1].text == "Ok."
