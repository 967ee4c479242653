"""
Line-oriented command execution for interactive loops and batch scripts.

A Session owns one experience base and turns command lines into printable
text. It never prints or exits on its own: the host loop decides what to do
with each SessionOutput.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from nal_engine.core.config import Config, set_config
from nal_engine.core.exceptions import InvalidCommandError, NALError
from nal_engine.core.types import Query, Statement, TruthValue
from nal_engine.experience.base import BaseExperienceBase
from nal_engine.experience.in_memory import ExperienceBase
from nal_engine.inference.engine import InferenceEngine
from nal_engine.inference.instruction import InferenceInstruction
from nal_engine.inference.rules import RULE_CATALOGUE

logger = logging.getLogger(__name__)

OK = "Ok."
UNKNOWN_COMMAND = "Unknown command."

HELP_TEXT = "\n".join(
    [
        "Non-Axiomatic Logic Engine. The following commands are available:",
        "  /help   | /h: print this help message",
        "  /exit   | /e: exit the session",
        "  /assert | /a <term> <copula> <term> [<f, c>]: add a statement",
        "  /remove | /r <id>: remove a statement",
        "  /list   | /l: list all statements",
        "  /query  | /q <term|?> <copula> <term|?>: query the experience base",
        "  /infer  | /i <rule> <id> [<id>]: show what a rule concludes",
        "  /apply  | /ap <rule> <id> [<id>]: add what a rule concludes",
        "  /clear  | /c: remove all statements",
        "Copulas: is | -> (inheritance), similar | <-> (similarity)",
        "Rules:",
        *(f"  {spec.to_text()}" for spec in RULE_CATALOGUE.values()),
    ]
)


@dataclass
class SessionOutput:
    """
    Result of executing one command line.

    Attributes:
        text: Text to show the user; empty when there is nothing to show
        exit: True when the host loop should stop
    """

    text: str = ""
    exit: bool = False


class Session:
    """
    Executes command lines against an experience base.

    Example:
        >>> session = Session()
        >>> session.execute("/a robin is bird").text
        'Ok.'
        >>> session.execute("/q robin is ?").text
        '1: robin -> bird <1.00, 0.99>'
    """

    def __init__(
        self,
        base: Optional[BaseExperienceBase] = None,
        config: Optional[Config] = None,
    ) -> None:
        if config is not None:
            set_config(config)
        self.base = base if base is not None else ExperienceBase()
        self.engine = InferenceEngine(self.base)

        self._commands: dict[str, Callable[[list[str]], SessionOutput]] = {}
        for names, handler in [
            (("/help", "/h"), self._help),
            (("/exit", "/e"), self._exit),
            (("/assert", "/a"), self._assert),
            (("/remove", "/r"), self._remove),
            (("/list", "/l"), self._list),
            (("/query", "/q"), self._query),
            (("/infer", "/i"), self._infer),
            (("/apply", "/ap"), self._apply),
            (("/clear", "/c"), self._clear),
        ]:
            for name in names:
                self._commands[name] = handler

    def execute(self, line: str) -> SessionOutput:
        """
        Execute one command line.

        Errors are reported as output text; nothing here raises NALError.
        """
        tokens = line.split()
        if not tokens:
            return SessionOutput()

        handler = self._commands.get(tokens[0])
        if handler is None:
            return SessionOutput(UNKNOWN_COMMAND)

        try:
            return handler(tokens[1:])
        except NALError as e:
            logger.debug(f"Command {tokens[0]} failed: {e.message}")
            return SessionOutput(e.message)

    def execute_script(self, lines: Iterable[str]) -> list[SessionOutput]:
        """
        Execute a script, skipping blank and "#" comment lines.

        Stops after the first command that asks to exit.
        """
        outputs: list[SessionOutput] = []
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            output = self.execute(stripped)
            outputs.append(output)
            if output.exit:
                break
        return outputs

    # Command handlers

    def _help(self, args: list[str]) -> SessionOutput:
        return SessionOutput(HELP_TEXT)

    def _exit(self, args: list[str]) -> SessionOutput:
        return SessionOutput(exit=True)

    def _assert(self, args: list[str]) -> SessionOutput:
        stmt = Statement.from_tokens(args[:3])
        truth_value = TruthValue.parse(" ".join(args[3:])) if len(args) > 3 else None
        self.base.add_statement(stmt, truth_value)
        return SessionOutput(OK)

    def _remove(self, args: list[str]) -> SessionOutput:
        if len(args) != 1 or not (args[0].isascii() and args[0].isdigit()):
            raise InvalidCommandError("/remove", "<id>")
        self.base.remove(int(args[0]))
        return SessionOutput(OK)

    def _list(self, args: list[str]) -> SessionOutput:
        return SessionOutput(self.base.render())

    def _query(self, args: list[str]) -> SessionOutput:
        return SessionOutput(self.base.query(Query.from_tokens(args)).to_text())

    def _infer(self, args: list[str]) -> SessionOutput:
        return SessionOutput(self.engine.evaluate(InferenceInstruction.parse(args)).to_text())

    def _apply(self, args: list[str]) -> SessionOutput:
        return SessionOutput(self.engine.apply(InferenceInstruction.parse(args)).to_text())

    def _clear(self, args: list[str]) -> SessionOutput:
        self.base.clear()
        return SessionOutput(OK)
