# main.py

"""
Interactive front end for the integer calculator.

Reads one line at a time, evaluates it with the single-pass evaluator and
prints either "<expression> = <result>" or a description of the first error.
Verbosity and history settings come from the command line, the environment
or a .env file (see config.py).
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Tuple

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from pydantic import BaseModel, Field

from intcalc.config import VERBOSITY_LEVELS, Settings, configure_logging, load_settings
from intcalc.cursor import I64_MAX, I64_MIN
from intcalc.errors import CalculatorError
from intcalc.evaluator import evaluate

logger = logging.getLogger(__name__)


class Evaluation(BaseModel):
    """A successfully evaluated expression."""
    expression: str
    result: int = Field(..., ge=I64_MIN, le=I64_MAX)

    def render(self) -> str:
        return f"{self.expression} = {self.result}"


def calculate(line: str) -> Evaluation:
    """
    Evaluate one input line.

    Raises:
        CalculatorError: on the first error met while evaluating
    """
    expression = line.strip()
    logger.info(expression)
    result = evaluate(expression)
    logger.info(f"{expression} evaluated to {result}")
    return Evaluation(expression=expression, result=result)


# ---------------------------
# Help Handler
# ---------------------------

class HelpHandler:
    """
    Prints usage instructions for the calculator.
    """
    HELP_TEXT = """
Integer Calculator Help
-----------------------
Expressions use signed 64-bit integers only.

Supported operations:
  - Addition:           1 + 2
  - Subtraction:        3 - 4
  - Multiplication:     5 * 6
  - Division:           7 / 2        (truncates toward zero: 3)
  - Parentheses:        (1 + 2) * 3
  - Negation:           -5, --5      (any number of minuses)

Special commands:
  - help      : Show this help message
  - exit/quit : Exit the calculator (Ctrl-D also works)

Errors:
  - Invalid character, Overflow, Division by zero, Unexpected token

Examples:
  > -1 + 5 * (2 + 1) - 3
  -1 + 5 * (2 + 1) - 3 = 11
  > 5 / 0
  An error occurred while calculating: 5 / 0: Division by zero: Division by zero
"""

    @staticmethod
    def print_help():
        print(HelpHandler.HELP_TEXT.strip())


# ---------------------------
# CLI Handler (REPL)
# ---------------------------

class CLIHandler:
    """
    Handles the REPL loop and user interaction.

    `prompt` reads one line given the prompt string; by default a
    prompt_toolkit session is created on first use.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 prompt: Optional[Callable[[str], str]] = None):
        self.settings = settings or Settings()
        self._prompt = prompt
        self.running = True

    def _read_line(self) -> str:
        if self._prompt is None:
            if self.settings.history_file:
                history = FileHistory(self.settings.history_file)
            else:
                history = InMemoryHistory()
            self._prompt = PromptSession(history=history).prompt
        return self._prompt(self.settings.prompt)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single expression line. Returns (ok, output)."""
        try:
            return True, calculate(line).render()
        except CalculatorError as e:
            logger.debug(f"Evaluation failed: {e.kind.name} at position {e.pos}")
            return False, f"An error occurred while calculating: {line.strip()}: {e.describe()}"
        except RecursionError:
            logger.error(f"Expression nested too deeply: {line.strip()}")
            return False, f"An error occurred while calculating: {line.strip()}: expression nested too deeply"

    def run(self):
        """
        Main REPL loop.
        """
        while self.running:
            try:
                line = self._read_line()
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()  # Newline for clean exit
                break

            line = line.strip()
            if not line:
                continue

            command = line.lower()
            if command in ('exit', 'quit'):
                self.running = False
                print("Goodbye!")
                break
            elif command == 'help':
                HelpHandler.print_help()
                continue

            _, out = self.evaluate_line(line)
            print(out)


# ---------------------------
# Main Entry Point
# ---------------------------

def build_arg_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='intcalc',
        description="Evaluate signed 64-bit integer arithmetic expressions interactively.",
    )
    parser.add_argument(
        "-v", "--verbosity",
        type=str.lower,
        choices=list(VERBOSITY_LEVELS),
        default=settings.verbosity,
        help=f"The log verbosity level (default: {settings.verbosity}).",
    )
    parser.add_argument(
        "--history-file",
        type=str,
        default=settings.history_file,
        help="File used to keep prompt history; pass an empty string to keep history in memory only.",
    )
    return parser


def main(argv: Optional[List[str]] = None,
         prompt: Optional[Callable[[str], str]] = None) -> int:
    """
    Entry point for the calculator application.
    """
    settings = load_settings()
    args = build_arg_parser(settings).parse_args(argv)
    settings = Settings(
        verbosity=args.verbosity,
        history_file=args.history_file,
        prompt=settings.prompt,
    )
    configure_logging(settings.verbosity)
    logger.debug(f"Settings: {settings.model_dump()}")

    print("Welcome to the Integer Calculator!")
    print("Type 'help' for instructions, or 'exit' to quit.")
    cli = CLIHandler(settings, prompt=prompt)
    cli.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
