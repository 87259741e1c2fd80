# test_main.py

import logging

import pytest
from prompt_toolkit.history import FileHistory, InMemoryHistory
from pydantic import ValidationError

import intcalc.main as main
from intcalc.config import Settings
from intcalc.cursor import I64_MAX
from intcalc.errors import DivisionByZeroError
from intcalc.main import CLIHandler, Evaluation, HelpHandler, build_arg_parser, calculate


def scripted_prompt(lines, prompts=None):
    """Return a prompt callable replaying `lines`, then raising EOFError."""
    remaining = iter(lines)

    def prompt(message):
        if prompts is not None:
            prompts.append(message)
        try:
            line = next(remaining)
        except StopIteration:
            raise EOFError
        if isinstance(line, BaseException):
            raise line
        return line
    return prompt


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


# ---------------------------
# calculate / Evaluation
# ---------------------------

def test_calculate_renders_expression_and_result():
    evaluation = calculate("  -1 + 5 * (2 + 1) - 3 ")
    assert evaluation.expression == "-1 + 5 * (2 + 1) - 3"
    assert evaluation.result == 11
    assert evaluation.render() == "-1 + 5 * (2 + 1) - 3 = 11"


def test_calculate_propagates_errors():
    with pytest.raises(DivisionByZeroError):
        calculate("-2+10/(5-5)")


def test_calculate_logs_input_and_result(caplog):
    caplog.set_level(logging.INFO, logger='intcalc.main')
    calculate("6 / 3")
    assert "6 / 3 evaluated to 2" in caplog.text


def test_evaluation_result_must_fit_i64():
    Evaluation(expression="x", result=I64_MAX)
    with pytest.raises(ValidationError):
        Evaluation(expression="x", result=I64_MAX + 1)


# ---------------------------
# HelpHandler
# ---------------------------

def test_help_handler_prints_help(capsys):
    HelpHandler.print_help()
    out = capsys.readouterr().out
    assert "Integer Calculator Help" in out
    assert "Supported operations" in out
    assert "Examples" in out


# ---------------------------
# CLIHandler
# ---------------------------

def run_cli(lines, settings=None):
    cli = CLIHandler(settings or Settings(history_file=''), prompt=scripted_prompt(lines))
    cli.run()
    return cli


def test_cli_handler_evaluate_line_success():
    cli = CLIHandler(Settings(history_file=''))
    assert cli.evaluate_line(" 1 + 2 ") == (True, "1 + 2 = 3")


@pytest.mark.parametrize("line,message", [
    ("5 / 0", "An error occurred while calculating: 5 / 0: Division by zero: Division by zero"),
    ("1 + a", "An error occurred while calculating: 1 + a: Invalid character: Unexpected character 'a' at position 4"),
    ("9223372036854775807 + 1",
     "An error occurred while calculating: 9223372036854775807 + 1: Overflow: Overflow on addition"),
    ("(1+2", "An error occurred while calculating: (1+2: Unexpected token: Expected ')', got EOF at position 4"),
])
def test_cli_handler_evaluate_line_errors(line, message):
    cli = CLIHandler(Settings(history_file=''))
    assert cli.evaluate_line(line) == (False, message)


def test_cli_handler_evaluate_line_too_deep(monkeypatch):
    def explode(text):
        raise RecursionError
    monkeypatch.setattr(main, 'evaluate', explode)
    ok, out = CLIHandler(Settings(history_file='')).evaluate_line("((1))")
    assert not ok
    assert out.endswith("expression nested too deeply")


def test_cli_handler_exit(capsys):
    cli = run_cli(['exit'])
    assert not cli.running
    assert "Goodbye!" in capsys.readouterr().out


def test_cli_handler_quit_is_case_insensitive(capsys):
    run_cli(['QUIT'])
    assert "Goodbye!" in capsys.readouterr().out


def test_cli_handler_help(capsys):
    run_cli(['help', 'exit'])
    assert "Integer Calculator Help" in capsys.readouterr().out


def test_cli_handler_prints_results_and_errors(capsys):
    run_cli(['2 + 2', '', '   ', '5 / 0', '1 2', 'exit'])
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "2 + 2 = 4",
        "An error occurred while calculating: 5 / 0: Division by zero: Division by zero",
        "An error occurred while calculating: 1 2: Unexpected token: Expected end of input, got INT at position 2",
        "Goodbye!",
    ]


def test_cli_handler_keyboard_interrupt_cancels_line(capsys):
    run_cli([KeyboardInterrupt(), '3 * 3', 'exit'])
    out = capsys.readouterr().out
    assert "^C" in out
    assert "3 * 3 = 9" in out


def test_cli_handler_eof(capsys):
    cli = run_cli([])
    assert capsys.readouterr().out == '\n'
    assert cli.running


def test_cli_handler_uses_configured_prompt():
    prompts = []
    cli = CLIHandler(Settings(prompt='calc> '), prompt=scripted_prompt(['1', 'exit'], prompts))
    cli.run()
    assert prompts == ['calc> ', 'calc> ']


class FakeSession:
    created = []

    def __init__(self, history):
        self.history = history
        FakeSession.created.append(self)

    def prompt(self, message):
        raise EOFError


def test_cli_handler_builds_prompt_session_with_file_history(monkeypatch, tmp_path):
    FakeSession.created = []
    monkeypatch.setattr(main, 'PromptSession', FakeSession)
    CLIHandler(Settings(history_file=str(tmp_path / 'history'))).run()
    assert len(FakeSession.created) == 1
    assert isinstance(FakeSession.created[0].history, FileHistory)


def test_cli_handler_in_memory_history_without_file(monkeypatch):
    FakeSession.created = []
    monkeypatch.setattr(main, 'PromptSession', FakeSession)
    CLIHandler(Settings(history_file='')).run()
    assert isinstance(FakeSession.created[0].history, InMemoryHistory)


# ---------------------------
# Main Entry Point
# ---------------------------

def test_main_entry_point(capsys):
    code = main.main(['--history-file', ''], prompt=scripted_prompt(['-1+5*(2+1)-3', 'exit']))
    out = capsys.readouterr().out
    assert code == 0
    assert "Welcome to the Integer Calculator!" in out
    assert "Type 'help' for instructions" in out
    assert "-1+5*(2+1)-3 = 11" in out


def test_main_applies_verbosity():
    main.main(['-v', 'DEBUG', '--history-file', ''], prompt=scripted_prompt([]))
    assert logging.getLogger().level == logging.DEBUG


def test_main_rejects_unknown_verbosity(capsys):
    with pytest.raises(SystemExit) as e:
        main.main(['--verbosity', 'loud'], prompt=scripted_prompt([]))
    assert e.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_arg_parser_defaults_come_from_settings():
    args = build_arg_parser(Settings(verbosity='info', history_file='')).parse_args([])
    assert args.verbosity == 'info'
    assert args.history_file == ''


def test_main_reads_verbosity_from_environment(monkeypatch):
    monkeypatch.setenv('INTCALC_VERBOSITY', 'error')
    main.main(['--history-file', ''], prompt=scripted_prompt([]))
    assert logging.getLogger().level == logging.ERROR
