import pytest

ENV_VARS = ('INTCALC_VERBOSITY', 'INTCALC_HISTORY_FILE', 'INTCALC_PROMPT')


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test from an empty directory with no INTCALC_* variables set."""
    for name in ENV_VARS:
        # setenv first so the variable is removed again after the test even if
        # a .env file loaded during the test sets it
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
