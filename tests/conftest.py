import datetime

import pytest

from petdoku.utils.log import get_logger


# Get the result of each test
@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def debug_logging():
    """Run every test with the petdoku loggers at DEBUG."""
    logger = get_logger()
    previous = logger.level
    logger.setLevel("DEBUG")
    yield
    logger.setLevel(previous)


# Real-time print of start and end of test
@pytest.fixture(autouse=True)
def log_test_lifecycle(request):
    node_id = request.node.nodeid
    start_time = datetime.datetime.now().strftime("%H:%M:%S")

    print(f"\n[START] {start_time} - Running: {node_id}")

    yield

    end_time = datetime.datetime.now().strftime("%H:%M:%S")
    report = getattr(request.node, "rep_call", None)

    if report:
        if report.passed:
            status = "PASSED"
        elif report.failed:
            status = "FAILED"
        else:
            status = report.outcome.upper()
    else:
        status = "UNKNOWN"

    print(f"\n[END] {end_time} - Result: {status} - {node_id}")
