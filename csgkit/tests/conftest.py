import datetime
import io
import logging
import pathlib

import pytest

from csgkit.core.triangle import Triangle

LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport (with .outcome) to the item so fixtures can see the
    # outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_test_logs(request):
    """Capture csgkit logging for each test into an in-memory buffer and write
    it to a file only when the test fails.
    """
    lib_root = logging.getLogger('csgkit')
    prev_level = lib_root.level
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    lib_root.addHandler(handler)
    lib_root.setLevel(logging.DEBUG)
    try:
        yield
    finally:
        lib_root.removeHandler(handler)
        lib_root.setLevel(prev_level)
        rep = getattr(request.node, "rep_call", None)
        if rep is not None and getattr(rep, "outcome", None) == "failed":
            LOG_DIR.mkdir(exist_ok=True)
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            fname = LOG_DIR / "{}__{}.log".format(nodeid, ts)
            with open(fname, "w", encoding="utf-8") as f:
                f.write("=== Test: {}\n".format(request.node.nodeid))
                f.write("=== Timestamp: {}\n\n".format(ts))
                f.write(buf.getvalue())


@pytest.fixture
def unit_tri():
    """Right triangle in the z=0 plane, counter-clockwise seen from +z."""
    return Triangle((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))


@pytest.fixture
def x_half_cutter():
    """Triangle in the x=0.5 plane that straddles z=0 with one vertex on it."""
    return Triangle((0.5, -1.0, -1.0), (0.5, -1.0, 1.0), (0.5, 1.0, 0.0))
