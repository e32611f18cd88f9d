import logging

import pytest

from csgkit.core.logging_utils import ROOT_NAME, configure_logging, get_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger(ROOT_NAME)
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_get_logger_prefixes_namespace():
    assert get_logger('triangle_test').name == 'csgkit.triangle_test'
    assert get_logger('csgkit.segment_test').name == 'csgkit.segment_test'
    assert get_logger('csgkit').name == 'csgkit'


def test_get_logger_levels():
    assert get_logger('level_probe').level == logging.NOTSET
    assert get_logger('level_probe', 'debug').level == logging.DEBUG
    assert get_logger('level_probe', logging.WARNING).level == logging.WARNING
    assert get_logger('level_probe', 'no-such-level').level == logging.INFO
    # a later call without a level resets to inherit from the parent
    assert get_logger('level_probe').level == logging.NOTSET


def test_get_logger_does_not_attach_handlers():
    log = get_logger('handler_probe')
    assert log.handlers == []


def test_configure_logging_isolates_root(restore_root_logger):
    root = restore_root_logger
    root.handlers[:] = [logging.NullHandler()]
    out = configure_logging('WARNING')
    assert out is root
    assert root.level == logging.WARNING
    assert root.propagate is False
    assert not any(isinstance(h, logging.NullHandler) for h in root.handlers)
    n_handlers = len(root.handlers)
    configure_logging(logging.DEBUG)
    assert root.level == logging.DEBUG
    assert len(root.handlers) == n_handlers
