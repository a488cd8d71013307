"""Test configuration and fixtures for CLI tests."""

import logging

import pytest

LONG_COMMENT_JS = "// 01234567890123456789\nconst answer = 42;\n"
REFLOWED_JS = "// 01234567890123456\n// 789\nconst answer = 42;\n"
CLEAN_JS = "// short\nconst answer = 42;\n"


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches so captured streams are not reused."""
    yield
    logger = logging.getLogger("commentreflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def project(source_tree, clean_env):
    """Workspace with one file that needs reflowing and one that does not."""
    return source_tree({
        "src/long.js": LONG_COMMENT_JS,
        "src/clean.js": CLEAN_JS,
        "src/readme.md": "// " + "x " * 50,
    })
