"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and makes the shared fixture package importable.
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

_tests_dir = Path(__file__).parent
_src_dir = _tests_dir.parent / "src"
for _path in (_src_dir, _tests_dir):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

# Force reimport of annolens modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("annolens"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _reset_annolens_logger() -> Iterator[None]:
    """Keep logging configuration from leaking between tests."""
    yield
    logger = logging.getLogger("annolens")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
