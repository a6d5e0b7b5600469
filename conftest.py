# Ensure project root is on sys.path so 'busywatch' is importable when running pytest from
# environments that don't automatically include it.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Clear the process-wide registry, harness and mode after each test."""
    yield
    from busywatch.harness import get_default_harness
    from busywatch.registry import get_registry

    get_registry().reset()
    get_default_harness().clear()
