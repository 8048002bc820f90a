from __future__ import annotations

from typing import Any

import pytest

from lazywire._internal.container import Container
from lazywire._internal.overrides import Override


@pytest.fixture()
def lazywire_overrides() -> list[Override[Any]]:
    """Overrides applied to ``lazywire_container``.

    Override this fixture in a test module or ``conftest.py`` to substitute
    fakes for the keys under test. The default applies no overrides.

    Returns:
        An empty list.

    """
    return []


@pytest.fixture()
def lazywire_container(lazywire_overrides: list[Override[Any]]) -> Container:
    """Create a per-test container built from ``lazywire_overrides``.

    The fixture is function-scoped, so cached instances never leak between
    tests unless users override the fixture scope explicitly.

    Returns:
        A new ``Container`` instance.

    """
    return Container(lazywire_overrides)
