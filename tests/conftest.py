import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from prefab_levelgenerator.src.generators.rooms import RoomTemplateCatalog  # noqa: E402
from prefab_levelgenerator.src.validation import reset_validator  # noqa: E402
from level_test_utils import corridor, crossroads  # noqa: E402


@pytest.fixture()
def corridor_catalog():
    return RoomTemplateCatalog([corridor()])


@pytest.fixture()
def ab_catalog():
    return RoomTemplateCatalog([corridor("A"), corridor("B")])


@pytest.fixture()
def cross_catalog():
    return RoomTemplateCatalog([crossroads()])


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _fresh_validator():
    reset_validator()
    yield
    reset_validator()
