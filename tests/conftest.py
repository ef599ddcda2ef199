from datetime import datetime

import pytest

from structures import BinarySearchTree


FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def now():
    return lambda: FIXED_NOW


@pytest.fixture
def sample_tree():
    #        50
    #      /    \
    #    30      70
    #   /  \    /  \
    #  20  40  60  80
    return BinarySearchTree.from_values([50, 30, 70, 20, 40, 60, 80])
