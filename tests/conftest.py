from concurrent.futures import ThreadPoolExecutor

import pytest

PI_100 = (
    "3.14159265358979323846264338327950288419716939937510"
    "58209749445923078164062862089986280348253421170679"
)


@pytest.fixture
def pi_100():
    return PI_100


@pytest.fixture
def thread_pool():
    with ThreadPoolExecutor(max_workers=4) as pool:
        yield pool
