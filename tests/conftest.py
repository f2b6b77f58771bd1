import pytest


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lorem():
    return (b'Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do '
            b'eiusmod tempor incididunt ut labore et dolore magna aliqua. Ut '
            b'enim ad minim veniam, quis nostrud exercitation ullamco laboris '
            b'nisi ut aliquip ex ea commodo consequat.')
