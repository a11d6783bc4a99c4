import pytest

from neighbourhood_visualizer.constraints import NeighbourhoodParameters


class RecordingSurface:
    """Records every drawing call in order and tracks save/restore depth."""

    def __init__(self):
        self.calls = []
        self.depth = 0
        self.max_depth = 0

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def clear(self, width, height):
        self._record("clear", width, height)

    def fill_rect(self, x, y, width, height, layer):
        self._record("fill_rect", x, y, width, height, layer)

    def stroke_rect(self, x, y, width, height, layer):
        self._record("stroke_rect", x, y, width, height, layer)

    def translate(self, dx, dy):
        self._record("translate", dx, dy)

    def rotate(self, radians):
        self._record("rotate", radians)

    def save(self):
        self._record("save")
        self.depth += 1
        self.max_depth = max(self.max_depth, self.depth)

    def restore(self):
        self._record("restore")
        assert self.depth > 0, "restore without save"
        self.depth -= 1

    def count(self, name, layer=None):
        return sum(
            1 for call in self.calls
            if call[0] == name and (layer is None or call[-1] == layer)
        )


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def params():
    return NeighbourhoodParameters()


@pytest.fixture
def park_params():
    return NeighbourhoodParameters(include_parks=True, one_park_per_this_many_housing_blocks=4)
