import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Protocol

from shapely import affinity
from shapely.geometry import LineString, box, mapping

IDENTITY = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


class DrawingSurface(Protocol):
    """
    What the renderer needs from something it can draw on. Coordinates are in
    drawing units, y pointing down, relative to the current transform.
    """

    def clear(self, width: float, height: float) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float, layer: str) -> None: ...

    def stroke_rect(self, x: float, y: float, width: float, height: float, layer: str) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, radians: float) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...


@contextmanager
def saved_state(surface):
    """Scoped save/restore, so a transform never leaks into sibling drawing."""
    surface.save()
    try:
        yield surface
    finally:
        surface.restore()


class AffineSurface(ABC):
    """
    Keeps a stack of affine transforms (shapely's [a, b, d, e, xoff, yoff]
    form) and places rectangles as polygons in absolute coordinates.
    """

    def __init__(self, base_transform=IDENTITY):
        self.transform = tuple(base_transform)
        self._stack = []

    @property
    def depth(self):
        return len(self._stack)

    def save(self):
        self._stack.append(self.transform)

    def restore(self):
        if not self._stack:
            raise RuntimeError("restore() called without a matching save()")
        self.transform = self._stack.pop()

    def translate(self, dx, dy):
        a, b, d, e, xoff, yoff = self.transform
        self.transform = (a, b, d, e, a * dx + b * dy + xoff, d * dx + e * dy + yoff)

    def rotate(self, radians):
        a, b, d, e, xoff, yoff = self.transform
        c, s = math.cos(radians), math.sin(radians)
        self.transform = (a * c + b * s, -a * s + b * c, d * c + e * s, -d * s + e * c, xoff, yoff)

    def place_rect(self, x, y, width, height):
        return affinity.affine_transform(box(x, y, x + width, y + height), self.transform)

    @abstractmethod
    def clear(self, width, height): ...

    @abstractmethod
    def fill_rect(self, x, y, width, height, layer): ...

    @abstractmethod
    def stroke_rect(self, x, y, width, height, layer): ...


class FeatureSurface(AffineSurface):
    """Collects the drawn scene as GeoJSON features, one per rectangle."""

    def __init__(self, base_transform=IDENTITY):
        super().__init__(base_transform)
        self.features = []

    def clear(self, width, height):
        self.features = []

    def _add(self, geom, layer, style):
        self.features.append({
            "type": "Feature",
            "geometry": geom,
            "properties": {
                "type": layer,
                "style": style,
            }
        })

    def fill_rect(self, x, y, width, height, layer):
        self._add(self.place_rect(x, y, width, height), layer, "fill")

    def stroke_rect(self, x, y, width, height, layer):
        outline = self.place_rect(x, y, width, height).exterior
        self._add(LineString(outline.coords), layer, "stroke")

    def to_feature_collection(self, properties=None):
        return {
            "type": "FeatureCollection",
            "features": [
                {**f, "geometry": mapping(f["geometry"])} for f in self.features
            ],
            "properties": properties or {},
        }
