# bikeflow/viz/projection.py
from __future__ import annotations

import math
from dataclasses import dataclass

TILE_SIZE = 256
MAX_LATITUDE = 85.0511287798


def _world_xy(lon: float, lat: float, zoom: float) -> tuple[float, float]:
    scale = TILE_SIZE * (2 ** zoom)
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, float(lat)))
    s = math.sin(math.radians(lat))

    x = scale * (float(lon) + 180.0) / 360.0
    y = scale * (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi))
    return x, y


@dataclass(frozen=True)
class WebMercatorProjector:
    """
    Spherical mercator (EPSG:3857) projection of a viewport, the same math
    Leaflet uses for 256px tiles. Calling it maps (lon, lat) to pixel
    coordinates relative to the viewport's top-left corner.
    """
    center_lat: float
    center_lon: float
    zoom: float
    width: int
    height: int

    def __call__(self, lon: float, lat: float) -> tuple[float, float]:
        cx, cy = _world_xy(self.center_lon, self.center_lat, self.zoom)
        x, y = _world_xy(lon, lat, self.zoom)
        return x - cx + self.width / 2, y - cy + self.height / 2
