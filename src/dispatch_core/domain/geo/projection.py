"""
Web Mercator (slippy-map) projection between WGS84 degrees and world pixels.

Every function is pure: zoom, center and viewport size are always passed in.
World pixel space at zoom z is a square of 2**z * 256 pixels, origin top-left.
"""

import math
from dataclasses import dataclass, replace

TILE_SIZE = 256
MIN_ZOOM, MAX_ZOOM = 11.0, 18.0
ZOOM_STEP = 0.5  # per mouse-wheel notch
MAX_LATITUDE = 85.05112878  # square-world limit; poles are clamped to it


def _world_size(zoom: float) -> float:
    return math.pow(2.0, zoom) * TILE_SIZE


def lon_to_pixel_x(lon: float, zoom: float) -> float:
    return (lon + 180.0) / 360.0 * _world_size(zoom)


def lat_to_pixel_y(lat: float, zoom: float) -> float:
    lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))
    s = math.sin(math.radians(lat))
    y = math.log((1 + s) / (1 - s)) / 2
    return (1 - y / math.pi) / 2.0 * _world_size(zoom)


def pixel_x_to_lon(px: float, zoom: float) -> float:
    return px / _world_size(zoom) * 360.0 - 180.0


def pixel_y_to_lat(py: float, zoom: float) -> float:
    n = math.pi - 2.0 * math.pi * py / _world_size(zoom)
    return math.degrees(math.atan(math.sinh(n)))


def geo_to_screen(
    lat: float,
    lon: float,
    center_lat: float,
    center_lon: float,
    zoom: float,
    width: int,
    height: int,
) -> tuple[int, int]:
    """Screen pixel of (lat, lon) in a width x height viewport centered on the given point."""
    cx, cy = lon_to_pixel_x(center_lon, zoom), lat_to_pixel_y(center_lat, zoom)
    px, py = lon_to_pixel_x(lon, zoom), lat_to_pixel_y(lat, zoom)
    # int() truncates toward zero, same as the dashboard's cast
    return int(width / 2.0 + (px - cx)), int(height / 2.0 + (py - cy))


def screen_to_geo(
    x: float,
    y: float,
    center_lat: float,
    center_lon: float,
    zoom: float,
    width: int,
    height: int,
) -> tuple[float, float]:
    """Inverse of geo_to_screen (without the integer rounding): returns (lat, lon)."""
    px = lon_to_pixel_x(center_lon, zoom) + (x - width / 2.0)
    py = lat_to_pixel_y(center_lat, zoom) + (y - height / 2.0)
    return pixel_y_to_lat(py, zoom), pixel_x_to_lon(px, zoom)


@dataclass(frozen=True)
class Viewport:
    center_lat: float
    center_lon: float
    zoom: float = 13.0
    width: int = 800
    height: int = 600

    def to_screen(self, lat: float, lon: float) -> tuple[int, int]:
        return geo_to_screen(
            lat, lon, self.center_lat, self.center_lon, self.zoom, self.width, self.height
        )

    def to_geo(self, x: float, y: float) -> tuple[float, float]:
        return screen_to_geo(
            x, y, self.center_lat, self.center_lon, self.zoom, self.width, self.height
        )

    def zoomed(self, steps: float) -> "Viewport":
        """Positive steps zoom in; the result is clamped to [MIN_ZOOM, MAX_ZOOM]."""
        z = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom + steps * ZOOM_STEP))
        return replace(self, zoom=z)

    def panned(self, dx: float, dy: float) -> "Viewport":
        """Shift the center by a screen-pixel drag of (dx, dy)."""
        lat, lon = self.to_geo(self.width / 2.0 - dx, self.height / 2.0 - dy)
        return replace(self, center_lat=lat, center_lon=lon)
