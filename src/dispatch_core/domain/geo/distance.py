import numpy as np

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0


class HaversineDistance:
    """Great-circle distance on a sphere of the WGS84 mean radius."""

    name = "haversine"

    def __init__(self, radius_km: float = EARTH_RADIUS_KM):
        self.radius_km = radius_km

    def km(self, lat1, lon1, lat2, lon2):
        p1, p2 = np.radians(lat1), np.radians(lat2)
        dphi, dlmb = p2 - p1, np.radians(np.subtract(lon2, lon1))
        a = np.sin(dphi / 2) ** 2 + np.cos(p1) * np.cos(p2) * np.sin(dlmb / 2) ** 2
        return 2 * self.radius_km * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


class PlanarDistance:
    """Flat-earth approximation, degrees times a constant. City-scale extents only."""

    name = "planar"

    def __init__(self, km_per_degree: float = KM_PER_DEGREE):
        self.km_per_degree = km_per_degree

    def km(self, lat1, lon1, lat2, lon2):
        return np.hypot(np.subtract(lat2, lat1), np.subtract(lon2, lon1)) * self.km_per_degree
