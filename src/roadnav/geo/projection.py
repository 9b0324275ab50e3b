# roadnav/geo/projection.py
import math
from dataclasses import dataclass

# Map root tile corners (upper-left / lower-right).
ROOT_ULLON, ROOT_ULLAT = -122.2998046875, 37.892195547244356
ROOT_LRLON, ROOT_LRLAT = -122.2119140625, 37.82280243352756

ROOT_LON = (ROOT_ULLON + ROOT_LRLON) / 2
ROOT_LAT = (ROOT_ULLAT + ROOT_LRLAT) / 2

# Unit scale at the natural origin (UTM would use 0.9996).
K0 = 1.0


@dataclass(frozen=True)
class Projection:
    """
    Local transverse Mercator flattening centred on (ref_lon, ref_lat).
    Output is a unitless Euclidean plane, only meant for comparing distances
    near the reference point; travel cost never goes through here.
    """

    ref_lon: float = ROOT_LON
    ref_lat: float = ROOT_LAT
    k0: float = K0

    def x(self, lon: float, lat: float) -> float:
        dlon = math.radians(lon - self.ref_lon)
        b = math.sin(dlon) * math.cos(math.radians(lat))
        if abs(b) >= 1.0:
            # a quarter turn off the reference meridian the flattening diverges
            return math.copysign(math.inf, b)
        return (self.k0 / 2) * math.log((1 + b) / (1 - b))

    def y(self, lon: float, lat: float) -> float:
        dlon = math.radians(lon - self.ref_lon)
        con = math.atan(math.tan(math.radians(lat)) / math.cos(dlon))
        return self.k0 * (con - math.radians(self.ref_lat))

    def xy(self, lon: float, lat: float) -> tuple[float, float]:
        return self.x(lon, lat), self.y(lon, lat)


DEFAULT_PROJECTION = Projection()


def project_to_x(lon: float, lat: float) -> float:
    return DEFAULT_PROJECTION.x(lon, lat)


def project_to_y(lon: float, lat: float) -> float:
    return DEFAULT_PROJECTION.y(lon, lat)
