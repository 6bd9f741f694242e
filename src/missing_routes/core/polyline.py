"""Encoded polyline codec (precision 1e5) used by commercial directions APIs."""

from ..models import GeoPoint

PRECISION = 1e5


def decode_polyline(encoded: str) -> list[GeoPoint]:
    """Decode an encoded polyline string into points.

    Raises ValueError on a truncated string.
    """
    points: list[GeoPoint] = []
    index = 0
    lat = 0
    lon = 0
    length = len(encoded)

    while index < length:
        deltas = []
        for _ in range(2):
            shift = 0
            value = 0
            while True:
                if index >= length:
                    raise ValueError("Truncated polyline")
                b = ord(encoded[index]) - 63
                index += 1
                value |= (b & 0x1F) << shift
                shift += 5
                if b < 0x20:
                    break
            deltas.append(~(value >> 1) if value & 1 else value >> 1)
        lat += deltas[0]
        lon += deltas[1]
        points.append(GeoPoint(lat=lat / PRECISION, lon=lon / PRECISION))
    return points


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def encode_polyline(points: list[GeoPoint]) -> str:
    result = []
    prev_lat = 0
    prev_lon = 0
    for point in points:
        lat = int(round(point.lat * PRECISION))
        lon = int(round(point.lon * PRECISION))
        result.append(_encode_value(lat - prev_lat))
        result.append(_encode_value(lon - prev_lon))
        prev_lat, prev_lon = lat, lon
    return "".join(result)
