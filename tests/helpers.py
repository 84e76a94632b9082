"""Builders for test segments and CSV-style geometry strings."""

import json

from safety_aware_routing.data.models import SegmentScores, StreetSegment

P1 = (49.280, -123.120)
P2 = (49.281, -123.119)


def make_segment(seg_id, coords, length=None, **scores):
    """Segment with default scores overridden by keyword arguments."""
    coords = tuple(tuple(c) for c in coords)
    if length is None:
        length = 0.1 * (len(coords) - 1)
    return StreetSegment(
        id=seg_id,
        coordinates=coords,
        length=length,
        street_name=f"{seg_id} street",
        scores=SegmentScores(**scores)
    )


def geojson_line(coords_latlon, quoted=False):
    """GeoJSON LineString string (lon, lat order) as found in the CSV exports."""
    text = json.dumps({
        "type": "LineString",
        "coordinates": [[lon, lat] for lat, lon in coords_latlon]
    })
    if quoted:
        return '"' + text.replace('"', '""') + '"'
    return text


def geojson_point(lat, lon):
    return json.dumps({"type": "Point", "coordinates": [lon, lat]})
