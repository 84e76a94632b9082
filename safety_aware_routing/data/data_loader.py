"""
Street data loading from the city open-data CSV exports.

Reads the bikeway network, sidewalk condition ratings and street lighting
poles, turns bikeway rows into ``StreetSegment`` objects and runs both
enrichment passes.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from ..config.routing_config import RoutingConfig
from .distance_utils import coordinate_distance
from .geometry_parser import parse_line_geometry
from .models import SegmentScores, StreetSegment

logger = logging.getLogger(__name__)

BIKEWAYS_FILE = 'bikeways.csv'
SIDEWALK_CONDITION_FILE = 'sidewalk-condition-rating.csv'
LIGHTING_FILE = 'street-lighting-poles.csv'


def read_records(csv_path: str) -> List[Dict[str, Any]]:
    """
    Read a semicolon-delimited open-data export into a list of row dicts.

    All cells are read as trimmed strings; rows with too many fields are
    skipped.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"Data file not found: {csv_path}")

    frame = pd.read_csv(
        csv_path,
        sep=';',
        dtype=str,
        keep_default_na=False,
        encoding='utf-8-sig',
        on_bad_lines='skip',
        skip_blank_lines=True
    )
    frame.columns = [str(c).strip() for c in frame.columns]
    # short rows leave NaN in the missing trailing fields
    frame = frame.fillna('').apply(lambda col: col.str.strip())

    logger.info(f"Read {len(frame)} records from {os.path.basename(csv_path)}")
    return frame.to_dict(orient='records')


def _parse_int(value: Any, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _parse_float(value: Any) -> Optional[float]:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if result > 0 else None


def segment_from_record(index: int, record: Mapping[str, Any],
                        config: Optional[RoutingConfig] = None) -> Optional[StreetSegment]:
    """
    Convert one bikeway row into a segment with default scores.

    Returns None when the row has no usable line geometry.
    """
    config = config or RoutingConfig()
    coords = parse_line_geometry(record.get('Geom'))
    if len(coords) < 2:
        return None

    length = _parse_float(record.get('Segment length'))
    if length is None:
        length = coordinate_distance(coords[0], coords[-1])
    elif config.segment_length_in_meters:
        length = length / 1000.0

    bikeway_type = record.get('Bikeway type') or ''
    aaa_network = (record.get('AAA Network') or '').upper() == 'YES'

    scores = SegmentScores(
        infra=config.bikeway_infra_scores.get(bikeway_type, config.default_infra_score),
        light=config.default_light_score,
        crime=config.default_crime_score,
        amenity=config.aaa_amenity_score if aaa_network else config.default_amenity_score,
        disruption=config.default_disruption_score
    )

    return StreetSegment(
        id=f"bike_{index}",
        coordinates=tuple(coords),
        length=length,
        street_name=record.get('Street name') or record.get('Bike route name') or '',
        bikeway_type=bikeway_type,
        speed_limit=_parse_int(record.get('Speed limit'), config.default_speed_limit),
        scores=scores
    )


def segments_from_records(records: Iterable[Mapping[str, Any]],
                          config: Optional[RoutingConfig] = None) -> List[StreetSegment]:
    """Convert bikeway rows to segments, skipping rows without geometry."""
    segments = []
    skipped = 0
    for index, record in enumerate(records):
        segment = segment_from_record(index, record, config)
        if segment is None:
            skipped += 1
            continue
        segments.append(segment)

    if skipped:
        logger.info(f"Skipped {skipped} bikeway records without usable geometry")
    return segments


def load_street_data(data_dir: str, config: Optional[RoutingConfig] = None) -> List[StreetSegment]:
    """
    Load and enrich all street segments from a data directory.

    Args:
        data_dir: Directory holding the three CSV exports
        config: Routing configuration

    Returns:
        Enriched street segments

    Raises:
        FileNotFoundError: If any of the CSV files is missing
    """
    from ..mapping.enrichment.segment_enricher import enrich_with_conditions, enrich_with_lighting

    config = config or RoutingConfig()
    logger.info(f"Loading street data from: {data_dir}")

    bikeways = read_records(os.path.join(data_dir, BIKEWAYS_FILE))
    conditions = read_records(os.path.join(data_dir, SIDEWALK_CONDITION_FILE))
    lighting = read_records(os.path.join(data_dir, LIGHTING_FILE))

    segments = segments_from_records(bikeways, config)
    segments = enrich_with_conditions(segments, conditions, config)
    segments = enrich_with_lighting(segments, lighting, config)

    logger.info(f"Loaded {len(segments)} street segments")
    return segments
