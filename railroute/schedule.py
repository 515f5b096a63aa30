"""
schedule loading.

two formats are supported:
- an xml `TrainLegs` document, one `<TrainLeg>` element per service, e.g.
    <TrainLegs>
      <TrainLeg TrainId="1" DepartureStationId="A" ArrivalStationId="B"
                Price="40.5" DepartureTimeString="08:00:00" ArrivalTimeString="10:00:00"/>
    </TrainLegs>
- a csv with the columns `leg_id,origin,destination,departure,arrival,price`

clock times are 'HH:MM' or 'HH:MM:SS'.
"""

import os
import config
import logging
import pandas as pd
from .legs import make_leg
from .util import clock_to_secs
from .errors import InvalidLegError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['origin', 'destination', 'departure', 'arrival', 'price']


def load_schedule(path):
    """load a schedule file as a list of legs,
    picking the format by file extension"""
    _, ext = os.path.splitext(str(path))
    if ext.lower() == '.xml':
        legs = read_xml_schedule(path)
    else:
        legs = read_csv_schedule(path)
    logger.info('Loaded {} legs from {}'.format(len(legs), path))
    return legs


def read_xml_schedule(path_or_buf):
    # the stdlib etree parser, so lxml isn't required
    try:
        df = pd.read_xml(path_or_buf, xpath=config.XML_LEG_XPATH, parser='etree', dtype=str)
    except ValueError as e:
        # a schedule with no <TrainLeg> elements is empty, not malformed
        if 'does not return any nodes' in str(e):
            return []
        raise
    df = df.rename(columns=config.XML_LEG_ATTRS)
    return legs_from_frame(df)


def read_csv_schedule(path_or_buf):
    df = pd.read_csv(path_or_buf, dtype=str, skipinitialspace=True)
    df.columns = [c.strip() for c in df.columns]
    return legs_from_frame(df)


def legs_from_frame(df):
    """convert a dataframe of schedule records
    (one row per leg, columns as in `config.CSV_LEG_COLUMNS`)
    into legs, preserving row order"""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidLegError('Schedule is missing columns: {}'.format(', '.join(missing)))

    # fall back to row numbers if legs aren't identified
    if 'leg_id' not in df.columns:
        df = df.assign(leg_id=[str(i) for i in range(len(df))])

    legs = []
    for row in df[config.CSV_LEG_COLUMNS].itertuples(index=False):
        if any(pd.isnull(v) for v in row):
            raise InvalidLegError('Leg {}: incomplete record'.format(row.leg_id))
        try:
            dep_time = clock_to_secs(row.departure)
            arr_time = clock_to_secs(row.arrival)
        except InvalidLegError as e:
            raise InvalidLegError('Leg {}: {}'.format(row.leg_id, e))
        legs.append(make_leg(
            id=row.leg_id.strip(),
            origin=row.origin.strip(),
            destination=row.destination.strip(),
            dep_time=dep_time,
            arr_time=arr_time,
            price=row.price))
    return legs
