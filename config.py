# seconds in a day; legs that appear to depart
# before the previous arrival are pushed by this much
DAY_SECS = 24*60*60

# lower-bound time-delta for changing trains, in seconds.
# the next leg must depart strictly after
# the previous arrival plus this amount
MIN_CONNECTION_TIME = 5*60

# attribute names of a <TrainLeg> element
# in the TrainLegs xml schedule format,
# mapped to leg fields
XML_LEG_ATTRS = {
    'TrainId': 'leg_id',
    'DepartureStationId': 'origin',
    'ArrivalStationId': 'destination',
    'DepartureTimeString': 'departure',
    'ArrivalTimeString': 'arrival',
    'Price': 'price',
}

# leg elements, relative to the <TrainLegs> root.
# the etree parser only supports limited xpath
XML_LEG_XPATH = './TrainLeg'

# columns of a csv schedule
CSV_LEG_COLUMNS = ['leg_id', 'origin', 'destination', 'departure', 'arrival', 'price']

# decimals shown for prices in text reports
PRICE_PRECISION = 2
