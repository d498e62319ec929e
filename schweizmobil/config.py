"""Configuration constants for SwitzerlandMobility route downloads."""

# Data source
BASE_URL = 'https://map.schweizmobil.ch/api/4/'
LANG_CODE = 'en'
ROUTE_DETAILS_PATH = 'route_or_segment/hike/{route_number}/0'
GEOMETRY_PATH = 'query/featuresmultilayers'
DEFAULT_TIMEOUT = None  # seconds; None waits as long as the transport does

# GPX output
GPX_VERSION = '1.1'
GPX_NAMESPACE = 'http://www.topografix.com/GPX/1/1'
GPX_CREATOR = 'schweizmobil-gpx'
GPX_EXTENSION = '.gpx'
MAP_EXTENSION = '.html'

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
