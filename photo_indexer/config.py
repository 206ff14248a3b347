"""
Configuration constants for the photo indexer.
"""

# --- Pipeline ---
NUM_CONSUMERS = 8
PROGRESS_DESC = "Preparing media"

# --- Date Parsing ---
# QuickTime ContentCreateDate carries its own offset, e.g. "2016:07:15 10:20:30-07:00"
CONTENT_CREATE_DATE_FORMAT = "%Y:%m:%d %H:%M:%S%z"
# QuickTime CreateDate (UTC) and all EXIF dates share this layout
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
DATE_BUCKET_FORMAT = "%Y%m%d"

# EXIF fields tried in order; the first non-empty one is used
EXIF_DATE_TAGS = [
    'create_date',
    'date_time_original',
    'modify_date',
]

# Fixed English names so index values don't depend on the process locale
DAY_NAMES = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
MONTH_NAMES = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

# --- Location ---
LATITUDE_REFS = {'N': 'North', 'S': 'South'}
LONGITUDE_REFS = {'E': 'East', 'W': 'West'}
NEGATIVE_REFS = {'South', 'West'}

# Divisor applied to the seconds term of a DMS value.
# Documents indexed by older releases used 360.
DMS_SECONDS_DENOMINATOR = 3600.0
