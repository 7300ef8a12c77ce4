"""Pre-compiled regex patterns shared by the query layer and the validator.

Usage:
    from utils.patterns import COUNTRY_CODE, ISO_DATE

    if COUNTRY_CODE.match(code):
        ...
"""

import re

# Canonical country codes: two or three uppercase letters (BW, US, ZAF)
COUNTRY_CODE = re.compile(r'^[A-Z]{2,3}$')

# Leading ISO-8601 calendar date; anything after the day (time, zone) is ignored
ISO_DATE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})')

# Separator between the two codes of a relationship key ("BW-US")
RELATIONSHIP_KEY_SEPARATOR = re.compile(r'\s*-\s*')
