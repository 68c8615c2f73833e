from __future__ import annotations
import re
from datetime import datetime, timedelta
from typing import Optional

from .models import Timestamp, UNPARSEABLE

MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

# MMM DD HH:MM:SS at the very start of the line, e.g. "Feb 15 11:40:15".
SYSLOG_RE = re.compile(
    r"^(?P<stamp>(?P<mon>[A-Za-z]{3}) (?P<day>[0-3][0-9]| [1-9]) "
    r"(?P<hh>[0-9]{2}):(?P<mm>[0-9]{2}):(?P<ss>[0-9]{2}))(?=\s|$)"
)
# Ten ASCII digits and a space: seconds since the epoch.
EPOCH_RE = re.compile(r"^(?P<epoch>[0-9]{10}) ")

# A syslog stamp further ahead of "now" than this belongs to last year.
FUTURE_TOLERANCE = timedelta(days=1)


class TimestampExtractor:
    """Reads the leading timestamp of a log line.

    Syslog stamps carry no year. They are placed in the year of ``now`` unless
    that lands more than a day in the future, in which case the previous year
    is used (a December entry read in early January). Times are local.
    """

    def extract(self, line: str, now: float) -> Timestamp:
        ts = self._syslog(line, now)
        if ts is not None:
            return ts
        ts = self._epoch(line)
        if ts is not None:
            return ts
        return UNPARSEABLE

    def _syslog(self, line: str, now: float) -> Optional[Timestamp]:
        m = SYSLOG_RE.match(line)
        if not m:
            return None
        mon = m.group("mon").lower()
        if mon not in MONTHS:
            return None
        fields = (
            MONTHS.index(mon) + 1,
            int(m.group("day")),
            int(m.group("hh")),
            int(m.group("mm")),
            int(m.group("ss")),
        )
        reference = datetime.fromtimestamp(now)
        try:
            when = datetime(reference.year, *fields)
            if when > reference + FUTURE_TOLERANCE:
                when = datetime(reference.year - 1, *fields)
        except ValueError:
            # Feb 30, 25:00:00, or Feb 29 rolled back into a common year.
            return UNPARSEABLE
        return Timestamp(display=m.group("stamp"), epoch=int(when.timestamp()))

    def _epoch(self, line: str) -> Optional[Timestamp]:
        m = EPOCH_RE.match(line)
        if not m:
            return None
        epoch = int(m.group("epoch"))
        return Timestamp(display=datetime.fromtimestamp(epoch).ctime(), epoch=epoch)
