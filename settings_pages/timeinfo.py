"""Date, time and time zone information for the time settings page."""

from __future__ import annotations

import os
import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

NTP_UNIT_DIRS = (
    Path("/etc/systemd/ntp-units.d"),
    Path("/run/systemd/ntp-units.d"),
    Path("/usr/local/lib/systemd/ntp-units.d"),
    Path("/usr/lib/systemd/ntp-units.d"),
)

_OFFSET = re.compile(r"^(?:Z|([+-])(\d{2})(?::?(\d{2}))?)$")


class TimeDateProxy:
    """Reads time zone and NTP availability from the system configuration."""

    def __init__(
        self,
        localtime: str | os.PathLike[str] = "/etc/localtime",
        ntp_unit_dirs=NTP_UNIT_DIRS,
    ) -> None:
        self.localtime = Path(localtime)
        self.ntp_unit_dirs = tuple(Path(d) for d in ntp_unit_dirs)

    async def can_ntp(self) -> bool:
        """Return whether any NTP service unit is declared."""
        for directory in self.ntp_unit_dirs:
            if not directory.is_dir():
                continue
            for unit_list in sorted(directory.glob("*.list")):
                for line in unit_list.read_text().splitlines():
                    line = line.strip()
                    if line and not line.startswith("#"):
                        return True
        return False

    async def timezone(self) -> str:
        """Return the zone name that the localtime link points to, or ''."""
        target = os.readlink(self.localtime)
        marker = "zoneinfo/"
        index = target.find(marker)
        if index < 0:
            return ""
        return target[index + len(marker):]


def _parse_timezone(value: str) -> tzinfo | None:
    match = _OFFSET.match(value)
    if match:
        if value == "Z":
            return timezone.utc
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
        if int(minutes or 0) >= 60:
            return None
        try:
            return timezone(-delta if sign == "-" else delta)
        except ValueError:
            return None
    if not value:
        return None
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        return None


@dataclass
class TimeInfo:
    """NTP capability, configured time zone and the current time."""

    can_ntp: bool
    timezone: tzinfo
    local_time: datetime

    @classmethod
    async def load(cls, proxy) -> TimeInfo | None:
        """Query the proxy; return None if the time zone cannot be understood."""
        try:
            can_ntp = bool(await proxy.can_ntp())
        except OSError:
            can_ntp = False

        try:
            zone_name = await proxy.timezone()
        except OSError:
            zone_name = ""

        zone = _parse_timezone(zone_name or "")
        if zone is None:
            return None

        seconds = int(time.time())
        if seconds < 0:
            return None
        local_time = datetime(1970, 1, 1) + timedelta(seconds=seconds)
        return cls(can_ntp=can_ntp, timezone=zone, local_time=local_time)