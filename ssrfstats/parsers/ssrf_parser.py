"""Parser for Subsurface XML dive log exports (.ssrf).

Layout of the parts that are read:
    <divelog>
      <divesites><site uuid=".." name=".." gps=".." description=".."><notes/></site>*</divesites>
      <dives>
        <trip time=".." location=".."><dive ..>*</trip>*
        <dive number=".." tags="a, b" divesiteid=".." date="YYYY-MM-DD" time="HH:MM:SS"
              duration="M:SS min" invalid="1">
          <buddy>A, B</buddy>
          <cylinder size="12.0 l" workpressure=".." .. />*
          <divecomputer model=".."><depth max="30.5 m" mean="18.2 m"/><temperature water="12.0 C"/></divecomputer>
        </dive>*
      </dives>
    </divelog>

Dates and times are strict: a malformed value fails the whole parse.
Depths and temperatures are lenient: a value with the wrong unit suffix is
logged and read as zero.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime, time
from pathlib import Path

from ssrfstats.models.core import Cylinder, Dive, DiveComputer, DiveLog, DiveSite, Trip

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%d"
_TIME_FORMAT = "%H:%M:%S"
# Zero-padded fields; the hour may be a single digit
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_TIME_RE = re.compile(r"\d{1,2}:\d{2}:\d{2}")
_DEPTH_SUFFIX = " m"
_TEMPERATURE_SUFFIX = " C"
_TAG_SEPARATOR = ", "


class DiveLogParseError(ValueError):
    """Raised when an export is not well-formed or has a malformed date/time."""


def parse_ssrf_file(path: Path) -> DiveLog:
    """Parse an .ssrf file into a DiveLog.

    Raises:
        OSError: the file cannot be opened or read.
        DiveLogParseError: the content is not a valid dive log.
    """
    with open(path, "rb") as f:
        raw = f.read()
    return parse_ssrf(raw)


def parse_ssrf(raw: bytes | str) -> DiveLog:
    """Parse the text of an .ssrf export."""
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise DiveLogParseError(f"Malformed XML: {e}") from e

    if root.tag != "divelog":
        raise DiveLogParseError(f"Expected <divelog> root element, found <{root.tag}>")

    log = DiveLog()
    divesites = root.find("divesites")
    if divesites is not None:
        log.sites = [_parse_site(el) for el in divesites.findall("site")]

    dives = root.find("dives")
    if dives is not None:
        log.dives = [_parse_dive(el) for el in dives.findall("dive")]
        log.trips = [_parse_trip(el) for el in dives.findall("trip")]

    logger.debug(log.summary())
    return log


def parse_date(value: str) -> date:
    if not _DATE_RE.fullmatch(value):
        raise DiveLogParseError(f"Invalid date {value!r}: expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, _DATE_FORMAT).date()
    except ValueError as e:
        raise DiveLogParseError(f"Invalid date {value!r}: {e}") from e


def parse_time(value: str) -> time:
    if not _TIME_RE.fullmatch(value):
        raise DiveLogParseError(f"Invalid time {value!r}: expected HH:MM:SS")
    try:
        return datetime.strptime(value, _TIME_FORMAT).time()
    except ValueError as e:
        raise DiveLogParseError(f"Invalid time {value!r}: {e}") from e


def parse_depth(value: str, default: float = 0.0) -> float:
    """Parse "<float> m"; other shapes are logged and read as default."""
    if not value.endswith(_DEPTH_SUFFIX):
        logger.warning("Invalid depth: %s", value)
        return default
    return _leading_float(value)


def parse_temperature(value: str, default: float = 0.0) -> float:
    """Parse "<float> C"; other shapes are logged and read as default."""
    if not value.endswith(_TEMPERATURE_SUFFIX):
        logger.warning("Invalid water temperature: %s", value)
        return default
    return _leading_float(value)


def parse_tags(value: str) -> list[str]:
    return value.split(_TAG_SEPARATOR)


def _leading_float(value: str) -> float:
    try:
        return float(value.split(" ")[0])
    except ValueError:
        return 0.0


def _parse_site(el: ET.Element) -> DiveSite:
    return DiveSite(
        uuid=el.get("uuid", ""),
        name=el.get("name", ""),
        gps=el.get("gps", ""),
        description=el.get("description", ""),
        notes=el.findtext("notes", default=""),
    )


def _parse_trip(el: ET.Element) -> Trip:
    return Trip(
        time=el.get("time", ""),
        location=el.get("location", ""),
        dives=[_parse_dive(d) for d in el.findall("dive")],
    )


def _parse_dive(el: ET.Element) -> Dive:
    dive = Dive(
        number=el.get("number", ""),
        raw_duration=el.get("duration", ""),
        buddy=el.findtext("buddy", default=""),
        cylinders=[_parse_cylinder(c) for c in el.findall("cylinder")],
        dive_site_id=el.get("divesiteid", ""),
        invalid=el.get("invalid", ""),
    )

    # Attributes that are absent keep their defaults
    raw_date = el.get("date")
    if raw_date is not None:
        dive.dive_date = parse_date(raw_date)
    raw_time = el.get("time")
    if raw_time is not None:
        dive.dive_time = parse_time(raw_time)
    raw_tags = el.get("tags")
    if raw_tags is not None:
        dive.tags = parse_tags(raw_tags)

    # Later computers overwrite the readings of earlier ones
    for computer in el.findall("divecomputer"):
        _merge_dive_computer(dive.dive_computer, computer)
    return dive


def _parse_cylinder(el: ET.Element) -> Cylinder:
    return Cylinder(
        size=el.get("size", ""),
        work_pressure=el.get("workpressure", ""),
        description=el.get("description", ""),
        o2=el.get("o2", ""),
        he=el.get("he", ""),
        start=el.get("start", ""),
        end=el.get("end", ""),
        depth=el.get("depth", ""),
    )


def _merge_dive_computer(computer: DiveComputer, el: ET.Element) -> None:
    if "model" in el.attrib:
        computer.model = el.get("model")
    for depth in el.findall("depth"):
        if "max" in depth.attrib:
            computer.max_depth = parse_depth(depth.get("max"), default=computer.max_depth)
        if "mean" in depth.attrib:
            computer.mean_depth = parse_depth(depth.get("mean"), default=computer.mean_depth)
    for temperature in el.findall("temperature"):
        if "water" in temperature.attrib:
            computer.water_temperature = parse_temperature(
                temperature.get("water"), default=computer.water_temperature
            )
