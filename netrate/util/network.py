import logging
import sys
from typing import Iterable

import psutil
from dacite import Config, DaciteError, from_dict
from netrate.data.network_throughput import Sample

logger = logging.getLogger(__name__)

NETWORK_STATISTICS_FILE_NAME = "/proc/net/dev"

# Column labels, not data
HEADER_LINES = 2

# Maximum amount of interfaces to monitor at the same time
INTERFACES_MAXIMUM_COUNT = 32

# A 16 byte name buffer minus its terminator
INTERFACE_NAME_LENGTH = 15

# Transmitted bytes is the ninth counter after the name
TRANSMITTED_BYTES_FIELD = 8


class ReadError(Exception):
    """
    The interface statistics could not be read.
    """


class SourceUnavailable(ReadError):
    def __init__(self, source: str, reason: str | None = None):
        self.source = source
        self.reason = reason
        message = f'Couldn\'t open "{source}"'
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def _truncate_name(name: str) -> str:
    if len(name) > INTERFACE_NAME_LENGTH:
        logger.debug(f"truncating interface name {name!r}")
        return name[:INTERFACE_NAME_LENGTH]
    return name


def parse_line(line: str) -> Sample | None:
    """
    Parse one /proc/net/dev interface line, returning None if it is malformed.
    """
    name, separator, rest = line.partition(":")
    name = name.strip()
    if not separator or not name or any(c.isspace() for c in name):
        return None

    values = rest.split()
    if len(values) <= TRANSMITTED_BYTES_FIELD:
        return None

    received, transmitted = values[0], values[TRANSMITTED_BYTES_FIELD]
    if not (received.isdigit() and transmitted.isdigit()):
        return None

    try:
        return from_dict(
            data_class=Sample,
            data={
                "interface": _truncate_name(name),
                "r_bytes": received,
                "t_bytes": transmitted,
            },
            config=Config(cast=[int]),
        )
    except (DaciteError, ValueError):
        return None


def parse_statistics(lines: Iterable[str]) -> list[Sample]:
    """
    Parse the contents of /proc/net/dev into samples, in source order.

    The two header lines are skipped, malformed lines are logged and skipped,
    and parsing stops once INTERFACES_MAXIMUM_COUNT interfaces were found.
    """
    samples: list[Sample] = []
    for number, line in enumerate(lines, start=1):
        if number <= HEADER_LINES:
            continue
        if not line.strip():
            continue

        sample = parse_line(line)
        if sample is None:
            logger.warning(f"skipping malformed line {number}: {line.rstrip()!r}")
            continue

        samples.append(sample)
        if len(samples) >= INTERFACES_MAXIMUM_COUNT:
            break

    return samples


class ProcNetDevReader:
    """
    Read per-interface byte counters from the Linux /proc/net/dev file.
    """

    def __init__(self, filename: str = NETWORK_STATISTICS_FILE_NAME):
        self.filename = filename

    def read(self) -> list[Sample]:
        # Opened fresh on every call, the file may come and go
        try:
            with open(self.filename, "r", encoding="utf-8", errors="replace") as fh:
                return parse_statistics(fh)
        except OSError as e:
            raise SourceUnavailable(source=self.filename, reason=e.strerror) from e


class PsutilReader:
    """
    Read per-interface byte counters through psutil, for platforms without
    /proc/net/dev.
    """

    filename = "psutil.net_io_counters"

    def read(self) -> list[Sample]:
        try:
            counters = psutil.net_io_counters(pernic=True)
        except OSError as e:
            raise SourceUnavailable(source=self.filename, reason=str(e)) from e

        samples: list[Sample] = []
        for name, nic in counters.items():
            if len(samples) >= INTERFACES_MAXIMUM_COUNT:
                break
            samples.append(
                Sample(
                    interface=_truncate_name(name),
                    r_bytes=nic.bytes_recv,
                    t_bytes=nic.bytes_sent,
                )
            )
        return samples


def get_reader(platform: str = sys.platform) -> ProcNetDevReader | PsutilReader:
    if platform.startswith("linux"):
        return ProcNetDevReader()
    return PsutilReader()
