import logging

import pytest
from netrate.data.network_throughput import Sample

HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
)


def interface_line(name: str, received: int, transmitted: int) -> str:
    return (
        f"{name:>6}: {received:>8} 10 0 0 0 0 0 0 "
        f"{transmitted:>8} 20 0 0 0 0 0 0\n"
    )


def proc_net_dev(interfaces: list[tuple[str, int, int]]) -> str:
    return HEADER + "".join(interface_line(*entry) for entry in interfaces)


class FakeReader:
    def __init__(self, ticks: list[list[tuple[str, int, int]]]):
        self.ticks = list(ticks)
        self.calls = 0

    def read(self) -> list[Sample]:
        self.calls += 1
        entries = self.ticks.pop(0)
        return [Sample(interface=n, r_bytes=r, t_bytes=t) for n, r, t in entries]


class RecordingRenderer:
    def __init__(self):
        self.rendered = []

    def render(self, records):
        self.rendered.append(records)


@pytest.fixture
def write_statistics(tmp_path):
    def _write(interfaces: list[tuple[str, int, int]]):
        path = tmp_path / "dev"
        path.write_text(proc_net_dev(interfaces))
        return path

    return _write


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture(autouse=True)
def reset_netrate_logger():
    yield
    logger = logging.getLogger("netrate")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
