import logging
import time
from collections import OrderedDict
from typing import Callable, Protocol

from netrate.data.network_throughput import InterfaceState, RateRecord, Sample
from netrate.util import conversion
from netrate.util.network import INTERFACES_MAXIMUM_COUNT

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1


class StatisticsReader(Protocol):
    def read(self) -> list[Sample]: ...


class Renderer(Protocol):
    def render(self, records: list[RateRecord]) -> None: ...


class InterfaceTable:
    """
    Interface states keyed by name, bounded to a fixed capacity.
    """

    def __init__(self, capacity: int = INTERFACES_MAXIMUM_COUNT):
        self.capacity = capacity
        self._states: OrderedDict[str, InterfaceState] = OrderedDict()

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, interface: object) -> bool:
        return interface in self._states

    def get(self, interface: str) -> InterfaceState | None:
        return self._states.get(interface)

    def reconcile(self, samples: list[Sample]) -> list[InterfaceState]:
        """
        Store the latest counters of every sampled interface and return their
        states in sample order. The last stored counters become the previous
        ones, unseen interfaces start from zero and interfaces missing from
        the samples are dropped.
        """
        states: OrderedDict[str, InterfaceState] = OrderedDict()
        for sample in samples:
            if sample.interface in states:
                logger.warning(f"ignoring duplicate interface {sample.interface}")
                continue
            if len(states) >= self.capacity:
                logger.warning(f"table full, ignoring interface {sample.interface}")
                break

            state = self.get(sample.interface)
            if state is None:
                logger.info(f"new interface {sample.interface}")
                state = InterfaceState(interface=sample.interface)
            else:
                state.previous_r_bytes = state.current_r_bytes
                state.previous_t_bytes = state.current_t_bytes

            state.current_r_bytes = sample.r_bytes
            state.current_t_bytes = sample.t_bytes
            states[sample.interface] = state

        for interface in self._states.keys() - states.keys():
            logger.info(f"interface {interface} is gone")

        self._states = states
        return list(states.values())


def counter_delta(interface: str, current: int, previous: int) -> int:
    """
    Bytes counted since the previous tick. A counter that went backwards
    (interface reset, counter overflow, driver reload) yields zero.
    """
    if current < previous:
        logger.debug(
            f"counter of {interface} went from {previous} to {current}, clamping to 0"
        )
        return 0
    return current - previous


def compute_rates(state: InterfaceState) -> RateRecord:
    # The tick is one second, so the byte delta is the byte rate
    received = counter_delta(
        state.interface, state.current_r_bytes, state.previous_r_bytes
    )
    transmitted = counter_delta(
        state.interface, state.current_t_bytes, state.previous_t_bytes
    )

    return RateRecord(
        interface=state.interface,
        received_bits=conversion.scale_rate(received * 8),
        received_bytes=conversion.scale_rate(received),
        transmitted_bits=conversion.scale_rate(transmitted * 8),
        transmitted_bytes=conversion.scale_rate(transmitted),
    )


class SamplingLoop:
    """
    Sample the interface counters once per tick and hand the resulting rates
    to a renderer, forever.

    A ReadError from the reader is not handled here; it ends the loop.
    """

    def __init__(
        self,
        reader: StatisticsReader,
        renderer: Renderer,
        interval: float = TICK_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.reader = reader
        self.renderer = renderer
        self.interval = interval
        self.sleep = sleep
        self.table = InterfaceTable()

    def tick(self) -> list[RateRecord]:
        samples = self.reader.read()
        states = self.table.reconcile(samples)
        records = [compute_rates(state) for state in states]
        logger.debug(f"computed rates for {len(records)} interfaces")
        self.renderer.render(records)
        return records

    def run(self):
        logger.info(f"sampling every {self.interval} second(s)")
        while True:
            self.tick()
            self.sleep(self.interval)
