import click
from netrate.data.network_throughput import RateRecord
from netrate.util import conversion, wtime


def format_record(record: RateRecord, width: int = 0) -> str:
    rx_bits = conversion.network_speed(record.received_bits, bytes=False)
    rx_bytes = conversion.network_speed(record.received_bytes, bytes=True)
    tx_bits = conversion.network_speed(record.transmitted_bits, bytes=False)
    tx_bytes = conversion.network_speed(record.transmitted_bytes, bytes=True)
    return f"{record.interface.ljust(width)} : RX = {rx_bits} ({rx_bytes}), TX = {tx_bits} ({tx_bytes})"


class TerminalRenderer:
    """
    Repaint the terminal with one line per interface on every tick.
    """

    def __init__(self, clear: bool = True):
        self.clear = clear

    def render(self, records: list[RateRecord]):
        if self.clear:
            click.clear()

        max_name_length = 0
        for record in records:
            max_name_length = (
                len(record.interface)
                if len(record.interface) > max_name_length
                else max_name_length
            )

        for record in records:
            click.echo(format_record(record=record, width=max_name_length))

        click.echo("")
        click.echo(f"Last updated {wtime.get_human_timestamp()}")
        click.echo("Hit Ctrl+C to exit.")
