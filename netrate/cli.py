import logging
import sys
import time

import click
from netrate.render import TerminalRenderer
from netrate.sampling import TICK_INTERVAL, SamplingLoop
from netrate.util import log, network, system

context_settings = dict(help_option_names=["-h", "--help"])
logger = logging.getLogger(__name__)


def fatal(message: str):
    logger.error(message)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(
    name="netrate",
    help="Display network interfaces transmission and reception speed",
    context_settings=context_settings,
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print the output and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(test: bool, debug: bool):
    logfile = system.get_cache_directory() / "netrate.log"
    _ = log.configure(debug=debug, name="netrate", logfile=logfile)

    reader = network.get_reader()
    logger.info(f"entering, reading {reader.filename}")

    loop = SamplingLoop(
        reader=reader,
        renderer=TerminalRenderer(clear=not test),
        sleep=time.sleep,
    )

    try:
        if test:
            _ = loop.table.reconcile(reader.read())
            time.sleep(TICK_INTERVAL)
            _ = loop.tick()
            return
        loop.run()
    except network.ReadError as e:
        fatal(str(e))
    except KeyboardInterrupt:
        logger.info("interrupted, exiting")


if __name__ == "__main__":
    main()
