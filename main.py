import sys
import click
import logging
from time import time
from railroute import StationGraph, load_schedule, report_all
from railroute.report import TextReporter, JsonReporter

logger = logging.getLogger('main')


@click.command()
@click.argument('schedule_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'fmt', type=click.Choice(['text', 'json']), default='text')
@click.option('--source', 'sources', multiple=True, help='Only route from these stations')
@click.option('--progress', is_flag=True)
@click.option('--debug', is_flag=True)
def run(schedule_path, fmt, sources, progress, debug):
    """
    Prints the least-cost route between every pair of stations.

    Example params:
    schedule_path = 'data/data.xml'
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, stream=sys.stderr)
    START = time()

    logger.info('Loading schedule...')
    legs = load_schedule(schedule_path)

    logger.info('Building station graph...')
    graph = StationGraph.from_legs(legs)
    if debug:
        logger.debug('Station graph:\n{}'.format(graph))

    reporter = TextReporter(sys.stdout) if fmt == 'text' else JsonReporter()
    report_all(graph, reporter, sources=list(sources) or None, progress=progress)
    if fmt == 'json':
        reporter.dump(sys.stdout)
    logger.info('Total run time: {}s'.format(time() - START))


if __name__ == '__main__':
    run()
