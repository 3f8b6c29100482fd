"""Command-line entry point.

Usage:
    tracesim -s <s> -E <E> -b <b> -t <tracefile> [-v]

    -s  number of set index bits (2**s sets)
    -E  associativity (lines per set)
    -b  number of block offset bits (2**b byte blocks)
    -t  valgrind trace to replay
    -v  print what every trace record did
"""
import logging

import click

from tracesim.data.stats_export import (
    Exporter,
    export_chart_json,
    export_chart_image,
    format_summary,
    format_verbose,
)
from tracesim.errors import TraceSimError
from tracesim.simulation import Simulation, SimulationConfig

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('-s', 'set_index_bits', type=int, help='Number of set index bits (S = 2^s is the number of sets)')
@click.option('-E', 'associativity', type=int, help='Associativity (number of lines per set)')
@click.option('-b', 'block_offset_bits', type=int, help='Number of block bits (B = 2^b is the block size)')
@click.option('-t', 'trace_file', type=click.Path(exists=True, dir_okay=False), help='Name of the valgrind trace to replay')
@click.option('-v', 'verbose', is_flag=True, help='Optional verbose flag that displays trace info')
@click.option('--strict', is_flag=True, help='Fail on malformed trace lines instead of skipping them')
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), help='Write the statistics as CSV')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False), help='Write statistics and hit-rate history as JSON')
@click.option('--chart', 'chart_path', type=click.Path(dir_okay=False), help='Plot the hit-rate history (pdf, png, svg)')
@click.option('--sample-every', type=click.IntRange(min=1), default=1, show_default=True,
              help='Records between hit-rate history samples')
@click.option('--results-file', type=click.Path(dir_okay=False), help='Write "hits misses evictions" to this file')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False), default='WARNING', show_default=True)
@click.pass_context
def main(ctx, set_index_bits, associativity, block_offset_bits, trace_file, verbose, strict,
         csv_path, json_path, chart_path, sample_every, results_file, log_level):
    """Replay a memory trace against an LRU set-associative cache."""
    logging.basicConfig(level=log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    config = SimulationConfig(
        set_index_bits=set_index_bits,
        associativity=associativity,
        block_offset_bits=block_offset_bits,
        trace_file=trace_file,
        verbose=verbose,
        strict=strict,
    )
    want_history = bool(json_path or chart_path)
    sim = Simulation(config, sample_every=sample_every if want_history else 0)

    def show(record, outcomes):
        click.echo(format_verbose(record, outcomes))

    try:
        stats = sim.run(show if config.verbose else None)
    except TraceSimError as e:
        click.echo(f"{ctx.info_name}: {e}", err=True)
        ctx.exit(1)
    finally:
        sim.close()

    if csv_path and Exporter.export_stats_csv(csv_path, stats) is None:
        click.echo(f"{ctx.info_name}: could not write {csv_path}", err=True)
    if results_file and Exporter.export_results_file(results_file, stats) is None:
        click.echo(f"{ctx.info_name}: could not write {results_file}", err=True)
    if json_path and export_chart_json(sim.hit_rate_history, stats, json_path) is None:
        click.echo(f"{ctx.info_name}: could not write {json_path}", err=True)
    if chart_path and export_chart_image(sim.hit_rate_history, chart_path) is None:
        click.echo(f"{ctx.info_name}: could not write {chart_path}", err=True)

    click.echo(format_summary(stats))


if __name__ == '__main__':
    main()
