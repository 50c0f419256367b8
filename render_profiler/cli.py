# render_profiler/cli.py - Command-line interface
"""
Command-line interface for the render trace profiler.
"""

import click
import sys
import yaml
from pathlib import Path

from render_profiler.analyzer.profile_analyzer import ProfileAnalyzer
from render_profiler.analyzer.report_generator import ReportGenerator
from render_profiler.collector.trace_loader import normalize_profile
from render_profiler.exporters.json_exporter import JSONExporter
from render_profiler.exporters.stdout import StdoutExporter
from render_profiler.utils.config import Config
from render_profiler.utils.helpers import load_trace_file
from render_profiler.utils.logger import get_logger, setup_logging


logger = get_logger(__name__)

OUTPUT_FORMATS = ['stdout', 'json', 'markdown', 'csv']


@click.group()
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']))
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.pass_context
def cli(ctx, log_level, log_file):
    """
    Render Trace Profiler

    Analyzes render profiling exports and begin/end event traces to find
    slow renders, janky screens and common performance anti-patterns.
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level, log_file=log_file)

    ctx.obj['log_level'] = log_level
    ctx.obj['log_file'] = log_file


@cli.command()
@click.argument('trace_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', 'config_file', type=click.Path(), help='Configuration file')
@click.option('--format', 'output_format', type=click.Choice(OUTPUT_FORMATS), help='Report format')
@click.option('--output', type=click.Path(dir_okay=False), help='Write the report to this file')
@click.option('--top-n', type=int, help='Number of top components to list')
@click.option('--no-color', is_flag=True, help='Disable colored console output')
@click.pass_context
def analyze(ctx, trace_file, config_file, output_format, output, top_n, no_color):
    """
    Analyze a trace file and report performance issues.

    Example:
        render-profiler analyze profile.json
        render-profiler analyze trace.json --format markdown --output report.md
        render-profiler analyze profile.json --format json --output analysis.json
    """
    try:
        cfg = Config(config_file)
    except (yaml.YAMLError, ValueError) as e:
        click.echo(f"Error: invalid config file: {e}", err=True)
        sys.exit(1)

    # Override config with CLI options
    if output_format:
        cfg.set('output.format', output_format)
    if top_n is not None:
        cfg.set('report.top_components', top_n)
    if no_color:
        cfg.set('output.use_colors', False)

    use_colors = cfg.get('output.use_colors', True)
    if not use_colors:
        setup_logging(level=ctx.obj['log_level'], log_file=ctx.obj['log_file'], use_colors=False)

    try:
        data = load_trace_file(trace_file)
        bundle = ProfileAnalyzer().analyze(data)
    except ValueError as e:
        logger.error(f"Failed to analyze {trace_file}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    report_format = cfg.get('output.format', 'stdout')
    limits = {
        'top_components': cfg.get('report.top_components', 10),
        'slowest_renders': cfg.get('report.slowest_renders', 15),
        'top_pages': cfg.get('report.top_pages', 10),
    }

    if report_format == 'stdout':
        StdoutExporter(use_colors=use_colors, **limits).print_analysis(bundle)
        return

    if report_format == 'json':
        # Without --output the analysis gets a timestamped name in output.directory
        if output:
            output_path = Path(output)
            exporter = JSONExporter(str(output_path.parent))
            written = exporter.export_analysis(bundle, output_path.name)
        else:
            exporter = JSONExporter(cfg.get('output.directory', '.'))
            written = exporter.export_analysis(bundle)
        click.echo(f"Analysis written to {written}")
        return

    generator = ReportGenerator(**limits)
    if report_format == 'markdown':
        report = generator.generate_markdown_report(bundle)
    else:
        report = generator.generate_csv_components(bundle.commits.component_stats)

    if output:
        Path(output).write_text(report, encoding='utf-8')
        click.echo(f"Report written to {output}")
    else:
        click.echo(report)


@cli.command()
@click.argument('trace_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', type=click.Path(dir_okay=False), required=True, help='Output JSON file')
def convert(trace_file, output):
    """
    Convert a begin/end event trace into render profile format.

    Canonical profiles are written back unchanged.

    Example:
        render-profiler convert trace.json --output profile.json
    """
    try:
        data = load_trace_file(trace_file)
        profile, converted = normalize_profile(data)
    except ValueError as e:
        logger.error(f"Failed to convert {trace_file}: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_path = Path(output)
    JSONExporter(str(output_path.parent)).export_profile(profile, output_path.name)

    if converted:
        click.echo(f"Converted event trace written to {output_path}")
    else:
        click.echo(f"Input is already a render profile, copied to {output_path}")


if __name__ == '__main__':
    cli(obj={})
