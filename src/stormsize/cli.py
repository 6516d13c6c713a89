"""Command-line interface for storm pipe sizing.

This module provides the main CLI interface using Click for sizing storm
pipe segments exported from a host model and writing the final diameters
to a JSON file the host can apply.
"""

import json
import logging
import traceback
from pathlib import Path

import click

from .analyze import ClassifierParams, ConnectivityFlowOrder, ElevationFlowOrder, SegmentClassifier
from .config import ConfigurationHandler, create_sample_config
from .io import JsonExporter, SegmentJsonReader
from .models import SizingReport
from .processor import StormPipeSizer
from .protocols import IFlowOrder
from .tables import IPC_CODE_TABLES


@click.command(name="size")
@click.argument(
    "segments_file",
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--tables",
    "-t",
    type=click.Path(exists=True, path_type=Path),
    help="JSON configuration with the code sizing tables (Default IPC)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output JSON file path",
)
@click.option(
    "--flow-unit",
    type=click.Choice(["GPM", "CFS"], case_sensitive=False),
    default=None,
    help="Flow unit of the segment file, overrides its 'FlowUnit'",
)
@click.option(
    "--ordering",
    type=click.Choice(["elevation", "connectivity"], case_sensitive=False),
    default="elevation",
    help="How the direction of flow is determined. (Default elevation)",
)
@click.option(
    "--tolerance",
    type=float,
    default=0.01,
    help="Maximum endpoint distance for connectivity ordering",
)
@click.option(
    "--strict",
    type=bool,
    is_flag=True,
    flag_value=True,
    help="Fail on segments without slope and endpoints. (Default False)",
)
@click.option(
    "--verbose",
    "-v",
    type=bool,
    is_flag=True,
    flag_value=True,
    help="Print details and debug logging. (Default False)",
)
def size_pipes(
    segments_file: Path,
    tables: Path | None,
    output: Path | None,
    flow_unit: str | None,
    ordering: str,
    tolerance: float,
    strict: bool,
    verbose: bool,
) -> None:
    """Size storm pipes and enforce no reductions in the direction of flow.

    Horizontal drains are sized by flow and slope, vertical leaders by
    flow only. Afterwards no pipe downstream may be smaller than one
    upstream.

    Arguments:
        SEGMENTS_FILE: JSON file with the storm pipe segments
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if output is None:
        output = segments_file.with_suffix(".sized.json")

    click.echo(f"Sizing storm pipes: {segments_file.name}")
    try:
        code_tables = IPC_CODE_TABLES
        if tables is not None:
            if verbose:
                click.echo(f"Loading code tables from: {tables.resolve().as_posix()}")
            code_tables = ConfigurationHandler(tables).load_config()

        flow_order: IFlowOrder = ElevationFlowOrder()
        if ordering.lower() == "connectivity":
            flow_order = ConnectivityFlowOrder(tolerance=tolerance)

        sizer = StormPipeSizer(
            tables=code_tables,
            classifier=SegmentClassifier(ClassifierParams(strict=strict)),
            flow_order=flow_order,
        )
        reader = SegmentJsonReader(segments_file, flow_unit=flow_unit)
        report = sizer.size_from(reader)
        _print_sizing_statistic(report)

        if verbose:
            _print_results(report)

        exporter = JsonExporter(output)
        sizer.export(report, exporter)
        click.echo(f"Results written to: {output}")

    except Exception as e:
        message = f"Sizing failed: {e}"
        if verbose:
            message += "\n" + traceback.format_exc()
        raise click.ClickException(message) from e


def _print_sizing_statistic(report: SizingReport) -> None:
    header_line = f"{'Total':>8} {'Sized':>8} {'Skipped':>8} {'Horiz.':>8} {'Vert.':>8} {'Raised':>8}"
    header_length = len(header_line)
    click.echo("\n" + "=" * header_length)
    click.echo("SIZING STATISTICS")
    click.echo("=" * header_length)
    click.echo(header_line)
    click.echo("-" * header_length)
    stats = report.get_statistics()
    click.echo(
        f"{stats['total']:>8} {stats['sized']:>8} {stats['skipped']:>8} "
        f"{stats['horizontal']:>8} {stats['vertical']:>8} {stats['raised']:>8}"
    )
    click.echo("-" * header_length)


def _print_results(report: SizingReport) -> None:
    header_line = f"{'Segment':<20} {'Type':<11} {'Flow GPM':>10} {'Slope':>8} {'Req. in':>8} {'Final in':>9}"
    click.echo("\n" + header_line)
    click.echo("-" * len(header_line))
    for result in report.results:
        click.echo(
            f"{str(result.identity):<20} {result.orientation.value:<11} {result.flow:>10.1f} "
            f"{result.slope:>8.4f} {result.required_diameter:>8g} {result.final_diameter:>9g}"
        )


@click.group()
@click.version_option()
def main() -> None:
    """Storm pipe sizer per plumbing code tables.

    This tool sizes storm drainage pipes exported from a building model
    and writes the final diameters in JSON format for the model to apply.
    """
    pass


@main.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def create_config(config_file: Path) -> None:
    """Create a code table configuration with the IPC reference tables.

    Parameters
    ----------
    config_file
        Path to the JSON configuration file
    """
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(create_sample_config(), f, indent=2, ensure_ascii=False)

        click.echo(f"Sample configuration created: {config_file}")
        click.echo("Edit this file to match the tables of your jurisdiction.")

    except OSError as e:
        raise click.ClickException(f"Cannot create configuration file: {e}") from e


main.add_command(size_pipes)


if __name__ == "__main__":
    main()
