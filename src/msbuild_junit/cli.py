"""
Command-line interface for the MSBuild JUnit logger.
"""

import logging
import sys
from typing import Optional

import click

from .config import ConfigurationError, load_config, validate_config
from .exceptions import BuildLogReadError, ReportWriteError
from .junit_logger import JunitLogger
from .msbuild_log import read_build_log, replay_build_log
from .reporting import ConsoleReporter

logger = logging.getLogger(__name__)


@click.command()
@click.argument("build_log", default="-", type=click.Path(dir_okay=False, allow_dash=True))
@click.option(
    "--parameters",
    "-p",
    type=str,
    help="Logger parameter string: the path of the JUnit XML report",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--summary/--no-summary",
    default=True,
    help="Print a console summary after writing the report",
)
@click.option(
    "--ci",
    is_flag=True,
    help="Exit with status 1 when the build produced warnings or errors",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level",
)
def main(
    build_log: str,
    parameters: Optional[str],
    config: Optional[str],
    summary: bool,
    ci: bool,
    log_level: str,
) -> None:
    """
    MSBuild JUnit Logger - Convert MSBuild diagnostics into a JUnit XML report.

    BUILD_LOG is a saved MSBuild console log; "-" (the default) reads stdin.

    Examples:

      # Convert a saved log
      msbuild-junit build.log --parameters results/build.xml

      # Pipe a build straight through
      msbuild App.sln | msbuild-junit -p build.xml

      # Fail the CI step on any diagnostic
      msbuild-junit build.log -p build.xml --ci
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        logger.info("Loading configuration...")
        logger_config = load_config(config, parameters=parameters)

        errors = validate_config(logger_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        junit_logger = JunitLogger(logger_config)

        lines = read_build_log(build_log)
        stats = replay_build_log(lines, junit_logger)
        logger.info(
            "Replayed %d log lines (%d warnings, %d errors)",
            stats.lines,
            stats.warnings,
            stats.errors,
        )

        report_summary = junit_logger.shutdown()
        click.echo(f"Report written to: {logger_config.output}")

        if summary:
            click.echo(ConsoleReporter().generate(report_summary))

        sys.exit(1 if ci and not report_summary.success else 0)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except BuildLogReadError as e:
        logger.error("Build log error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ReportWriteError as e:
        logger.error("Report error: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
