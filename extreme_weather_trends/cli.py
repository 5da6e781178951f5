"""Console script for extreme_weather_trends."""
import logging
import os
import sys

import click

from extreme_weather_trends.exceptions import SchemaError, ModelFitError
from extreme_weather_trends.extreme_weather_trends import run_pipeline


def setup_logging():
    """Configure logging for the pipeline"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


@click.command()
@click.argument('annual_csv', type=click.Path(exists=True, dir_okay=False))
@click.argument('daily_csv', type=click.Path(exists=True, dir_okay=False))
@click.argument('figdir', type=click.Path(file_okay=False))
def main(annual_csv, daily_csv, figdir):
    """Chart long-run trends in extreme temperature and precipitation days."""
    setup_logging()

    try:
        os.makedirs(figdir, exist_ok=True)
        saved = run_pipeline(annual_csv, daily_csv, figdir)
    except (SchemaError, ModelFitError, OSError) as e:
        raise click.ClickException(str(e))

    click.echo('Wrote %i files to %s' % (len(saved), figdir))
    return 0


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
