# -*- coding: utf-8 -*-

"""Main module.

Workflow:
(1) load annual exceedance counts and daily precipitation records
(2) keep the exceedance series of interest and pivot to one row per year
(3) count days with >= 2 inches of rain from the daily record and join on, filling missing years with zero
(4) fit a Poisson trend to each charted series and evaluate at the mid-decade anchor years
(5) label the earliest and latest decadal values on each chart
(6) draw and save the faceted and standalone charts
"""

import logging

from extreme_weather_trends.config import DEFAULT_REPORT
from extreme_weather_trends.utils import (load_observations, reshape_annual, melt_annual,
                                          count_heavy_rain_days, add_heavy_rain_days)
from extreme_weather_trends.models import fit_series_trends, decadal_predictions
from extreme_weather_trends.annotations import make_annotations
from extreme_weather_trends.plots import render_chart

logger = logging.getLogger(__name__)


def build_annual_table(annual, daily, report=DEFAULT_REPORT):
    """Wide annual table of the base series plus the derived heavy rain day count."""
    _, wide = reshape_annual(annual, report.base_codes)
    counts = count_heavy_rain_days(daily,
                                   threshold=report.heavy_rain_threshold_in,
                                   first_year=report.first_daily_year,
                                   factor=report.precip_to_inches)
    return add_heavy_rain_days(wide, counts)


def run_pipeline(annual_fname, daily_fname, figdir, report=DEFAULT_REPORT):
    """Produce every chart in `report` from the two station files.

    All trends are fit before any figure is drawn, so a bad series stops the
    run before anything is written.

    Returns
    -------
    saved : list of str
        Paths of all files written
    """

    annual = load_observations(annual_fname)
    daily = load_observations(daily_fname)

    wide = build_annual_table(annual, daily, report)

    codes = report.charted_series
    long_df = melt_annual(wide, codes)
    fits = fit_series_trends(long_df, codes)
    predictions = decadal_predictions(fits, report.anchor_years)

    saved = []
    for chart in report.charts:
        annotations = make_annotations(predictions, chart.placements)
        _, paths = render_chart(long_df, fits, annotations, chart, figdir)
        saved.extend(paths)

    return saved
