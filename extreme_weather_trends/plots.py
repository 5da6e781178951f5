import logging
import os

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from extreme_weather_trends.config import DISPLAY_NAMES, SERIES_COLORS, X_LABEL, Y_LABEL

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('pdf', 'png')


def render_chart(long_df, fits, annotations, chart, figdir):
    """Draw observed counts, Poisson trend lines and decadal labels for one chart.

    One panel per series in `chart.series`, left to right. A single-series
    chart is the standalone view of the same data and fit used in the faceted
    charts.

    Parameters
    ----------
    long_df : pandas.DataFrame
        Annual counts with columns year, datatype, value
    fits : dict
        Maps series code to a fitted PoissonTrend
    annotations : pandas.DataFrame
        Labels with columns x, y, text, series
    chart : ChartConfig
        Series, limits, size and file name of the chart
    figdir : str
        Directory to write the figures to

    Returns
    -------
    fig : matplotlib.figure.Figure
        The (closed) figure
    saved : list of str
        Paths of the vector and raster files written
    """

    nseries = len(chart.series)
    with sns.axes_style('whitegrid'):
        fig, ax = plt.subplots(figsize=chart.figsize, ncols=nseries, nrows=1,
                               sharex=True, sharey=True, squeeze=False)
    ax = ax[0, :]

    for counter, code in enumerate(chart.series):
        this_ax = ax[counter]
        this_df = long_df[long_df['datatype'] == code]
        color = SERIES_COLORS.get(code, 'k')

        sns.scatterplot(x='year', y='value', data=this_df, ax=this_ax,
                        color=color, alpha=0.7, legend=False)

        # Point predictions only, no confidence ribbon
        years = np.arange(this_df['year'].min(), this_df['year'].max() + 1)
        this_ax.plot(years, fits[code].predict(years), color=color, lw=2)

        for row in annotations[annotations['series'] == code].itertuples(index=False):
            this_ax.text(row.x, row.y, row.text, ha='center', va='center', fontsize=10)

        this_ax.set_title(DISPLAY_NAMES.get(code, code), fontsize=12)
        this_ax.set_xlabel(X_LABEL)
        this_ax.set_ylabel(Y_LABEL if counter == 0 else '')
        this_ax.set_xlim(chart.xlim)
        this_ax.set_ylim(chart.ylim)

    fig.tight_layout()

    saved = []
    try:
        for ext in OUTPUT_FORMATS:
            savename = os.path.join(figdir, '%s.%s' % (chart.name, ext))
            fig.savefig(savename, dpi=chart.dpi)
            logger.info('Wrote %s', savename)
            saved.append(savename)
    finally:
        plt.close(fig)

    return fig, saved
