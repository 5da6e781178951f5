import logging

import numpy as np
import pandas as pd
import patsy
import statsmodels.api as sm

from extreme_weather_trends.config import DEFAULT_REPORT
from extreme_weather_trends.exceptions import ModelFitError

logger = logging.getLogger(__name__)

# Centering only conditions the fit; log(E[days]) is still linear in year
TREND_FORMULA = 'days ~ center(year)'


class PoissonTrend(object):
    """Fitted log-linear trend in annual exceedance counts for one series."""

    def __init__(self, series, result, design_info, years):
        self.series = series
        self.result = result
        self.design_info = design_info
        self.years = years

    @property
    def slope(self):
        """Change in log(expected days) per year."""
        return float(self.result.params.iloc[1])

    @property
    def change_per_decade(self):
        """Multiplicative change in expected days over ten years."""
        return float(np.exp(10*self.slope))

    def predict(self, years):
        """Expected number of days (not rounded) for each year in `years`."""
        new = pd.DataFrame({'year': np.asarray(years, dtype=float)})
        X = patsy.build_design_matrices([self.design_info], new, return_type='dataframe')[0]
        return np.asarray(self.result.predict(X))


def fit_poisson_trend(years, counts, series=''):
    """Fit a Poisson regression (log link) of annual counts on year.

    Parameters
    ----------
    years : array-like
        Year of each observation
    counts : array-like
        Non-negative number of days in each year
    series : str
        Exceedance code, used in error messages

    Returns
    -------
    trend : PoissonTrend
        The fitted model

    Raises
    ------
    ModelFitError
        If the series is degenerate or the fit does not converge
    """

    df = pd.DataFrame({'year': np.asarray(years, dtype=float),
                       'days': np.asarray(counts, dtype=float)}).dropna()

    if df['year'].nunique() < 2:
        raise ModelFitError(series, 'need at least two distinct years, found %i' % df['year'].nunique())
    if (df['days'] < 0).any():
        raise ModelFitError(series, 'counts must be non-negative')
    if (df['days'] == 0).all():
        raise ModelFitError(series, 'all counts are zero')

    y, X = patsy.dmatrices(TREND_FORMULA, df, return_type='dataframe')

    try:
        result = sm.GLM(y, X, family=sm.families.Poisson()).fit()
    except (ValueError, np.linalg.LinAlgError) as e:
        raise ModelFitError(series, str(e))

    if not result.converged:
        raise ModelFitError(series, 'IRLS did not converge')
    if not np.all(np.isfinite(result.params)):
        raise ModelFitError(series, 'non-finite coefficients')

    return PoissonTrend(series, result, X.design_info, df['year'].values)


def fit_series_trends(long_df, codes):
    """Fit one Poisson trend per exceedance series.

    Parameters
    ----------
    long_df : pandas.DataFrame
        Columns year, datatype, value
    codes : sequence of str
        Series to fit

    Returns
    -------
    fits : dict
        Maps each code to its PoissonTrend, in the order of `codes`
    """

    fits = {}
    for code in codes:
        this_df = long_df[long_df['datatype'] == code]
        fits[code] = fit_poisson_trend(this_df['year'].values, this_df['value'].values, series=code)
        logger.info('%s: x%0.3f per decade over %i years', code, fits[code].change_per_decade, len(this_df))

    return fits


def decadal_predictions(fits, anchor_years=DEFAULT_REPORT.anchor_years):
    """Evaluate each fitted trend at the decadal anchor years.

    Returns
    -------
    predictions : pandas.DataFrame
        Columns year, series, predicted; series in the order of `fits`
    """
    anchor_years = np.asarray(anchor_years)
    frames = []
    for code, trend in fits.items():
        frames.append(pd.DataFrame({'year': anchor_years,
                                    'series': code,
                                    'predicted': trend.predict(anchor_years)}))

    if not frames:
        return pd.DataFrame(columns=['year', 'series', 'predicted'])

    return pd.concat(frames, ignore_index=True)
