import logging

import numpy as np
import pandas as pd

from extreme_weather_trends.config import HEAVY_RAIN_CODE, DAILY_PRECIP_CODE, DEFAULT_REPORT
from extreme_weather_trends.exceptions import SchemaError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('date', 'datatype', 'value')
UNUSED_COLUMNS = ('station', 'attributes')


def add_year_column(df):
    """Parse the date column and add an integer year.

    Parameters
    ----------
    df : pandas.DataFrame
        Dataframe containing a column, 'date', with YYYY-MM-DD information

    Returns
    -------
    df : pandas.DataFrame
        Copy of the dataframe with 'date' as datetimes and an additional 'year' column
    """

    try:
        dt = pd.to_datetime(df['date'], format='%Y-%m-%d', exact=False)
    except (ValueError, TypeError) as e:
        raise SchemaError('could not parse date column: %s' % e)

    if dt.isna().any():
        rows = list(df.index[dt.isna()][:10])
        raise SchemaError('missing dates in rows: %s' % ', '.join(str(r) for r in rows))

    return df.assign(date=dt, year=dt.dt.year.astype(int))


def load_observations(fname, required=REQUIRED_COLUMNS):
    """Load a station record (annual exceedance counts or daily values).

    Parameters
    ----------
    fname : str or file-like
        Delimited file with at least the required columns
    required : tuple
        Column names that must be present

    Returns
    -------
    df : pandas.DataFrame
        Columns date, datatype, value, year
    """

    df = pd.read_csv(fname)

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError('%s is missing columns: %s' % (fname, ', '.join(missing)))

    df = df.drop(columns=[c for c in UNUSED_COLUMNS if c in df.columns])
    df = df.assign(datatype=df['datatype'].astype(str).str.strip(),
                   value=pd.to_numeric(df['value'], errors='coerce'))
    df = add_year_column(df)

    logger.info('Loaded %i rows from %s', len(df), fname)
    return df


def series_dtype(codes):
    """Ordered categorical type with categories in the order given."""
    return pd.CategoricalDtype(categories=list(codes), ordered=True)


def pivot_annual(long_df):
    """Pivot a long table (year, datatype, value) to one row per year.

    Raises SchemaError if a (year, datatype) pair repeats.
    """
    dupes = long_df.duplicated(subset=['year', 'datatype'], keep=False)
    if dupes.any():
        pairs = long_df.loc[dupes, ['year', 'datatype']].drop_duplicates()
        listing = ', '.join('(%i, %s)' % (y, t) for y, t in pairs.itertuples(index=False))
        raise SchemaError('repeated (year, datatype) keys: %s' % listing)

    wide = long_df.pivot(index='year', columns='datatype', values='value')
    wide = wide.sort_index().reset_index()
    wide.columns = [str(c) for c in wide.columns]
    return wide


def reshape_annual(df, codes):
    """Restrict annual records to a set of exceedance codes and pivot to wide.

    Parameters
    ----------
    df : pandas.DataFrame
        Long annual table with columns year, datatype, value
    codes : sequence of str
        Exceedance codes to retain. Their order becomes the category order.

    Returns
    -------
    long_df : pandas.DataFrame
        Filtered long table; 'datatype' is an ordered categorical over codes
    wide : pandas.DataFrame
        One row per year, a 'year' column and one column per code
    """

    codes = list(codes)
    long_df = df.loc[df['datatype'].isin(codes), ['year', 'datatype', 'value']]

    present = set(long_df['datatype'])
    absent = [c for c in codes if c not in present]
    if absent:
        raise SchemaError('no rows for series: %s' % ', '.join(absent))

    long_df = long_df.assign(datatype=long_df['datatype'].astype(series_dtype(codes)))
    long_df = long_df.sort_values(['datatype', 'year']).reset_index(drop=True)

    wide = pivot_annual(long_df.assign(datatype=long_df['datatype'].astype(str)))
    # column order follows the declared code order
    wide = wide[['year'] + codes]

    logger.info('Retained %i series over %i years', len(codes), len(wide))
    return long_df, wide


def melt_annual(wide, codes):
    """Unpivot a wide annual table back to (year, datatype, value) rows.

    Cells with missing values are dropped.
    """
    codes = list(codes)
    missing = [c for c in codes if c not in wide.columns]
    if missing:
        raise SchemaError('wide table is missing series: %s' % ', '.join(missing))

    long_df = wide.melt(id_vars='year', value_vars=codes, var_name='datatype', value_name='value')
    long_df = long_df.dropna(subset=['value'])
    long_df = long_df.assign(datatype=long_df['datatype'].astype(series_dtype(codes)))

    return long_df.sort_values(['datatype', 'year']).reset_index(drop=True)


def precip_to_inches(value, factor=DEFAULT_REPORT.precip_to_inches):
    """Convert precipitation in tenths of millimeters to inches."""
    return value*factor


def count_heavy_rain_days(daily, threshold=DEFAULT_REPORT.heavy_rain_threshold_in,
                          first_year=DEFAULT_REPORT.first_daily_year,
                          factor=DEFAULT_REPORT.precip_to_inches):
    """Count days per year with precipitation at or above a threshold.

    Parameters
    ----------
    daily : pandas.DataFrame
        Daily records with columns year, datatype, value (PRCP in tenths of mm)
    threshold : float
        Threshold in inches
    first_year : int
        First year (inclusive) to count. Earlier years are dropped entirely.
    factor : float
        Multiplier from raw units to inches

    Returns
    -------
    counts : pandas.Series
        Integer counts indexed by year, including years with zero qualifying days
    """

    if not (daily['datatype'] == DAILY_PRECIP_CODE).any():
        raise SchemaError('no %s rows in daily record' % DAILY_PRECIP_CODE)

    prcp = daily.loc[(daily['datatype'] == DAILY_PRECIP_CODE) & daily['value'].notna(), ['year', 'value']]
    prcp = prcp[prcp['year'] >= first_year]

    prcp_in = precip_to_inches(prcp['value'].values, factor)
    # 508 tenths of mm is two inches, but the conversion factor lands a hair below
    heavy = (prcp_in >= threshold) | np.isclose(prcp_in, threshold)

    counts = pd.Series(heavy.astype(int), index=prcp['year'].values).groupby(level=0).sum()
    counts.index.name = 'year'
    counts.name = HEAVY_RAIN_CODE

    logger.info('Counted %i days >= %0.1f in. over %i years', int(counts.sum()), threshold, len(counts))
    return counts.astype(int)


def add_heavy_rain_days(wide, counts):
    """Left-join heavy rain day counts onto the wide annual table.

    Years absent from `counts` get zero, never a missing value.
    """
    joined = wide.merge(counts.rename(HEAVY_RAIN_CODE).reset_index(), on='year', how='left')
    joined[HEAVY_RAIN_CODE] = joined[HEAVY_RAIN_CODE].fillna(0).astype(int)

    return joined
