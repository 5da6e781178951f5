"""
Static configuration for the extreme weather frequency report.

Annotation placements are hand-tuned plot coordinates for the axis limits
given in the same chart entry. They are not derived from the data, so any
change to `ylim` or `xlim` needs the placements re-tuned as well.
"""

from dataclasses import dataclass


# Declared ordinal sequence of exceedance codes. Controls category order,
# facet order and legend order everywhere.
SERIES_ORDER = ('DT00', 'DT32', 'DX90', 'DP01', 'DP1X', 'DP2X', 'DSNW', 'DSND')

# Series present in the annual exceedance-count source
BASE_CODES = ('DX90', 'DT32', 'DT00', 'DP01', 'DP1X', 'DSNW', 'DSND')

# Derived from the daily precipitation source
HEAVY_RAIN_CODE = 'DP2X'
DAILY_PRECIP_CODE = 'PRCP'

DISPLAY_NAMES = {'DT00': 'Below Zero',
                 'DT32': 'Below Freezing',
                 'DX90': 'Above 90°F',
                 'DP01': '> 0.01 inch Precip.',
                 'DP1X': '> 1 inch Precip.',
                 'DP2X': '>2 inch Precip.',
                 'DSNW': 'Snowfall Days',
                 'DSND': 'Snow Depth Days'}

SERIES_COLORS = {'DT00': '#2c7bb6',
                 'DT32': '#abd9e9',
                 'DX90': '#d7191c',
                 'DP01': '#a6d96a',
                 'DP1X': '#1a9641',
                 'DP2X': '#00441b',
                 'DSNW': '#7b3294',
                 'DSND': '#c2a5cf'}

X_LABEL = 'Year'
Y_LABEL = 'Days per Year'


@dataclass(frozen=True)
class ChartConfig:
    """Layout of a single chart.

    `series` gives the panels, left to right. `placements` pairs a series code
    with the (x, y) of its earliest and latest decadal labels. A dict is
    accepted and stored as a tuple of (code, (early_xy, late_xy)) pairs.
    """
    name: str
    series: tuple
    ylim: tuple
    placements: tuple = ()
    xlim: tuple = (1938, 2022)
    figsize: tuple = (6, 4)  # inches
    dpi: int = 300

    def __post_init__(self):
        pairs = tuple((code, (tuple(early), tuple(late)))
                      for code, (early, late) in dict(self.placements).items())
        object.__setattr__(self, 'placements', pairs)


CHARTS = (
    ChartConfig(name='frequencythreehoriz',
                series=('DT00', 'DT32', 'DX90'),
                ylim=(0, 160),
                placements={'DT00': ((1952, 40), (2008, 40)),
                            'DT32': ((1952, 150), (2008, 150)),
                            'DX90': ((1952, 80), (2008, 80))},
                figsize=(12, 4)),
    ChartConfig(name='highrainfalldays',
                series=('DP1X', 'DP2X'),
                ylim=(0, 20),
                placements={'DP1X': ((1952, 18), (2008, 18)),
                            'DP2X': ((1952, 10), (2008, 10))},
                figsize=(9, 4)),
    ChartConfig(name='days_gt1',
                series=('DP1X',),
                ylim=(0, 20),
                placements={'DP1X': ((1950, 18), (2010, 18))}),
    ChartConfig(name='days_gt2',
                series=('DP2X',),
                ylim=(0, 8),
                placements={'DP2X': ((1950, 7), (2010, 7))}),
    ChartConfig(name='days_gt90',
                series=('DX90',),
                ylim=(0, 90),
                placements={'DX90': ((1950, 80), (2010, 80))}),
    ChartConfig(name='days_lt32',
                series=('DT32',),
                ylim=(0, 160),
                placements={'DT32': ((1950, 150), (2010, 150))}),
    ChartConfig(name='days_lt0',
                series=('DT00',),
                ylim=(0, 40),
                placements={'DT00': ((1950, 36), (2010, 36))}),
)


@dataclass(frozen=True)
class ReportConfig:
    """Everything the pipeline needs besides the input and output paths."""
    base_codes: tuple = BASE_CODES
    # Mid-decade years used as "typical era" values
    anchor_years: tuple = tuple(range(1945, 2016, 10))
    heavy_rain_threshold_in: float = 2.0
    # 1940 is a partial year in the daily record
    first_daily_year: int = 1941
    # tenths of mm -> inches
    precip_to_inches: float = 0.0393700787/10
    charts: tuple = CHARTS

    @property
    def charted_series(self):
        """Series codes that appear in at least one chart, in declared order."""
        used = {code for chart in self.charts for code in chart.series}
        return tuple(code for code in SERIES_ORDER if code in used)


DEFAULT_REPORT = ReportConfig()
