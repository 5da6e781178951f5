import numpy as np
import pandas as pd


def format_rate(predicted):
    """Label text for an expected number of days, e.g. 12.6 -> '~13 per year'.

    Rounds half to even, so 12.5 -> '~12 per year'.
    """
    return '~%i per year' % int(np.round(predicted))


def make_annotations(predictions, placements):
    """Build the 'before' and 'after' labels for each series on a chart.

    Parameters
    ----------
    predictions : pandas.DataFrame
        Decadal predictions with columns year, series, predicted
    placements : dict or sequence of (code, xy) pairs
        Maps a series code to ((x_early, y_early), (x_late, y_late)) in plot
        coordinates. Series without an entry get no labels.

    Returns
    -------
    annotations : pandas.DataFrame
        Columns x, y, text, series; two rows per placed series, earliest first
    """

    rows = []
    for code, (early_xy, late_xy) in dict(placements).items():
        this_pred = predictions[predictions['series'] == code].sort_values('year')
        if this_pred.empty:
            raise KeyError('no decadal predictions for %s' % code)

        first = this_pred['predicted'].iloc[0]
        last = this_pred['predicted'].iloc[-1]
        rows.append((early_xy[0], early_xy[1], format_rate(first), code))
        rows.append((late_xy[0], late_xy[1], format_rate(last), code))

    return pd.DataFrame(rows, columns=['x', 'y', 'text', 'series'])
