"""Errors raised by the extreme weather trend pipeline."""


class SchemaError(ValueError):
    """Input table is missing a required column, series or has repeated keys."""


class ModelFitError(RuntimeError):
    """A count regression could not be fit to a series.

    Parameters
    ----------
    series : str
        Exceedance code of the series that failed
    message : str
        Description of the failure
    """

    def __init__(self, series, message):
        self.series = series
        super().__init__('%s: %s' % (series, message))
