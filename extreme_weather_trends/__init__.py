# -*- coding: utf-8 -*-

"""Top-level package for extreme_weather_trends."""

__version__ = '0.1.0'
