# -*- coding: utf-8 -*-

"""Unit test package for extreme_weather_trends."""
