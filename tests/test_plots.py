#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tests for chart rendering."""

import os
import tempfile
import unittest

import matplotlib
matplotlib.use('Agg')
import matplotlib.image as mpimg

from extreme_weather_trends.annotations import make_annotations
from extreme_weather_trends.config import CHARTS, ChartConfig, DISPLAY_NAMES
from extreme_weather_trends.models import fit_series_trends, decadal_predictions
from extreme_weather_trends.plots import render_chart
from extreme_weather_trends.utils import reshape_annual, add_year_column
from tests.synthetic import annual_frame, YEARS

CODES = ['DT00', 'DT32', 'DX90']


class TestRenderChart(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        annual = add_year_column(annual_frame())
        self.long_df, _ = reshape_annual(annual, CODES)
        self.fits = fit_series_trends(self.long_df, CODES)
        self.predictions = decadal_predictions(self.fits)

    def tearDown(self):
        self.tmpdir.cleanup()

    def render(self, chart):
        annotations = make_annotations(self.predictions, chart.placements)
        return render_chart(self.long_df, self.fits, annotations, chart, self.tmpdir.name)

    def test_faceted(self):
        chart = [c for c in CHARTS if c.name == 'frequencythreehoriz'][0]
        fig, saved = self.render(chart)

        self.assertEqual(len(fig.axes), 3)
        for ax, code in zip(fig.axes, CODES):
            self.assertEqual(ax.get_title(), DISPLAY_NAMES[code])
            self.assertEqual(len(ax.collections), 1)
            self.assertEqual(len(ax.collections[0].get_offsets()), len(YEARS))
            self.assertEqual(len(ax.get_lines()), 1)
            self.assertEqual(len(ax.texts), 2)
            self.assertEqual(ax.get_xlabel(), 'Year')
        self.assertEqual(fig.axes[0].get_ylabel(), 'Days per Year')

        self.assertEqual([os.path.basename(f) for f in saved],
                         ['frequencythreehoriz.pdf', 'frequencythreehoriz.png'])
        for f in saved:
            self.assertTrue(os.path.getsize(f) > 0)

    def test_standalone(self):
        chart = ChartConfig(name='days_gt90', series=('DX90',), ylim=(0, 90),
                            placements={'DX90': ((1950, 80), (2010, 80))})
        fig, saved = self.render(chart)

        ax, = fig.axes
        self.assertEqual(len(ax.collections[0].get_offsets()), len(YEARS))
        self.assertEqual(len(ax.get_lines()), 1)
        self.assertEqual(sorted(t.get_text() for t in ax.texts),
                         sorted(make_annotations(self.predictions, chart.placements)['text']))
        self.assertEqual(ax.get_ylim(), (0, 90))
        self.assertTrue(os.path.isfile(os.path.join(self.tmpdir.name, 'days_gt90.png')))

    def test_trend_line_matches_fit(self):
        chart = ChartConfig(name='days_lt0', series=('DT00',), ylim=(0, 40))
        fig, _ = self.render(chart)

        line = fig.axes[0].get_lines()[0]
        x, y = line.get_data()
        self.assertEqual(x[0], YEARS[0])
        self.assertEqual(x[-1], YEARS[-1])
        self.assertAlmostEqual(y[0], self.fits['DT00'].predict([YEARS[0]])[0])

    def test_png_size_fixed(self):
        chart = ChartConfig(name='days_lt0', series=('DT00',), ylim=(0, 40), figsize=(6, 4), dpi=50)
        _, saved = self.render(chart)

        png = [f for f in saved if f.endswith('.png')][0]
        self.assertEqual(mpimg.imread(png).shape[:2], (200, 300))

    def test_faceted_png_size_fixed(self):
        chart = [c for c in CHARTS if c.name == 'frequencythreehoriz'][0]
        _, saved = self.render(chart)

        height, width = mpimg.imread(saved[1]).shape[:2]
        self.assertEqual((width, height), (chart.figsize[0]*chart.dpi, chart.figsize[1]*chart.dpi))

    def test_unwritable_figdir(self):
        chart = ChartConfig(name='days_lt0', series=('DT00',), ylim=(0, 40))
        annotations = make_annotations(self.predictions, chart.placements)
        with self.assertRaises(OSError):
            render_chart(self.long_df, self.fits, annotations, chart,
                         os.path.join(self.tmpdir.name, 'missing', 'dir'))


class TestChartConfig(unittest.TestCase):

    def test_placements_frozen(self):
        chart = ChartConfig(name='days_gt90', series=('DX90',), ylim=(0, 90),
                            placements={'DX90': ((1950, 80), (2010, 80))})

        self.assertEqual(chart.placements, (('DX90', ((1950, 80), (2010, 80))),))
        self.assertEqual(hash(chart), hash(ChartConfig(name='days_gt90', series=('DX90',), ylim=(0, 90),
                                                       placements=chart.placements)))

    def test_default_charts_hashable(self):
        self.assertEqual(len(set(CHARTS)), len(CHARTS))
        for chart in CHARTS:
            self.assertIsInstance(chart.placements, tuple)
            self.assertEqual([code for code, _ in chart.placements], list(chart.series))


if __name__ == '__main__':
    unittest.main()
