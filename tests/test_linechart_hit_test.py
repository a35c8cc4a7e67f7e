from __future__ import annotations

import math
import unittest

from linechart.config import ChartConfig
from linechart.errors import EmptyDataError
from linechart.hit_test import HitTester
from linechart.layout import LayoutEngine
from linechart.series import SeriesStore


def _tester(*series: list[float], inset: float = 0.0, size=(100, 50)) -> HitTester:
    store = SeriesStore()
    for values in series:
        store.add(values)
    layout = LayoutEngine(store, ChartConfig().with_inset(inset)).compute(*size)
    return HitTester(layout, store)


class HitTesterTests(unittest.TestCase):
    def test_pointer_at_edges_selects_first_and_last_point(self) -> None:
        tester = _tester([3, 4, 9, 11, 13, 15])
        first = tester.locate(0)
        self.assertEqual(first.index, 0)
        self.assertEqual(first.values, (3.0,))
        last = tester.locate(100)
        self.assertEqual(last.index, 5)
        self.assertEqual(last.values, (15.0,))

    def test_pointer_outside_drawing_area_is_clamped(self) -> None:
        tester = _tester([3, 4, 9, 11, 13, 15])
        self.assertEqual(tester.locate(-50).index, 0)
        self.assertEqual(tester.locate(250).index, 5)
        self.assertEqual(tester.locate(math.inf).index, 5)
        self.assertEqual(tester.locate(-math.inf).index, 0)
        self.assertEqual(tester.locate(math.nan).index, 0)

    def test_nearest_index_rounds_half_away_from_zero(self) -> None:
        tester = _tester([3, 4, 9, 11, 13, 15])
        mid = tester.locate(50)
        self.assertAlmostEqual(mid.fractional_index, 2.5)
        self.assertEqual(mid.index, 3)
        self.assertEqual(mid.values, (11.0,))
        self.assertEqual(tester.locate(49).index, 2)
        self.assertEqual(tester.locate(31).index, 2)

    def test_values_come_from_every_series(self) -> None:
        tester = _tester([3, 4, 9], [10, 20, 30], [-1, -2, -3])
        result = tester.locate(100)
        self.assertEqual(result.index, 2)
        self.assertEqual(result.values, (9.0, 30.0, -3.0))

    def test_inset_is_subtracted_before_inverting(self) -> None:
        tester = _tester([3, 4, 9, 11, 13, 15], inset=15, size=(130, 80))
        self.assertEqual(tester.locate(15).index, 0)
        self.assertEqual(tester.locate(35).index, 1)
        self.assertEqual(tester.locate(115).index, 5)
        self.assertEqual(tester.locate(5).index, 0)

    def test_single_point_series_always_hits_index_zero(self) -> None:
        tester = _tester([7])
        for x in (-10, 0, 50, 1000):
            result = tester.locate(x)
            self.assertEqual(result.index, 0)
            self.assertEqual(result.values, (7.0,))

    def test_empty_store_raises(self) -> None:
        store = SeriesStore()
        store.add([1, 2, 3])
        layout = LayoutEngine(store).compute(320, 200)
        store.clear()
        with self.assertRaises(EmptyDataError):
            HitTester(layout, store).locate(10)


if __name__ == "__main__":
    unittest.main()
