from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path


class TestOrderMetrics(unittest.TestCase):
    def test_order_cost_sums_only_its_materials(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.models import Material
        from maintrack.orders.metrics import order_cost

        materials = [
            Material(order_id=10, name="Oil", unit_cost=10.0, quantity=3),
            Material(order_id=10, name="Filter", unit_cost=5.5, quantity=2),
            Material(order_id=11, name="Cable", unit_cost=99.0, quantity=1),
        ]
        self.assertEqual(order_cost(10, materials), 41.0)
        self.assertEqual(order_cost(12, materials), 0.0)

    def test_occupancy_truncates_to_whole_cap(self) -> None:
        ensure_repo_on_path()

        from _fakes import executing_order
        from maintrack.orders.metrics import occupancy_rate

        four = [executing_order(10 + i, 10, technician_id=10) for i in range(4)]
        self.assertEqual(occupancy_rate(10, four), 0)

        five = four + [executing_order(14, 10, technician_id=10)]
        self.assertEqual(occupancy_rate(10, five), 100)
        self.assertEqual(occupancy_rate(11, five), 0)

    def test_resolution_seconds(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.models import Order, Stamp
        from maintrack.orders.metrics import average_resolution_seconds, resolution_seconds

        done = Order(
            10, 10, 10, "high", "corrective",
            state="concluded",
            technician_id=10,
            started_at=Stamp(1, 1, 2024, 10, 0, 0),
            ended_at=Stamp(1, 1, 2024, 10, 5, 30),
        )
        self.assertEqual(resolution_seconds(done), 330)

        no_year = Order(
            11, 10, 10, "high", "corrective",
            state="concluded",
            started_at=Stamp(1, 1, 0),
            ended_at=Stamp(1, 1, 2024),
        )
        backwards = Order(
            12, 10, 10, "high", "corrective",
            state="concluded",
            started_at=Stamp(2, 1, 2024),
            ended_at=Stamp(1, 1, 2024),
        )
        invalid = Order(
            13, 10, 10, "high", "corrective",
            state="concluded",
            started_at=Stamp(31, 2, 2024),
            ended_at=Stamp(1, 3, 2024),
        )
        self.assertIsNone(resolution_seconds(no_year))
        self.assertIsNone(resolution_seconds(backwards))
        self.assertIsNone(resolution_seconds(invalid))

        self.assertEqual(average_resolution_seconds([done, no_year, backwards, invalid]), 330.0)

    def test_average_is_zero_without_measurable_orders(self) -> None:
        ensure_repo_on_path()

        from _fakes import executing_order
        from maintrack.orders.metrics import average_resolution_seconds

        self.assertEqual(average_resolution_seconds([]), 0.0)
        # Only concluded orders count.
        self.assertEqual(average_resolution_seconds([executing_order(10, 10, 10)]), 0.0)


if __name__ == "__main__":
    unittest.main()
