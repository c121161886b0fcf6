from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path


class TestInfraModels(unittest.TestCase):
    def test_dataclasses_instantiate(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.models import (
            Asset,
            CalendarDate,
            CollectionImage,
            Department,
            Material,
            Order,
            Stamp,
            Technician,
        )

        d = Department(department_id=10, name="Ops", responsible="Ana Silva", contact="912345678")
        a = Asset(asset_id=10, name="Van", category="vehicle", department_id=d.department_id, acquired_on=CalendarDate(1, 2, 2024))
        t = Technician(technician_id=10, name="Rui", specialty="mechanic")
        o = Order(order_id=10, asset_id=a.asset_id, department_id=a.department_id, priority="low", maintenance_type="preventive")
        m = Material(order_id=o.order_id, name="Oil", unit_cost=2.5, quantity=4)

        self.assertEqual(d.state, "active")
        self.assertEqual(a.state, "operational")
        self.assertEqual(t.state, "active")
        self.assertTrue(o.is_open)
        self.assertFalse(o.is_terminal)
        self.assertEqual(m.total, 10.0)
        self.assertEqual(CollectionImage().records, ())
        self.assertEqual(str(a.acquired_on), "1/2/2024")
        self.assertEqual(str(Stamp(5, 1, 2024, 9, 3, 0)), "05/01/2024 09:03:00")

    def test_unset_stamp(self) -> None:
        ensure_repo_on_path()

        from maintrack.infra.models import Stamp

        self.assertFalse(Stamp(0, 0, 0).is_set())
        with self.assertRaises(ValueError):
            Stamp(31, 2, 2024).to_datetime()


if __name__ == "__main__":
    unittest.main()
