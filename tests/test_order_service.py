from __future__ import annotations

import unittest

from _testutil import ensure_repo_on_path


class TestOrderService(unittest.TestCase):
    def _service(self, reg, answers, clock=None):
        from _fakes import Echo, MemoryLogSink, ScriptedPrompter, fixed_clock
        from maintrack.orders.service import OrderService

        log = MemoryLogSink()
        echo = Echo()
        svc = OrderService(reg, ScriptedPrompter(answers), log, echo=echo, clock=clock or fixed_clock(2024, 1, 1, 10, 0, 0))
        return svc, log, echo

    def test_create_order_reprompts_for_operational_asset(self) -> None:
        ensure_repo_on_path()

        from dataclasses import replace

        from _fakes import sample_registry

        reg = sample_registry()
        reg.assets.replace(replace(reg.assets.find(11), state="inactive"))
        svc, log, echo = self._service(reg, [99, 11, 10, 3, 2])

        order = svc.create_order()
        self.assertEqual(order.order_id, 10)
        self.assertEqual(order.asset_id, 10)
        self.assertEqual(order.priority, "high")
        self.assertEqual(order.maintenance_type, "corrective")
        self.assertEqual(echo.lines.count("The ID entered is invalid. Try again."), 2)
        self.assertEqual(log.lines, ["Info: A new order was created and an asset was sent to maintenance."])
        self.assertEqual(reg.assets.find(10).state, "in_maintenance")

    def test_create_order_without_operational_assets(self) -> None:
        ensure_repo_on_path()

        from maintrack.stores import Registry

        svc, log, echo = self._service(Registry(), [])
        self.assertIsNone(svc.create_order())
        self.assertTrue(log.lines[0].startswith("Warning:"))

    def test_manage_pending_then_conclude(self) -> None:
        ensure_repo_on_path()

        from _fakes import fixed_clock, sample_registry

        reg = sample_registry()
        svc, _, _ = self._service(reg, [10, 1, 2])
        svc.create_order()

        # Technician 99 is rejected, then 11 takes the order with two materials.
        svc, log, echo = self._service(reg, [10, 99, 11, "Oil", 10.0, 3, 1, "Filter", 5.5, 2, 2])
        result = svc.manage_order()
        self.assertEqual(result.order.state, "execution")
        self.assertIn("The technician ID is invalid, try again.", echo.lines)
        self.assertEqual(log.lines, [
            "Info: A material was added to a maintenance order.",
            "Info: A material was added to a maintenance order.",
            "Info: A maintenance order moved to IN EXECUTION.",
        ])
        self.assertEqual(reg.technicians.find(11).state, "busy")

        svc, log, _ = self._service(reg, [10, 2], clock=fixed_clock(2024, 1, 1, 12, 0, 0))
        result = svc.manage_order()
        self.assertEqual(result.order.state, "concluded")
        self.assertEqual(log.lines, ["Info: A maintenance order was concluded."])
        self.assertEqual(reg.assets.find(10).corrective_count, 1)
        self.assertEqual(reg.assets.find(10).accrued_cost, 41.0)

    def test_unavailable_technicians_are_reprompted(self) -> None:
        ensure_repo_on_path()

        from _fakes import executing_order, sample_registry
        from maintrack.infra.models import Technician
        from maintrack.orders.service import _UNAVAILABLE_MESSAGES

        reg = sample_registry()
        reg.technicians.add(Technician(12, "Eva", "other", state="inactive"))
        for i in range(5):
            reg.orders.add(executing_order(10 + i, 12, technician_id=11))
        svc, _, _ = self._service(reg, [10, 2, 1])
        pending = svc.create_order()
        self.assertEqual(pending.order_id, 15)

        # Unknown id, inactive technician, technician at capacity, then an eligible one.
        svc, _, echo = self._service(reg, [15, 99, 12, 11, 10, "Oil", 4.0, 1, 2])
        result = svc.manage_order()

        rejections = [line for line in echo.lines if line in _UNAVAILABLE_MESSAGES.values()]
        self.assertEqual(rejections, [
            _UNAVAILABLE_MESSAGES["not_found"],
            _UNAVAILABLE_MESSAGES["inactive"],
            _UNAVAILABLE_MESSAGES["at_capacity"],
        ])
        self.assertEqual(result.order.state, "execution")
        self.assertEqual(result.order.technician_id, 10)
        self.assertEqual(reg.orders.find(15).technician_id, 10)
        self.assertEqual(reg.technicians.find(10).state, "busy")
        self.assertEqual(reg.technicians.find(11).state, "active")

    def test_manage_closed_order_is_rejected(self) -> None:
        ensure_repo_on_path()

        from _fakes import executing_order, sample_registry

        reg = sample_registry()
        reg.orders.add(executing_order(10, 10, technician_id=10))
        svc, _, _ = self._service(reg, [10, 1])
        svc.manage_order()

        svc, log, echo = self._service(reg, [10])
        self.assertIsNone(svc.manage_order())
        self.assertIn("The selected order was already cancelled.", echo.lines)
        self.assertEqual(log.lines, ["Warning: Attempt to manage an invalid order (not found or incompatible state)."])

    def test_manage_pending_without_eligible_technician(self) -> None:
        ensure_repo_on_path()

        from _fakes import sample_registry
        from maintrack.stores import TechnicianStore

        reg = sample_registry()
        reg.technicians = TechnicianStore()
        svc, _, _ = self._service(reg, [10, 1, 1])
        svc.create_order()

        svc, log, _ = self._service(reg, [10])
        self.assertIsNone(svc.manage_order())
        self.assertEqual(log.lines, ["Warning: No eligible technician to start an order."])
        self.assertEqual(reg.orders.find(10).state, "pending")

    def test_listings(self) -> None:
        ensure_repo_on_path()

        from _fakes import sample_registry

        reg = sample_registry()
        svc, _, echo = self._service(reg, [])
        svc.list_pending()
        svc.list_all()
        self.assertEqual(echo.lines, ["There are no pending orders.", "There are no registered orders."])


if __name__ == "__main__":
    unittest.main()
