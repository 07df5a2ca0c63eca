# core/tests/test_lifecycle.py

from decimal import Decimal
from types import SimpleNamespace

from django.test import SimpleTestCase

from core.exceptions import InvalidStateError, InvalidTransitionError
from core.services.lifecycle import machine
from core.services.money import money

DOOR = machine(
    "Door",
    transitions={
        "closed": {"open", "locked"},
        "open": {"closed"},
        "locked": {"closed", "broken"},
    },
    terminal={"broken"},
)


class StatusMachineTests(SimpleTestCase):
    def test_allowed_transition(self):
        self.assertTrue(DOOR.can_transition(from_status="closed", to_status="open"))
        self.assertFalse(DOOR.can_transition(from_status="open", to_status="locked"))

    def test_terminal_states_have_no_targets(self):
        self.assertTrue(DOOR.is_terminal("broken"))
        self.assertEqual(DOOR.allowed_targets("broken"), frozenset())
        self.assertEqual(DOOR.allowed_targets("locked"), frozenset({"closed", "broken"}))

    def test_validate_transition_names_the_document(self):
        door = SimpleNamespace(status="open", display_number="D-7", pk=1)

        with self.assertRaises(InvalidTransitionError) as ctx:
            DOOR.validate_transition(instance=door, target_status="broken")

        self.assertIn("D-7", str(ctx.exception))
        self.assertIsInstance(ctx.exception, InvalidStateError)


class MoneyTests(SimpleTestCase):
    def test_rounds_half_up_to_cents(self):
        self.assertEqual(money("2.345"), Decimal("2.35"))
        self.assertEqual(money(None), Decimal("0.00"))
        self.assertEqual(money(7), Decimal("7.00"))
