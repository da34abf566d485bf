"""
Tests for the pick-list reducer.
"""

import unittest

from ..picklist import (
    PickListIncomplete, PickListState, ResetItem, SetActualQuantity, TogglePicked, reduce_pick_list,
)

ORDER = {
    "id": 1,
    "items": [
        {"id": 10, "productId": 100, "quantity": 5},
        {"id": 11, "productId": 101, "quantity": 3},
    ],
}


class PickListReducerTest(unittest.TestCase):

    def setUp(self):
        self.state = PickListState.from_order(ORDER)

    def test_initial_state(self):
        self.assertFalse(self.state.is_complete)
        self.assertEqual(self.state.item(10).actual_quantity, 5)
        self.assertEqual(self.state.item(11).actual_quantity, 3)

    def test_reducer_does_not_mutate_input(self):
        new_state = reduce_pick_list(self.state, TogglePicked(10))
        self.assertTrue(new_state.item(10).picked)
        self.assertFalse(self.state.item(10).picked)

    def test_toggle_twice_unpicks(self):
        state = reduce_pick_list(self.state, TogglePicked(10))
        state = reduce_pick_list(state, TogglePicked(10))
        self.assertFalse(state.item(10).picked)

    def test_short_pick_payload(self):
        state = self.state
        for action in [TogglePicked(10), SetActualQuantity(11, 1), TogglePicked(11)]:
            state = reduce_pick_list(state, action)

        self.assertTrue(state.is_complete)
        self.assertTrue(state.has_shortfall)
        self.assertEqual(state.to_status_payload(), {
            "status": "picked",
            "itemQuantities": [
                {"orderItemId": 10, "productId": 100, "requestedQuantity": 5, "actualQuantity": 5},
                {"orderItemId": 11, "productId": 101, "requestedQuantity": 3, "actualQuantity": 1},
            ],
        })

    def test_incomplete_pick_list_rejected(self):
        state = reduce_pick_list(self.state, TogglePicked(10))
        with self.assertRaises(PickListIncomplete) as ctx:
            state.to_status_payload()
        self.assertEqual(ctx.exception.unpicked_ids, [11])

    def test_negative_quantity_rejected(self):
        state = reduce_pick_list(self.state, SetActualQuantity(10, -1))
        state = reduce_pick_list(state, TogglePicked(10))
        state = reduce_pick_list(state, TogglePicked(11))
        with self.assertRaises(ValueError):
            state.to_status_payload()

    def test_over_pick_rejected(self):
        state = reduce_pick_list(self.state, SetActualQuantity(10, 6))
        state = reduce_pick_list(state, TogglePicked(10))
        state = reduce_pick_list(state, TogglePicked(11))
        with self.assertRaises(ValueError):
            state.to_status_payload()

    def test_reset_item(self):
        state = reduce_pick_list(self.state, SetActualQuantity(11, 0))
        state = reduce_pick_list(state, TogglePicked(11))
        state = reduce_pick_list(state, ResetItem(11))
        self.assertFalse(state.item(11).picked)
        self.assertEqual(state.item(11).actual_quantity, 3)

    def test_unknown_item(self):
        with self.assertRaises(KeyError):
            reduce_pick_list(self.state, TogglePicked(99))
