"""Tests for the intent queue."""

import pytest

from gravity_sim.intents import (
    AddParticle,
    ClearAll,
    IntentQueue,
    Regenerate,
    SetCollisionMode,
    ToggleCollisionMode,
    ToggleShowTree,
)
from gravity_sim.types import CollisionMode


class TestIntentQueue:
    """Tests for IntentQueue."""

    def test_empty(self):
        queue = IntentQueue()
        assert len(queue) == 0
        assert list(queue.drain()) == []

    def test_fifo_order(self):
        """Intents come out in submission order."""
        queue = IntentQueue()
        intents = [AddParticle(1, 2), ToggleCollisionMode(), ClearAll(), Regenerate(5)]
        for intent in intents:
            queue.put(intent)

        assert len(queue) == 4
        assert list(queue.drain()) == intents
        assert len(queue) == 0

    def test_pending_does_not_consume(self):
        """pending() is a snapshot."""
        queue = IntentQueue()
        queue.put(ToggleShowTree())
        assert queue.pending() == [ToggleShowTree()]
        assert len(queue) == 1

    def test_put_during_drain(self):
        """Intents added while draining are delivered in the same drain."""
        queue = IntentQueue()
        queue.put(ToggleShowTree())

        seen = []
        for intent in queue.drain():
            seen.append(intent)
            if isinstance(intent, ToggleShowTree):
                queue.put(ClearAll())

        assert seen == [ToggleShowTree(), ClearAll()]

    def test_unknown_intent_rejected(self):
        """Only known intent types are accepted."""
        queue = IntentQueue()
        with pytest.raises(TypeError, match="Unknown intent"):
            queue.put("clear")

    def test_clear(self):
        queue = IntentQueue()
        queue.put(SetCollisionMode(CollisionMode.merge))
        queue.clear()
        assert len(queue) == 0


class TestIntentTypes:
    """Tests for intent values."""

    def test_defaults(self):
        """Added particles default to radius 5 and mass 10."""
        intent = AddParticle(100.0, 200.0)
        assert intent.radius == 5.0
        assert intent.mass == 10.0
        assert Regenerate().count == 50

    def test_immutable(self):
        """Intents are frozen."""
        intent = AddParticle(1.0, 2.0)
        with pytest.raises(AttributeError):
            intent.x = 5.0  # type: ignore[misc]

    def test_value_equality(self):
        assert ToggleCollisionMode() == ToggleCollisionMode()
        assert AddParticle(1, 2) != AddParticle(2, 1)
