"""
Targeting State Tests
=====================

Invariantes testeadas:
1. Rooms duplicadas colapsan (set)
2. Namespace se sobrescribe
3. Flag "nsp" nunca queda en flags
4. reset() deja el estado vacío
5. snapshot() es independiente del estado posterior
"""
import pytest
from sio_emitter.targeting import TargetingState


@pytest.mark.unit
class TestTargetingState:
    """Tests de acumulación y reset"""

    def test_duplicate_rooms_collapse(self):
        """
        Invariante: {a, b, a, c} → {a, b, c}.
        """
        state = TargetingState()
        for room in ["a", "b", "a", "c"]:
            state.add_room(room)

        assert state.rooms == {"a", "b", "c"}

    def test_namespace_overwrites(self):
        """
        Propiedad: el último set_namespace() gana.
        """
        state = TargetingState()
        state.set_namespace("/first")
        state.set_namespace("/second")

        assert state.namespace == "/second"

    def test_nsp_flag_routes_to_namespace(self):
        """
        Invariante: set_flag("nsp", ...) va al namespace, no a flags.
        """
        state = TargetingState()
        state.set_flag("nsp", "/chat")
        state.set_flag("volatile", "true")

        assert state.namespace == "/chat"
        assert state.flags == {"volatile": "true"}

    def test_reset_clears_everything(self):
        """
        Invariante: reset() deja rooms, namespace y flags vacíos.
        """
        state = TargetingState()
        state.add_room("r1")
        state.set_namespace("/chat")
        state.set_flag("volatile", "true")
        assert not state.is_empty

        state.reset()

        assert state.is_empty
        assert state.rooms == set()
        assert state.namespace is None
        assert state.flags == {}

    def test_snapshot_is_isolated_from_later_changes(self):
        """
        Propiedad: snapshot no cambia si el estado cambia después.
        """
        state = TargetingState()
        state.add_room("r1")
        state.set_flag("volatile", "true")

        snapshot = state.snapshot()
        state.add_room("r2")
        state.reset()

        assert snapshot.rooms == ("r1",)
        assert snapshot.flags == {"volatile": "true"}
        assert snapshot.namespace is None

    def test_rooms_property_returns_copy(self):
        """
        Edge case: mutar el set retornado no altera el estado.
        """
        state = TargetingState()
        state.add_room("r1")

        rooms = state.rooms
        rooms.add("intruder")

        assert state.rooms == {"r1"}
