"""Tests for TrackingRegistry and its lazy snapshots."""

from dispose_python import TrackingRegistry


class Item:
    def __init__(self, name: str):
        self.instance_name = name


class TestRegisterUnregister:
    def test_register_appends_in_order(self) -> None:
        registry = TrackingRegistry()
        items = [Item(n) for n in ("a", "b", "c")]
        for item in items:
            registry.register(item)

        assert registry.names() == ["a", "b", "c"]
        assert len(registry) == 3

    def test_register_uses_explicit_name(self) -> None:
        registry = TrackingRegistry()
        entry = registry.register(object(), "custom")
        assert entry.name == "custom"

    def test_unregister_by_identity(self) -> None:
        registry = TrackingRegistry()
        a, b, c = Item("a"), Item("b"), Item("c")
        for item in (a, b, c):
            registry.register(item)

        assert registry.unregister(b) is True

        assert registry.names() == ["a", "c"]
        assert b not in registry
        assert a in registry

    def test_unregister_missing_is_noop(self) -> None:
        registry = TrackingRegistry()
        a = Item("a")
        registry.register(a)

        assert registry.unregister(Item("a")) is False
        assert registry.unregister(a) is True
        assert registry.unregister(a) is False
        assert len(registry) == 0

    def test_append_after_removing_tail(self) -> None:
        registry = TrackingRegistry()
        a, b, c = Item("a"), Item("b"), Item("c")
        registry.register(a)
        registry.register(b)
        registry.unregister(b)
        registry.register(c)

        assert registry.names() == ["a", "c"]

    def test_clear_drops_everything(self) -> None:
        registry = TrackingRegistry()
        keep = [Item(n) for n in "xyz"]
        for item in keep:
            registry.register(item)

        registry.dispose()

        assert registry.names() == []
        registry.register(keep[0])
        assert registry.names() == ["x"]


class TestWeakEntries:
    def test_registry_does_not_keep_instances_alive(self) -> None:
        registry = TrackingRegistry()
        entry = registry.register(Item("gone"))

        assert not entry.alive
        assert entry.target() is None
        assert registry.names() == ["gone"]
        assert "collected" in repr(entry)


class TestStrongEntries:
    def test_objects_without_weakref_support_are_held_strongly(self) -> None:
        class Slotted:
            __slots__ = ("instance_name",)

        registry = TrackingRegistry()
        plain, slotted = object(), Slotted()
        slotted.instance_name = "slotted"
        plain_entry = registry.register(plain, "plain")
        slotted_entry = registry.register(slotted)
        number_entry = registry.register(12345, "number")

        assert not plain_entry.is_weak
        assert plain_entry.alive
        assert plain_entry.target() is plain
        assert slotted_entry.refers_to(slotted)
        assert number_entry.target() == 12345
        assert registry.names() == ["plain", "slotted", "number"]

    def test_unregister_and_membership_work_for_strong_entries(self) -> None:
        registry = TrackingRegistry()
        plain = object()
        registry.register(plain, "plain")

        assert plain in registry
        assert plain in registry.snapshot_live()
        assert object() not in registry

        assert registry.unregister(plain) is True
        assert len(registry) == 0

    def test_removed_entry_drops_its_strong_reference(self) -> None:
        registry = TrackingRegistry()
        entry = registry.register(object(), "plain")

        registry.clear()

        assert entry.target() is None
        assert not entry.alive


class TestSnapshot:
    def test_snapshot_is_restartable(self) -> None:
        registry = TrackingRegistry()
        a, b = Item("a"), Item("b")
        registry.register(a)
        registry.register(b)
        snapshot = registry.snapshot_live()

        assert snapshot.names() == ["a", "b"]
        assert snapshot.names() == ["a", "b"]

    def test_snapshot_reflects_later_changes(self) -> None:
        registry = TrackingRegistry()
        a, b = Item("a"), Item("b")
        registry.register(a)
        snapshot = registry.snapshot_live()

        registry.register(b)
        registry.unregister(a)

        assert [entry.name for entry in snapshot] == ["b"]

    def test_snapshot_membership_by_name_or_instance(self) -> None:
        registry = TrackingRegistry()
        a = Item("a")
        registry.register(a)
        snapshot = registry.snapshot_live()

        assert "a" in snapshot
        assert a in snapshot
        assert "b" not in snapshot
        assert Item("a") not in snapshot
