"""Tests for validity policies and guard truthiness."""

import ctypes
from dataclasses import dataclass

import pytest

from scopedref import ScopedRef, ValidityRegistry, is_valid, validity
from scopedref.core.validity import always_valid, get_registry


@pytest.fixture
def registry():
    """Create an empty ValidityRegistry for testing."""
    return ValidityRegistry()


# Registry


def test_default_policy_accepts_anything(registry):
    assert registry.check(0)
    assert registry.check("")
    assert registry.check(object())


def test_registered_policy_applies_to_subclasses(registry):
    class Handle(int):
        pass

    class FileHandle(Handle):
        pass

    registry.register(Handle, lambda h: h >= 0)

    assert registry.check(FileHandle(3))
    assert not registry.check(FileHandle(-1))
    assert registry.is_registered(Handle)
    assert not registry.is_registered(FileHandle)


def test_most_specific_policy_wins(registry):
    class Base:
        pass

    class Child(Base):
        pass

    registry.register(Base, lambda _: False)
    registry.register(Child, always_valid)

    assert registry.check(Child())
    assert not registry.check(Base())


def test_unregister_restores_default(registry):
    registry.register(int, lambda _: False)
    registry.unregister(int)

    assert registry.get_policy(int) is None
    assert registry.check(1)


def test_register_rejects_bad_arguments(registry):
    with pytest.raises(TypeError):
        registry.register("int", always_valid)
    with pytest.raises(TypeError):
        registry.register(int, "not callable")


def test_validatable_protocol_takes_precedence(registry):
    class Socket:
        def __init__(self, fd):
            self.fd = fd

        def __valid__(self):
            return self.fd != -1

    registry.register(Socket, lambda _: True)

    assert not registry.check(Socket(-1))
    assert registry.check(Socket(4))


def test_class_with_valid_method_checked_as_a_value(registry):
    class Handle:
        def __valid__(self):
            return False

    assert registry.check(Handle)
    assert not registry.check(Handle())


def test_guard_over_class_resource(recorder):
    class Handle:
        def __valid__(self):
            return False

    assert ScopedRef(recorder, Handle)


# Built-in policies


def test_none_is_invalid():
    assert not is_valid(None)


@pytest.mark.parametrize("pointer_type", [ctypes.c_void_p, ctypes.c_char_p, ctypes.c_wchar_p])
def test_null_simple_pointers_are_invalid(pointer_type):
    assert not is_valid(pointer_type())


def test_non_null_void_pointer_is_valid():
    assert is_valid(ctypes.c_void_p(0x1000))


def test_typed_pointers_follow_nullness():
    value = ctypes.c_int(42)

    assert is_valid(ctypes.pointer(value))
    assert not is_valid(ctypes.POINTER(ctypes.c_int)())


def test_function_pointer_null_is_invalid():
    callback_type = ctypes.CFUNCTYPE(None)

    assert not is_valid(callback_type())
    assert is_valid(callback_type(lambda: None))


def test_validity_decorator_registers_on_global_registry():
    @validity(lambda h: h.fd >= 0)
    @dataclass
    class DecoratedHandle:
        fd: int

    try:
        assert not is_valid(DecoratedHandle(-1))
        assert is_valid(DecoratedHandle(0))
    finally:
        get_registry().unregister(DecoratedHandle)


# Guard truthiness


def test_guard_with_null_pointer_is_false(recorder):
    """A never-released guard over a null pointer is not live."""
    assert not ScopedRef(recorder, ctypes.c_void_p())
    assert not ScopedRef(recorder, None)


def test_guard_with_non_null_pointer_is_true(recorder):
    assert ScopedRef(recorder, ctypes.c_void_p(0x1))
    assert ScopedRef(recorder, 0)


def test_guard_false_if_any_resource_invalid(recorder):
    guard = ScopedRef(recorder, ctypes.c_void_p(0x1), None, 3)

    assert not guard
    guard.set(ctypes.c_void_p(0x2), index=1)
    assert guard


def test_released_guard_is_false(recorder):
    guard = ScopedRef(recorder, 5)
    guard.release()

    assert not guard
