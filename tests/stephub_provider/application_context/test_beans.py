from __future__ import annotations

import types

import pytest

from stephub_provider.application_context.beans import (
    BeanMeta,
    create_bean,
    discover_beans,
    get_bean_meta,
    import_modules,
    provider_bean,
)
from stephub_provider.errors import ProviderConfigError


def test_provider_bean_marks_class_with_default_name() -> None:
    @provider_bean()
    class Steps:
        pass

    assert get_bean_meta(Steps) == BeanMeta(name="Steps")


def test_provider_bean_rejects_empty_name() -> None:
    with pytest.raises(ValueError):
        provider_bean(name="")(type("X", (), {}))


def test_discover_beans_in_module_order() -> None:
    mod_a = types.ModuleType("beans_a")
    mod_b = types.ModuleType("beans_b")

    @provider_bean(name="first")
    class First:
        pass

    @provider_bean(name="second")
    class Second:
        pass

    class Plain:
        pass

    mod_a.First = First
    mod_a.Plain = Plain
    mod_b.Second = Second
    mod_b.First = First

    assert discover_beans([mod_a, mod_b]) == [("first", First), ("second", Second)]


def test_discover_beans_rejects_duplicate_names() -> None:
    mod = types.ModuleType("dup_beans")

    @provider_bean(name="dup")
    class A:
        pass

    @provider_bean(name="dup")
    class B:
        pass

    mod.A = A
    mod.B = B
    with pytest.raises(ProviderConfigError):
        discover_beans([mod])


def test_discover_beans_rejects_non_class_targets() -> None:
    mod = types.ModuleType("fn_beans")

    @provider_bean(name="fn")
    def fn() -> None:
        return None

    mod.fn = fn
    with pytest.raises(ProviderConfigError):
        discover_beans([mod])


def test_import_modules_wraps_import_errors() -> None:
    with pytest.raises(ProviderConfigError):
        import_modules(["stephub_provider_no_such_module"])


def test_create_bean_instantiates_without_arguments() -> None:
    class Steps:
        def __init__(self, prefix: str = "hi") -> None:
            self.prefix = prefix

    bean = create_bean("steps", Steps)
    assert isinstance(bean, Steps)
    assert bean.prefix == "hi"


def test_create_bean_names_required_constructor_parameter() -> None:
    # A bean needing constructor arguments is rejected before it is called.
    calls: list[str] = []

    class NeedsArgs:
        def __init__(self, client: object) -> None:
            calls.append("init")

    with pytest.raises(ProviderConfigError) as exc_info:
        create_bean("needs_args", NeedsArgs)
    assert "needs_args" in str(exc_info.value)
    assert "client" in str(exc_info.value)
    assert calls == []
