"""
Tests for toolchain lookup.
"""

from unittest.mock import MagicMock, patch

import pytest

from conftest import FakeToolchain
from runway.core.errors import ToolchainNotFoundError
from runway.core.toolchain import registry
from runway.core.toolchain.protocol import Toolchain
from runway.core.toolchain.registry import get_toolchain, list_toolchains, register_toolchain

# Importable by 'module:attribute' path
FAKE_INSTANCE = FakeToolchain()
NOT_A_TOOLCHAIN = object()


@pytest.fixture(autouse=True)
def clean_registry(monkeypatch):
    monkeypatch.setattr(registry, "_toolchains", {})
    with patch("runway.core.toolchain.registry.entry_points", return_value=[]):
        yield


def make_entry_point(name: str, target) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.value = f"plugin:{name}"
    ep.load.return_value = target
    return ep


class TestRegisterToolchain:
    def test_registered_class_is_instantiated(self) -> None:
        register_toolchain("fake")(FakeToolchain)

        toolchain = get_toolchain("fake")

        assert isinstance(toolchain, FakeToolchain)
        assert isinstance(toolchain, Toolchain)

    def test_decorator_returns_class(self) -> None:
        assert register_toolchain("fake")(FakeToolchain) is FakeToolchain

    def test_listed(self) -> None:
        register_toolchain("b")(FakeToolchain)
        register_toolchain("a")(FakeToolchain)

        assert list_toolchains() == ["a", "b"]


class TestImportPath:
    def test_class(self) -> None:
        toolchain = get_toolchain("conftest:FakeToolchain")
        assert isinstance(toolchain, FakeToolchain)

    def test_instance(self) -> None:
        assert get_toolchain("test_toolchain_registry:FAKE_INSTANCE") is FAKE_INSTANCE

    def test_missing_module(self) -> None:
        with pytest.raises(ToolchainNotFoundError) as exc_info:
            get_toolchain("no_such_module_anywhere:Toolchain")
        assert exc_info.value.name == "no_such_module_anywhere:Toolchain"

    def test_missing_attribute(self) -> None:
        with pytest.raises(ToolchainNotFoundError):
            get_toolchain("conftest:NoSuchToolchain")

    def test_not_a_toolchain(self) -> None:
        with pytest.raises(ToolchainNotFoundError):
            get_toolchain("test_toolchain_registry:NOT_A_TOOLCHAIN")


class TestEntryPoints:
    def test_loaded_by_name(self) -> None:
        ep = make_entry_point("plugin", FakeToolchain)
        with patch("runway.core.toolchain.registry.entry_points", return_value=[ep]):
            toolchain = get_toolchain("plugin")

        assert isinstance(toolchain, FakeToolchain)

    def test_listed(self) -> None:
        register_toolchain("local")(FakeToolchain)
        ep = make_entry_point("plugin", FakeToolchain)
        with patch("runway.core.toolchain.registry.entry_points", return_value=[ep]):
            assert list_toolchains() == ["local", "plugin"]

    def test_registered_name_wins(self) -> None:
        register_toolchain("plugin")(FakeToolchain)
        ep = make_entry_point("plugin", object())
        with patch("runway.core.toolchain.registry.entry_points", return_value=[ep]):
            assert isinstance(get_toolchain("plugin"), FakeToolchain)

        ep.load.assert_not_called()


class TestNotFound:
    def test_unknown_name_lists_available(self) -> None:
        register_toolchain("fake")(FakeToolchain)

        with pytest.raises(ToolchainNotFoundError) as exc_info:
            get_toolchain("other")

        assert exc_info.value.available == ["fake"]
        assert "Available toolchains: fake" in str(exc_info.value)

    @pytest.mark.parametrize("reference", [None, ""])
    def test_unset(self, reference) -> None:
        with pytest.raises(ToolchainNotFoundError) as exc_info:
            get_toolchain(reference)

        assert exc_info.value.name == "<unset>"
