"""Tests for the mountkit top-level lazy API."""

import pytest

import mountkit
from mountkit.context import bind
from mountkit.escape import e
from mountkit.paths import asset, url


class TestPublicApi:
    @pytest.mark.parametrize("name", mountkit.__all__)
    def test_every_exported_name_resolves(self, name: str) -> None:
        assert getattr(mountkit, name) is not None

    def test_same_objects_as_submodules(self) -> None:
        assert mountkit.e is e
        assert mountkit.asset is asset
        assert mountkit.url is url

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="has no attribute 'nope'"):
            _ = mountkit.nope

    def test_usage_example(self) -> None:
        with mountkit.bind({"SCRIPT_NAME": "/centre/public/index.php"}):
            assert mountkit.asset("assets/css/app.css") == "/centre/public/assets/css/app.css"
            assert mountkit.url("admin/pages") == "/centre/public/?p=admin/pages"
        assert mountkit.e("<b>") == "&lt;b&gt;"

    def test_bind_is_context_bind(self) -> None:
        assert mountkit.bind is bind
