"""Tests for mountkit.context: request-scoped Mount and bind()."""

import asyncio
import threading

import pytest

from mountkit import context
from mountkit.config import MountConfig
from mountkit.context import Mount, bind, current_mount, mount_var


class TestMount:
    def test_default_config(self) -> None:
        mount = Mount({})
        assert mount.config == MountConfig()

    def test_script_name_missing_is_empty(self) -> None:
        assert Mount({}).script_name == ""

    def test_base_path_memoized(self) -> None:
        mount = Mount({"SCRIPT_NAME": "/centre/public/index.php"})
        assert mount.base_path == "/centre/public"
        assert mount.base_path is mount.base_path

    def test_directory_config(self) -> None:
        mount = Mount({"SCRIPT_NAME": "/centre/public"}, MountConfig(script_is_file=False))
        assert mount.base_path == "/centre/public"

    def test_repr(self) -> None:
        assert repr(Mount({"SCRIPT_NAME": "/a/i.php"})) == "<Mount SCRIPT_NAME='/a/i.php'>"


class TestBind:
    def test_sets_and_resets(self) -> None:
        with bind({"SCRIPT_NAME": "/a/index.php"}) as mount:
            assert current_mount() is mount
        with pytest.raises(LookupError):
            mount_var.get()

    def test_nested_restores_outer(self) -> None:
        with bind({"SCRIPT_NAME": "/outer/index.php"}) as outer:
            with bind({"SCRIPT_NAME": "/inner/index.php"}) as inner:
                assert current_mount() is inner
            assert current_mount() is outer

    def test_resets_on_exception(self) -> None:
        with pytest.raises(RuntimeError), bind({}):
            raise RuntimeError("boom")
        with pytest.raises(LookupError):
            mount_var.get()

    def test_each_bind_gets_fresh_mount(self) -> None:
        environ = {"SCRIPT_NAME": "/a/index.php"}
        with bind(environ) as first:
            assert first.base_path == "/a"
        environ["SCRIPT_NAME"] = "/b/index.php"
        with bind(environ) as second:
            assert second.base_path == "/b"

    def test_isolated_between_threads(self) -> None:
        seen: list[str] = []

        def worker() -> None:
            with bind({"SCRIPT_NAME": "/thread/index.php"}):
                seen.append(current_mount().base_path)

        with bind({"SCRIPT_NAME": "/main/index.php"}):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()
            assert current_mount().base_path == "/main"
        assert seen == ["/thread"]

    def test_isolated_between_tasks(self) -> None:
        async def handle(script: str) -> str:
            with bind({"SCRIPT_NAME": script}):
                await asyncio.sleep(0)
                return current_mount().base_path

        async def main() -> list[str]:
            return await asyncio.gather(handle("/a/index.php"), handle("/b/index.php"))

        assert asyncio.run(main()) == ["/a", "/b"]


class TestProcessMount:
    def test_falls_back_to_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(context, "_process_mount", None)
        monkeypatch.setenv("SCRIPT_NAME", "/cgi/app/index.php")
        assert current_mount().base_path == "/cgi/app"

    def test_created_once_per_process(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(context, "_process_mount", None)
        monkeypatch.setenv("SCRIPT_NAME", "/first/index.php")
        first = current_mount()
        assert first.base_path == "/first"
        monkeypatch.setenv("SCRIPT_NAME", "/second/index.php")
        assert current_mount() is first
        assert current_mount().base_path == "/first"
