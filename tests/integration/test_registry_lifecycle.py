"""End-to-end tests for the load, refresh and write lifecycle."""

import json
import time

import pytest

from confdir import ConfigRegistry, NotLoadedError, load_registry_config


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return False


@pytest.mark.integration
class TestRegistryLifecycle:
    """Test the documented usage scenarios."""

    def test_load_new_file(self, config_dir, items_serializer, default_items_json, item_type):
        """A missing config file is created with the serializer's default."""
        with ConfigRegistry(
            config_dir, initializer=lambda r: r.load("data", items_serializer)
        ) as registry:
            handle = registry.get("data")

            assert (config_dir / "data.json").read_text() == default_items_json
            assert handle.read_now() == [item_type(id=0, name="aaa"), item_type(id=1, name="bbb")]

    def test_update_from_file(self, config_dir, items_serializer, item_type):
        """An external overwrite is visible through read_now on the existing handle."""
        with ConfigRegistry(
            config_dir, initializer=lambda r: r.load("data", items_serializer)
        ) as registry:
            handle = registry.get("data")
            (config_dir / "data.json").write_text(
                json.dumps([{"id": 0, "name": "test"}], indent=3)
            )

            assert handle.read_now() == [item_type(id=0, name="test")]
            assert handle.cache == [item_type(id=0, name="test")]

    def test_get_before_load(self, registry):
        with pytest.raises(NotLoadedError):
            registry.get("unknown")

    def test_background_refresh_picks_up_changes(self, config_dir, items_serializer, item_type):
        with ConfigRegistry(config_dir, refresh_interval=0.05) as registry:
            handle = registry.load("data", items_serializer)
            (config_dir / "data.json").write_text('[{"id":5,"name":"refreshed"}]')

            assert wait_for(lambda: handle.cache == [item_type(id=5, name="refreshed")])

    def test_background_refresh_survives_broken_file(self, config_dir, items_serializer, item_type):
        with ConfigRegistry(config_dir, refresh_interval=0.05) as registry:
            handle = registry.load("data", items_serializer)
            (config_dir / "data.json").write_text("not json")
            time.sleep(0.2)
            assert handle.cache == [item_type(id=0, name="aaa"), item_type(id=1, name="bbb")]

            (config_dir / "data.json").write_text('[{"id":9,"name":"fixed"}]')
            assert wait_for(lambda: handle.cache == [item_type(id=9, name="fixed")])

    def test_write_then_fresh_registry_reads_value(self, config_dir, items_serializer, item_type):
        value = [item_type(id=3, name="written")]
        with ConfigRegistry(config_dir, refresh_interval=0) as registry:
            registry.load("data", items_serializer).write_now(value)

        with ConfigRegistry(config_dir, refresh_interval=0) as registry:
            assert registry.load("data", items_serializer).cache == value

    def test_validate_repairs_broken_file(self, registry, config_dir, items_serializer, item_type):
        handle = registry.load("data", items_serializer)
        (config_dir / "data.json").write_text("{{{")

        handle.validate(lambda current: current if current is not None else [item_type(id=0, name="reset")])

        assert json.loads((config_dir / "data.json").read_text()) == [{"id": 0, "name": "reset"}]

    def test_registry_from_loaded_settings(self, tmp_path, items_serializer):
        settings_file = tmp_path / "confdir.yml"
        settings_file.write_text(f"base_dir: {tmp_path / 'configs'}\nrefresh_interval: 0\n")

        settings = load_registry_config(settings_file, env={})

        with ConfigRegistry.from_settings(settings) as registry:
            registry.load("data", items_serializer)
            assert (tmp_path / "configs" / "data.json").exists()


@pytest.mark.integration
class TestRegistryAsync:
    """Test the coroutine API."""

    @pytest.mark.asyncio
    async def test_load_async_and_current(self, config_dir, items_serializer, item_type):
        async with ConfigRegistry(config_dir, refresh_interval=0) as registry:
            handle = await registry.load_async("data", items_serializer)
            assert handle is registry.get("data")

            (config_dir / "data.json").write_text('[{"id":0,"name":"test"}]')
            assert await handle.current_async() == [item_type(id=0, name="test")]

    @pytest.mark.asyncio
    async def test_write_and_read_async(self, registry, items_serializer, item_type):
        handle = await registry.load_async("data", items_serializer)
        value = [item_type(id=1, name="async")]

        assert await handle.write_async(value) == value
        assert handle.cache == value
        assert await handle.read_async() == value
        assert await handle.update_async() == value

    @pytest.mark.asyncio
    async def test_validate_async(self, registry, config_dir, items_serializer, item_type):
        handle = await registry.load_async("data", items_serializer)

        assert await handle.validate_async(lambda current: None) is None
        corrected = await handle.validate_async(lambda current: current[:1])

        assert corrected == [item_type(id=0, name="aaa")]
        assert json.loads((config_dir / "data.json").read_text()) == [{"id": 0, "name": "aaa"}]
