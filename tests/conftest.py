"""Shared test configuration and fixtures."""

from typing import List

import pytest
from pydantic import BaseModel

from confdir import ConfigRegistry, PydanticSerializer


class Item(BaseModel):
    """Record stored in the sample list config."""

    id: int
    name: str


DEFAULT_ITEMS_JSON = '[{"id":0,"name":"aaa"},{"id":1,"name":"bbb"}]'


def default_items() -> List[Item]:
    return [Item(id=0, name="aaa"), Item(id=1, name="bbb")]


@pytest.fixture
def item_type():
    """Pydantic model of the sample list config's records."""
    return Item


@pytest.fixture
def default_items_json():
    """Encoded default content of the sample list config."""
    return DEFAULT_ITEMS_JSON


@pytest.fixture
def items_serializer():
    """Serializer for a JSON list of Item records."""
    return PydanticSerializer(List[Item], default_items)


@pytest.fixture
def config_dir(tmp_path):
    """Path of a not yet existing configuration directory."""
    return tmp_path / "config"


@pytest.fixture
def registry(config_dir):
    """Registry without background refresh, closed after the test."""
    reg = ConfigRegistry(config_dir, refresh_interval=0)
    yield reg
    reg.close()
