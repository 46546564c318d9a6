"""Item loading services."""

from itembrowser.services.items import (
    ItemLoadError,
    ItemSource,
    JsonItemSource,
    SampleItemSource,
    build_item_source,
)
from itembrowser.services.tasks import InlineTaskRunner, TaskRunner, ThreadTaskRunner

__all__ = [
    "InlineTaskRunner",
    "ItemLoadError",
    "ItemSource",
    "JsonItemSource",
    "SampleItemSource",
    "TaskRunner",
    "ThreadTaskRunner",
    "build_item_source",
]
