"""
Models for the index of an image archive, which locates each image's
configuration and layers inside the bundle.
"""
import json
from typing import Any, Iterator, List

from pydantic import Field, RootModel, StrictStr, field_validator

from .wire import WireModel


class Manifest(WireModel):
    """
    One image inside an archive. ``layers`` follows the stacking order of the
    descriptor's diff IDs; ``repo_tags`` carries no ordering guarantee.
    """
    config: StrictStr = Field(default="", alias="Config")
    layers: List[StrictStr] = Field(default=[], alias="Layers")
    repo_tags: List[StrictStr] = Field(default=[], alias="RepoTags")


class ManifestList(RootModel[List[Manifest]]):
    """
    The archive index document: a JSON array with one entry per image.
    """
    root: List[Manifest] = []

    @field_validator("root", mode="before")
    @classmethod
    def _null_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{} if entry is None else entry for entry in value]
        return value

    def __iter__(self) -> Iterator[Manifest]:
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> Manifest:
        return self.root[index]

    def to_json(self) -> bytes:
        payload = [entry.model_dump(mode="json", by_alias=True) for entry in self.root]
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
