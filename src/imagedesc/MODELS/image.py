"""
Models representing an image configuration descriptor: the record that
identifies an image, links it to its layers and records how it was built.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictInt,
    StrictStr,
    field_serializer,
    field_validator,
)

from .wire import ZERO_TIME, WireModel, format_timestamp, parse_timestamp


class ContainerConfig(BaseModel):
    """
    Runtime configuration snapshot carried by an image. Its contents belong to
    the container runtime and are passed through untouched.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


class RootFS(WireModel):
    """
    The stack of filesystem layers composing an image, bottom layer first.
    """
    always_emit = frozenset({"type"})

    type: StrictStr = ""
    diff_ids: List[StrictStr] = []
    base_layer: StrictStr = ""

    @field_validator("diff_ids", mode="before")
    @classmethod
    def _null_diff_ids(cls, value: Any) -> Any:
        if isinstance(value, list):
            return ["" if diff_id is None else diff_id for diff_id in value]
        return value


class HistoryEntry(WireModel):
    """
    Provenance of one build step. Steps that only change metadata set
    ``empty_layer`` and have no matching diff ID.
    """
    always_emit = frozenset({"created"})

    created: datetime = ZERO_TIME
    author: StrictStr = ""
    created_by: StrictStr = ""
    comment: StrictStr = ""
    empty_layer: StrictBool = False

    @field_validator("created", mode="before")
    @classmethod
    def _parse_created(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_serializer("created", when_used="json")
    def _format_created(self, value: datetime) -> str:
        return format_timestamp(value)


class Image(WireModel):
    """
    The configuration descriptor of a built image.

    An instance decoded from bytes keeps those bytes verbatim; ``raw_json()``
    returns them unchanged for as long as the instance lives, so a descriptor
    can be stored again without re-encoding drift. ``rootfs`` must be present
    for a decoded descriptor to be accepted.
    """
    always_emit = frozenset({"created"})

    id: StrictStr = ""
    parent: StrictStr = ""
    comment: StrictStr = ""
    created: datetime = ZERO_TIME
    container: StrictStr = ""
    container_config: Optional[ContainerConfig] = None
    docker_version: StrictStr = ""
    history: List[HistoryEntry] = []
    author: StrictStr = ""
    config: Optional[ContainerConfig] = None
    architecture: StrictStr = ""
    os: StrictStr = ""
    size: StrictInt = Field(default=0, alias="Size")
    rootfs: Optional[RootFS] = None

    _raw_json: Optional[bytes] = PrivateAttr(default=None)

    @field_validator("created", mode="before")
    @classmethod
    def _parse_created(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("history", mode="before")
    @classmethod
    def _null_history(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{} if entry is None else entry for entry in value]
        return value

    @field_serializer("created", when_used="json")
    def _format_created(self, value: datetime) -> str:
        return format_timestamp(value)

    @classmethod
    def from_json(cls, data: bytes) -> "Image":
        """Decodes and validates a descriptor. See ``parse_image``."""
        from ..PARSERS.image_parser import parse_image
        return parse_image(data)

    def raw_json(self) -> Optional[bytes]:
        """
        Returns the bytes this descriptor was decoded from, or None when the
        instance was built in code.
        """
        return self._raw_json

    def _attach_raw(self, data: bytes) -> None:
        if self._raw_json is not None:
            raise AttributeError("raw JSON of an image is written once")
        self._raw_json = bytes(data)

    @property
    def diff_ids(self) -> List[str]:
        return list(self.rootfs.diff_ids) if self.rootfs else []

    @property
    def layer_history(self) -> List[HistoryEntry]:
        """History entries that produced a filesystem layer, oldest first."""
        return [entry for entry in self.history if not entry.empty_layer]
