# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Parser for image configuration descriptors.

Decoding and validation are separate steps so that corrupt bytes
(MalformedDescriptor) and a well-formed but incomplete descriptor
(MissingRootFS) stay distinguishable.
"""
import logging
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..exceptions import MalformedDescriptor, MissingRootFS
from ..MODELS.image import Image
from ..MODELS.wire import load_json
from ..UTILS.consistency import ensure_consistent
from ..UTILS.settings import load_settings

logger = logging.getLogger(__name__)


def _decode(data: Union[bytes, bytearray]) -> Image:
    try:
        payload: Any = load_json(data)
    except (ValueError, RecursionError) as e:
        raise MalformedDescriptor(f"invalid image JSON: {e}") from e

    # A top-level null decodes to an empty record.
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise MalformedDescriptor(
            f"invalid image JSON: expected an object, got {type(payload).__name__}"
        )

    try:
        return Image.model_validate(payload)
    except ValidationError as e:
        raise MalformedDescriptor(f"invalid image JSON: {e}") from e


def parse_image(data: Union[bytes, bytearray]) -> Image:
    """
    Creates an image descriptor from its JSON encoding.

    :param data: The encoded descriptor.
    :return: The decoded image, holding ``data`` verbatim as its raw JSON.
    :raises MalformedDescriptor: If the bytes do not decode into an image.
    :raises MissingRootFS: If the decoded image has no ``rootfs``.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedDescriptor(
            f"image JSON must be bytes, got {type(data).__name__}"
        )

    image = _decode(data)
    if image.rootfs is None:
        raise MissingRootFS("invalid image JSON, no RootFS key")

    image._attach_raw(data)
    return image


class ImageParser:
    """
    Parser for image descriptors stored in files or held in memory.
    """
    def __init__(self, strict: Optional[bool] = None):
        """
        Initializes the parser.

        :param strict: Also require the layer-producing history entries to
            match the diff IDs. Defaults to the ``strict_history`` setting.
        """
        if strict is None:
            strict = load_settings().strict_history
        self.strict = strict

    def parse(self, descriptor_path: str) -> Image:
        """
        Parses a descriptor from a path.

        :param descriptor_path: Path to the descriptor file.
        :return: Parsed image.
        """
        with open(descriptor_path, 'rb') as f:
            data = f.read()
        logger.debug("Read %d bytes from %s", len(data), descriptor_path)
        return self.parse_from_bytes(data)

    def parse_from_bytes(self, data: Union[bytes, bytearray]) -> Image:
        """
        Parses a descriptor held in memory.

        :param data: The encoded descriptor.
        :return: Parsed image.
        :raises InconsistentHistory: In strict mode, if history and diff IDs
            disagree.
        """
        try:
            image = parse_image(data)
        except (MalformedDescriptor, MissingRootFS) as e:
            logger.debug("Rejected image descriptor: %s", e)
            raise

        if self.strict:
            ensure_consistent(image)
        return image
