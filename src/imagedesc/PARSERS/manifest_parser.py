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
Parser for the index document of an image archive (``manifest.json``).
"""
import logging
from typing import Any, Union

from pydantic import ValidationError

from ..exceptions import MalformedManifest
from ..MODELS.manifest import ManifestList
from ..MODELS.wire import load_json

logger = logging.getLogger(__name__)


def parse_manifests(data: Union[bytes, bytearray]) -> ManifestList:
    """
    Decodes an archive index.

    :param data: The encoded index, a JSON array of entries.
    :return: The entries in document order.
    :raises MalformedManifest: If the bytes are not a valid index.
    """
    try:
        payload: Any = load_json(data)
    except (ValueError, TypeError, RecursionError) as e:
        raise MalformedManifest(f"invalid manifest JSON: {e}") from e

    if payload is None:
        payload = []
    if not isinstance(payload, list):
        raise MalformedManifest(
            f"invalid manifest JSON: expected an array, got {type(payload).__name__}"
        )

    try:
        return ManifestList.model_validate(payload)
    except ValidationError as e:
        raise MalformedManifest(f"invalid manifest JSON: {e}") from e


class ManifestParser:
    """
    Parser for archive indexes stored in files or held in memory.
    """
    def parse(self, manifest_path: str) -> ManifestList:
        """
        Parses an archive index from a path.

        :param manifest_path: Path to the manifest.json file.
        :return: Parsed entries.
        """
        with open(manifest_path, 'rb') as f:
            data = f.read()
        return self.parse_from_bytes(data)

    def parse_from_bytes(self, data: Union[bytes, bytearray]) -> ManifestList:
        manifests = parse_manifests(data)
        logger.debug("Parsed %d manifest entries", len(manifests))
        return manifests
