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
imagedesc - image configuration descriptors

Parses, validates and re-serializes the configuration descriptor of a
container image, keeping the exact bytes it was read from.
"""

__version__ = "0.1.0"
__author__ = "Michael Maillet, Damien Davison, Sacha Davison"
__license__ = "Apache-2.0"

from .exceptions import (
    DescriptorError,
    InconsistentHistory,
    MalformedDescriptor,
    MalformedManifest,
    MissingRootFS,
)
from .MODELS.image import ContainerConfig, HistoryEntry, Image, RootFS
from .MODELS.manifest import Manifest, ManifestList
from .PARSERS.image_parser import ImageParser, parse_image
from .PARSERS.manifest_parser import ManifestParser, parse_manifests

__all__ = [
    "ContainerConfig",
    "DescriptorError",
    "HistoryEntry",
    "Image",
    "ImageParser",
    "InconsistentHistory",
    "MalformedDescriptor",
    "MalformedManifest",
    "Manifest",
    "ManifestList",
    "ManifestParser",
    "MissingRootFS",
    "RootFS",
    "parse_image",
    "parse_manifests",
]
