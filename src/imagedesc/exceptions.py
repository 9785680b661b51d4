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

"""Exceptions raised while decoding image descriptors and archive indexes."""


class DescriptorError(Exception):
    """Base exception for all descriptor-related errors."""

    pass


class MalformedDescriptor(DescriptorError):
    """Raised when the bytes do not decode into an image descriptor."""

    pass


class MissingRootFS(DescriptorError):
    """Raised when a decoded descriptor has no root filesystem."""

    pass


class InconsistentHistory(DescriptorError):
    """Raised when non-empty history entries do not match the layer diff IDs."""

    def __init__(self, non_empty_history: int, diff_ids: int):
        self.non_empty_history = non_empty_history
        self.diff_ids = diff_ids
        super().__init__(
            f"history has {non_empty_history} layer-producing entries "
            f"but rootfs lists {diff_ids} diff IDs"
        )


class MalformedManifest(DescriptorError):
    """Raised when an archive index cannot be decoded."""

    pass
