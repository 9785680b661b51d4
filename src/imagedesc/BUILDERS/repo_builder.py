"""
Builds repository views of an image from its descriptor and its archive entry.
"""
import logging
from typing import Dict, List, Optional

from ..MODELS.image import Image
from ..MODELS.manifest import Manifest
from ..MODELS.repository import Layer, Repo
from ..MODELS.wire import ZERO_TIME, format_timestamp

logger = logging.getLogger(__name__)


class RepoBuilder:
    """
    Pairs the layer blobs listed by an archive entry with the history entries
    that produced them, giving one repository view per tag.
    """
    def __init__(self, layer_sizes: Optional[Dict[str, int]] = None):
        """
        Initializes the builder.

        :param layer_sizes: Size in bytes of each layer blob, keyed by its
            path in the archive. Unknown layers are reported with size 0.
        """
        self.layer_sizes = layer_sizes or {}

    def build(self, image: Image, manifest: Manifest) -> List[Repo]:
        """
        Creates the repository views for an image.

        :param image: The parsed descriptor.
        :param manifest: The archive entry locating the image's layers.
        :return: One Repo per tag, or a single untagged Repo.
        """
        layers = self._layers(image, manifest)
        created = format_timestamp(image.created) if image.created != ZERO_TIME else ""

        tags = manifest.repo_tags or [""]
        return [
            Repo(
                tag=tag,
                docker_version=image.docker_version,
                created=created,
                layers=layers,
            )
            for tag in tags
        ]

    def _layers(self, image: Image, manifest: Manifest) -> List[Layer]:
        history = image.layer_history
        if len(history) != len(manifest.layers):
            logger.warning(
                "Image has %d layer-producing history entries but the archive lists %d layers",
                len(history), len(manifest.layers),
            )

        layers = []
        for i, path in enumerate(manifest.layers):
            command = history[i].created_by if i < len(history) else ""
            layers.append(Layer(
                root=path,
                size=self.layer_sizes.get(path, 0),
                command=command,
            ))
        return layers
