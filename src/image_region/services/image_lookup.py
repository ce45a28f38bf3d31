"""
Image Lookup Service - resolves image identifiers to rendering descriptors.
"""

import logging
from typing import List, Optional

from image_region.common.base import ImageDescriptor
from image_region.common.constants import RenderingConstants
from image_region.core.rendering import RenderingClient
from image_region.core.utils import timer

logger = logging.getLogger(__name__)


class ImageLookup:
    """
    Looks up images and their primary pixel set through the rendering client.

    Queries run across all groups the session can see; the owning group of
    each image is returned so rendering can be scoped to it.
    """

    def __init__(self, client: RenderingClient, query_group: str = RenderingConstants.ALL_GROUPS):
        """
        Initialize image lookup.

        Args:
            client: Rendering client to query with
            query_group: Group context for the query, "-1" for all groups
        """
        self.client = client
        self.query_group = query_group

    def get_images(self, image_ids: List[int]) -> List[ImageDescriptor]:
        """
        Retrieve descriptors for the given image identifiers.

        Args:
            image_ids: Image identifiers to query for

        Returns:
            Descriptors for the images that exist and are visible
        """
        ctx = {RenderingConstants.GROUP_CONTEXT_KEY: self.query_group}
        with timer("getImages"):
            return list(self.client.find_images(list(image_ids), ctx))

    def get_image(self, image_id: int) -> Optional[ImageDescriptor]:
        """
        Retrieve a single image descriptor.

        Args:
            image_id: Image identifier

        Returns:
            ImageDescriptor or None if the image does not exist
        """
        return next(iter(self.get_images([image_id])), None)
