"""Hero-image ranking by declared dimensions.

Used instead of the reader's image list when ``image_strategy`` is
``"ranked"``.  Only ``width``/``height`` attributes are consulted; no image
is downloaded.
"""

from __future__ import annotations

import logging

from pageattrs.items import ImageRef
from pageattrs.reader import ReaderDocument, image_refs

logger = logging.getLogger(__name__)

# URL substrings that almost never point at a content image
_NOISE_SUBSTRINGS: tuple[str, ...] = (
    "sprite",
    "spacer",
    "pixel",
    "avatar",
    "favicon",
    "logo",
    "icon",
    "badge",
    "button",
    "/ads/",
    "doubleclick",
    "gravatar.com",
    "feeds.feedburner.com",
)


class ImageRanker:
    """Pick the most prominent images of a page.

    Images whose declared size is below the minimum in either direction are
    dropped.  Sized images rank by area, largest first; images without a
    declared size follow in document order.

    Args:
        html:       Raw page markup.
        url:        Page URL, used to absolutize image links.
        min_width:  Minimum declared width in pixels.
        min_height: Minimum declared height in pixels.
        reader:     Shared reader; its content images are preferred over the
                    rest of the page.
    """

    def __init__(
        self,
        html: str,
        url: str | None = None,
        *,
        min_width: int = 100,
        min_height: int = 100,
        reader: ReaderDocument | None = None,
    ) -> None:
        self._html = html
        self._url = url or ""
        self._min_width = min_width
        self._min_height = min_height
        self._reader = reader

    def _candidates(self) -> list[ImageRef]:
        page_wide = image_refs(self._html, self._url)
        if self._reader is None:
            return page_wide
        # Readability strips width/height, so sizes come from the page-wide copy
        declared = {img.url: img for img in page_wide}
        content: list[ImageRef] = []
        for img in self._reader.images():
            original = declared.get(img.url)
            if original is not None:
                img = img.model_copy(
                    update={
                        "width": img.width if img.width is not None else original.width,
                        "height": img.height if img.height is not None else original.height,
                    },
                )
            content.append(img)
        seen = {img.url for img in content}
        return content + [img for img in page_wide if img.url not in seen]

    def _acceptable(self, img: ImageRef) -> bool:
        lowered = img.url.lower()
        if any(noise in lowered for noise in _NOISE_SUBSTRINGS):
            return False
        if img.width is not None and img.width < self._min_width:
            return False
        return not (img.height is not None and img.height < self._min_height)

    def best_images(self, limit: int | None = 3) -> list[ImageRef]:
        candidates = self._candidates()
        kept = [img for img in candidates if self._acceptable(img)]
        sized = [img for img in kept if img.width is not None and img.height is not None]
        unsized = [img for img in kept if img.width is None or img.height is None]
        sized.sort(key=lambda img: img.area, reverse=True)
        ranked = sized + unsized
        logger.debug("Ranked %d of %d candidate images", len(ranked), len(candidates))
        return ranked[:limit] if limit is not None else ranked
