"""Tests for image/video discovery and hero-image ranking."""

from __future__ import annotations

from pageattrs.images import ImageRanker
from pageattrs.items import ImageRef
from pageattrs.reader import image_refs, video_refs

GALLERY_HTML = """
<html><body>
  <img src="/img/sprite.png" width="900" height="900">
  <img src="/img/small.jpg" width="80" height="300">
  <img src="/img/medium.jpg" width="400" height="300">
  <img src="data:image/gif;base64,R0lGODlhAQABAAAAACw=">
  <img src="/img/unsized.jpg">
  <figure><img src="/img/large.jpg" width="1200" height="800" alt="Large"><figcaption>Big one</figcaption></figure>
  <img src="/img/medium.jpg" width="400" height="300">
</body></html>
"""

VIDEO_HTML = """
<html><body>
  <iframe src="https://www.youtube.com/embed/abc123"></iframe>
  <iframe src="https://ads.example.net/frame"></iframe>
  <video><source src="/media/clip.mp4" type="video/mp4"></video>
  <embed src="https://vimeo.com/moogaloop.swf?clip_id=1">
</body></html>
"""


class TestImageRefs:
    def test_absolute_urls_and_dedupe(self):
        refs = image_refs(GALLERY_HTML, "https://example.com/post")
        urls = [r.url for r in refs]
        assert urls.count("https://example.com/img/medium.jpg") == 1
        assert all(u.startswith("https://example.com/") for u in urls)

    def test_data_uris_skipped(self):
        refs = image_refs(GALLERY_HTML)
        assert not any(r.url.startswith("data:") for r in refs)

    def test_caption_and_size(self):
        large = next(r for r in image_refs(GALLERY_HTML) if r.url.endswith("large.jpg"))
        assert large.caption == "Big one"
        assert large.alt == "Large"
        assert (large.width, large.height, large.area) == (1200, 800, 960000)


class TestVideoRefs:
    def test_known_hosts_and_video_tags(self):
        refs = video_refs(VIDEO_HTML, "https://example.com/")
        assert [(r.url, r.kind) for r in refs] == [
            ("https://www.youtube.com/embed/abc123", "embed"),
            ("https://example.com/media/clip.mp4", "video"),
            ("https://vimeo.com/moogaloop.swf?clip_id=1", "embed"),
        ]


class TestImageRanker:
    def test_largest_first_then_unsized(self):
        ranker = ImageRanker(GALLERY_HTML, "https://example.com/post", min_width=100, min_height=100)
        urls = [img.url for img in ranker.best_images(limit=None)]
        assert urls == [
            "https://example.com/img/large.jpg",
            "https://example.com/img/medium.jpg",
            "https://example.com/img/unsized.jpg",
        ]

    def test_minimums_are_configurable(self):
        ranker = ImageRanker(GALLERY_HTML, min_width=500, min_height=500)
        urls = [img.url for img in ranker.best_images()]
        assert urls == ["/img/large.jpg", "/img/unsized.jpg"]

    def test_limit(self):
        ranker = ImageRanker(GALLERY_HTML, min_width=100, min_height=100)
        assert len(ranker.best_images(limit=1)) == 1

    def test_no_images(self):
        assert ImageRanker("<p>text only</p>").best_images() == []


class _StrippedReader:
    """Reader double whose content images carry no declared size."""

    def __init__(self, urls):
        self._urls = urls

    def images(self, limit=None):
        return [ImageRef(url=url) for url in self._urls]


class TestImageRankerWithReader:
    def test_sizes_come_from_page_markup(self):
        reader = _StrippedReader(["/img/small.jpg", "/img/medium.jpg", "/img/large.jpg"])
        ranker = ImageRanker(GALLERY_HTML, min_width=100, min_height=100, reader=reader)
        ranked = ranker.best_images(limit=None)
        assert [img.url for img in ranked] == [
            "/img/large.jpg",
            "/img/medium.jpg",
            "/img/unsized.jpg",
        ]
        assert (ranked[0].width, ranked[0].height) == (1200, 800)

    def test_content_image_below_minimum_dropped(self):
        reader = _StrippedReader(["/img/small.jpg"])
        ranker = ImageRanker(GALLERY_HTML, min_width=100, min_height=100, reader=reader)
        assert "/img/small.jpg" not in [img.url for img in ranker.best_images(limit=None)]
