import requests

from fbmedia.extractors import MediaExtractor, extract_media
from fbmedia.extractors.patterns import (
    clean_url,
    find_description,
    find_download_links,
    find_thumbnail,
    find_title,
)
from fbmedia.models import MediaReference, MediaType

from .conftest import StubAdapter, make_client

VIDEO = MediaReference(id="123456789", type=MediaType.VIDEO)
REEL = MediaReference(id="555", type=MediaType.REEL)

PAGE = """
<html><head>
<title>Cat learns to skate &amp; falls | Facebook</title>
<meta name="description" content="A cat on a skateboard.">
<meta property="og:image" content="https://scontent.example/thumb.jpg?a=1&amp;b=2">
</head><body><script>
{"hd_src":"https:\\/\\/video.example\\/hd.mp4?x=1\\u0026y=2",
 "sd_src":"https:\\/\\/video.example\\/sd.mp4",
 video_src: 'https://video.example/fallback.mp4'}
</script></body></html>
"""


def test_canonical_urls(client):
    assert client.canonical_url(VIDEO) == "https://www.facebook.com/watch/?v=123456789"
    assert client.canonical_url(REEL) == "https://www.facebook.com/reel/555"
    shared_reel = MediaReference(id="9", type=MediaType.SHARED_REEL)
    shared_video = MediaReference(id="8", type=MediaType.SHARED_VIDEO)
    assert client.canonical_url(shared_reel) == "https://www.facebook.com/reel/9"
    assert client.canonical_url(shared_video) == "https://www.facebook.com/watch/?v=8"


def test_fetch_uses_timeout_and_browser_headers(stub, extractor):
    stub.body = PAGE
    extractor.extract(VIDEO)

    request, kwargs = stub.calls[0]
    assert request.url == "https://www.facebook.com/watch/?v=123456789"
    assert kwargs["timeout"] == 10.0
    assert request.headers["User-Agent"].startswith("Mozilla/5.0")
    assert "text/html" in request.headers["Accept"]
    assert request.headers["Accept-Language"] == "en-US,en;q=0.9"


def test_extracts_links_and_metadata(stub, extractor):
    stub.body = PAGE
    result = extractor.extract(VIDEO)

    assert result.success
    assert result.media_id == "123456789"
    assert result.media_type is MediaType.VIDEO
    assert result.download_links == {
        "hd": "https://video.example/hd.mp4?x=1&y=2",
        "sd": "https://video.example/sd.mp4",
        "fallback": "https://video.example/fallback.mp4",
    }
    assert list(result.download_links) == ["hd", "sd", "fallback"]
    assert result.metadata.title == "Cat learns to skate & falls"
    assert result.metadata.description == "A cat on a skateboard."
    assert result.metadata.thumbnail == "https://scontent.example/thumb.jpg?a=1&b=2"
    assert result.metadata.source_url == "https://www.facebook.com/watch/?v=123456789"


def test_only_matched_qualities_are_present(stub, extractor):
    stub.body = '<script>var cfg = {hd_src:"http://x/hd.mp4"};</script>'
    result = extractor.extract(VIDEO)

    assert result.success
    assert result.download_links == {"hd": "http://x/hd.mp4"}


def test_patterns_are_case_insensitive():
    links = find_download_links("HIGH_QUALITY_SRC = 'http://x/a.mp4' Standard_Quality_Src:\"http://x/b.mp4\"")
    assert links == {"hd": "http://x/a.mp4", "sd": "http://x/b.mp4"}


def test_playable_url_keys():
    page = '"playable_url":"https:\\/\\/v\\/sd.mp4","playable_url_quality_hd":"https:\\/\\/v\\/hd.mp4"'
    assert find_download_links(page) == {
        "hd": "https://v/hd.mp4",
        "sd": "https://v/sd.mp4",
    }


def test_no_links_is_still_success(stub, extractor):
    stub.body = "<html><head><title>Log in to Facebook</title></head></html>"
    result = extractor.extract(REEL)

    assert result.success
    assert result.download_links == {}
    assert result.metadata.title == "Log in to Facebook"
    assert result.metadata.description is None
    assert result.metadata.thumbnail is None
    assert result.metadata.source_url == "https://www.facebook.com/reel/555"


def test_title_suffix_variants():
    assert find_title("<title>Clip - Facebook</title>") == "Clip"
    assert find_title("<title>  Facebook  </title>") == "Facebook"
    assert find_title("<title></title>") is None
    assert find_title("<p>no title</p>") is None


def test_clean_url():
    assert clean_url("https:\\/\\/a\\/b?c=1\\u0026d=2\\u0025") == "https://a/b?c=1&d=2%"
    assert clean_url("https://a/b?c=1&amp;d=2") == "https://a/b?c=1&d=2"


def test_extraction_is_deterministic(stub, extractor):
    stub.body = PAGE
    first = extractor.extract(VIDEO)
    second = extractor.extract(VIDEO)
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_not_found():
    stub = StubAdapter(status_code=404)
    result = MediaExtractor(make_client(stub)).extract(VIDEO)

    assert not result.success
    assert result.error_message == "Media not found"
    assert result.download_links == {}
    assert "404" in result.error_detail


def test_other_http_error_is_generic_failure():
    stub = StubAdapter(status_code=500)
    result = MediaExtractor(make_client(stub)).extract(VIDEO)

    assert not result.success
    assert result.error_message == "Failed to process media"
    assert result.download_links == {}


def test_timeout_is_generic_failure():
    stub = StubAdapter(exc=requests.exceptions.Timeout("read timed out"))
    result = MediaExtractor(make_client(stub)).extract(REEL)

    assert not result.success
    assert result.error_message == "Failed to process media"
    assert result.error_detail == "read timed out"
    assert len(stub.calls) == 1


def test_connection_error_is_not_retried():
    stub = StubAdapter(exc=requests.exceptions.ConnectionError("dns failure"))
    result = extract_media(VIDEO, make_client(stub))

    assert not result.success
    assert result.error_message == "Failed to process media"
    assert len(stub.calls) == 1


def test_failure_payload_hides_detail_by_default():
    stub = StubAdapter(status_code=404)
    result = MediaExtractor(make_client(stub)).extract(VIDEO)

    assert result.to_dict() == {
        "success": False,
        "message": "Media not found",
        "mediaId": "123456789",
        "mediaType": "video",
    }
    assert "error" in result.to_dict(include_error_detail=True)


def test_meta_attributes_in_either_order():
    page = (
        '<meta content="Reversed order." name="description">'
        "<meta content='https://cdn.example/t.jpg' property='og:image' />"
    )
    assert find_description(page) == "Reversed order."
    assert find_thumbnail(page) == "https://cdn.example/t.jpg"


def test_meta_pattern_stays_inside_its_tag():
    page = '<meta content="wrong"><meta name="description" content="right">'
    assert find_description(page) == "right"
