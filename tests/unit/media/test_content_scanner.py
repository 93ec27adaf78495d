from __future__ import annotations

import pytest

from src.studio.media.content_scanner import scan_temp_references


@pytest.mark.unit
def test_scan_finds_temp_image_with_host_and_query() -> None:
    content = "<p>intro</p><img src='https://store/uploads/temp/x.jpg?t=123' alt='x'>"

    references = scan_temp_references(content)

    assert len(references) == 1
    ref = references[0]
    assert ref.full_url == "https://store/uploads/temp/x.jpg?t=123"
    assert ref.temp_path == "temp/x.jpg"
    assert ref.file_name == "x.jpg"
    assert ref.query_stripped == "https://store/uploads/temp/x.jpg"
    assert ref.host_stripped == "/uploads/temp/x.jpg?t=123"


@pytest.mark.unit
def test_scan_preserves_order_and_deduplicates() -> None:
    content = (
        '<img src="https://s/storage/v1/object/public/uploads/temp/b.png">'
        '<img class="wide" src="/uploads/temp/a.jpg">'
        '<img src="https://s/storage/v1/object/public/uploads/temp/b.png">'
    )

    references = scan_temp_references(content)

    assert [ref.file_name for ref in references] == ["b.png", "a.jpg"]


@pytest.mark.unit
def test_scan_ignores_permanent_and_non_image_urls() -> None:
    content = (
        '<img src="https://store/uploads/journals/7/a.jpg">'
        '<a href="https://store/uploads/temp/link.jpg">link</a>'
        '<img src="https://store/uploads/templates/b.jpg">'
        '<img src="https://store/a.jpg?next=/temp/c.jpg">'
    )

    assert scan_temp_references(content) == []


@pytest.mark.unit
def test_scan_empty_content_returns_empty_list() -> None:
    assert scan_temp_references("") == []
    assert scan_temp_references("<p>No images at all</p>") == []


@pytest.mark.unit
def test_scan_is_case_insensitive_on_tag_and_keeps_nested_names() -> None:
    content = '<IMG SRC="https://store/uploads/temp/2024/05/photo.webp">'

    references = scan_temp_references(content)

    assert references[0].file_name == "2024/05/photo.webp"
    assert references[0].temp_path == "temp/2024/05/photo.webp"


@pytest.mark.unit
def test_scan_honours_custom_prefix() -> None:
    content = '<img src="https://store/uploads/staging/y.jpg"><img src="https://store/uploads/temp/z.jpg">'

    references = scan_temp_references(content, temp_prefix="staging")

    assert [ref.temp_path for ref in references] == ["staging/y.jpg"]
