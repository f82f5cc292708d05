import json

from site_index.crawler.models import Document, VisitedRecord
from site_index.report import records_to_dicts, render_html, render_json

RECORDS = [
    VisitedRecord(url="http://example.com/", content="<h1>Root</h1>", index=1),
    VisitedRecord(url="http://example.com/a", content="<p>A & B</p>", index=2),
]


def test_records_to_dicts_keeps_crawl_order():
    assert records_to_dicts(RECORDS) == [
        {"url": "http://example.com/", "content": "<h1>Root</h1>"},
        {"url": "http://example.com/a", "content": "<p>A & B</p>"},
    ]


def test_render_json(tmp_path):
    out = render_json(RECORDS, tmp_path / "nested" / "crawl.json")
    assert out.exists()
    assert json.loads(out.read_text(encoding="utf-8"))[1]["url"] == "http://example.com/a"


def test_render_html(tmp_path):
    out = render_html(RECORDS, tmp_path / "crawl.html")
    text = out.read_text(encoding="utf-8")
    assert "2 pages" in text
    assert 'href="http://example.com/a"' in text


def test_document_links_resolve_relative_hrefs():
    doc = Document(
        url="http://example.com/blog/post",
        content=(
            '<a href="next">n</a>'
            '<a href="/about?x=1">a</a>'
            '<a href="https://other.org/">o</a>'
            '<a href="javascript:void(0)">j</a>'
            '<a href="MAILTO:x@example.com">m</a>'
            '<a href="">empty</a>'
            '<a name="anchor">no href</a>'
            '<a href="ftp://example.com/file">f</a>'
        ),
    )
    assert doc.links() == [
        "http://example.com/blog/next",
        "http://example.com/about?x=1",
        "https://other.org/",
    ]
