import pytest

from site_index.crawler.frontier import MemoryFrontier
from site_index.crawler.link_filter import LinkFilter, is_eligible, is_excluded
from site_index.crawler.models import CrawlTarget


@pytest.fixture()
def fresh() -> MemoryFrontier:
    return MemoryFrontier()


def test_same_domain_link_is_eligible(target, fresh):
    assert is_eligible("http://example.com/about", target, fresh)


def test_https_link_to_same_domain_is_eligible(target, fresh):
    assert is_eligible("HTTPS://example.com/about", target, fresh)


@pytest.mark.parametrize(
    "link",
    [
        "http://other.com/about",
        "http://sub.example.com/about",
        "http://example.com.evil.com/about",
        "http://example.com:8080/about",
        "mailto:someone@example.com",
    ],
)
def test_foreign_hosts_are_rejected(target, fresh, link):
    assert not is_eligible(link, target, fresh)


def test_exclusion_prefix(target, fresh):
    assert not is_eligible("http://example.com/private/page", target, fresh)
    assert not is_eligible("http://example.com/private", target, fresh)
    assert is_eligible("http://example.com/public/private-area", target, fresh)


def test_is_excluded_uses_path_only():
    t = CrawlTarget(domain="example.com", exclusions=("/admin", "/tmp/"))
    assert is_excluded("http://example.com/admin/users", t)
    assert is_excluded("http://example.com/administration", t)
    assert not is_excluded("http://example.com/tmp", t)
    assert not is_excluded("http://example.com/page?next=/admin", t)


def test_recursive_path_is_rejected(target, fresh):
    assert not is_eligible("http://example.com/a/b/a", target, fresh)
    assert is_eligible("http://example.com/a/b/c", target, fresh)


def test_document_extension_is_rejected(target, fresh):
    assert not is_eligible("http://example.com/file.pdf", target, fresh)
    assert is_eligible("http://example.com/file.pdf.html", target, fresh)


def test_document_with_query_is_rejected_after_normalization(target, fresh):
    assert not is_eligible("http://example.com/file.pdf?download=1", target, fresh)


def test_already_pooled_link_is_rejected(target, fresh):
    fresh.push_pool("http://example.com/about")
    assert not is_eligible("http://example.com/about", target, fresh)
    assert not is_eligible("http://example.com/about?utm=1#top", target, fresh)


def test_already_visited_link_is_rejected(target, fresh):
    fresh.mark_visited("http://example.com/done", "<html></html>")
    assert not is_eligible("http://example.com/done", target, fresh)


def test_filter_has_no_side_effects(target, fresh):
    is_eligible("http://example.com/about", target, fresh)
    assert fresh.pool_size() == 0
    assert not fresh.has_been_attempted("http://example.com/about")


def test_link_filter_as_admit_predicate(target, fresh):
    link_filter = LinkFilter(target, fresh)
    assert fresh.admit("http://example.com/a", link_filter)
    assert not fresh.admit("http://example.com/a", link_filter)
    assert not fresh.admit("http://other.com/a", link_filter)
    assert fresh.pool_size() == 1
