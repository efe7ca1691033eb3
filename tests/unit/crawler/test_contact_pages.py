"""
Unit tests for contact page discovery.
"""

import pytest

from leadminer.crawler.contact_pages import base_url, find_contact_page_urls, is_contact_link

HOMEPAGE = """
<nav>
  <a href="/kontakt">Kontakt</a>
  <a href="https://www.firma.cz/o-nas/">O nás</a>
  <a href="https://facebook.com/contact">Facebook</a>
  <a href="mailto:info@firma.cz">contact</a>
  <a href="#contact">Contact</a>
  <a href="javascript:void(0)">Kontakt</a>
  <a href="tel:+420602111222">Kontakt</a>
  <a href="/produkty">Produkty</a>
  <a href="/kontakt#mapa">Mapa</a>
  <a href="/impressum">Impressum</a>
  <a href="/napiste-nam">Napište nám</a>
</nav>
"""


@pytest.mark.unit
class TestFindContactPageUrls:
    """Test cases for find_contact_page_urls."""

    def test_same_site_links_in_document_order(self):
        assert find_contact_page_urls(HOMEPAGE, "https://firma.cz/") == [
            "https://firma.cz/kontakt",
            "https://www.firma.cz/o-nas/",
            "https://firma.cz/impressum",
        ]

    def test_limit(self):
        urls = find_contact_page_urls(HOMEPAGE, "https://firma.cz/", limit=10)
        assert urls[-1] == "https://firma.cz/napiste-nam"
        assert len(urls) == 4
        assert find_contact_page_urls(HOMEPAGE, "https://firma.cz/", limit=1) == ["https://firma.cz/kontakt"]
        assert find_contact_page_urls(HOMEPAGE, "https://firma.cz/", limit=0) == []

    def test_anchor_text_match(self):
        html = '<a href="/stranka-42">Kontaktujte nás</a><a href="/cenik">Ceník</a>'
        assert find_contact_page_urls(html, "https://firma.cz") == ["https://firma.cz/stranka-42"]

    def test_relative_links_resolve_against_host(self):
        html = '<a href="kontakty.html">Spojení</a>'
        assert find_contact_page_urls(html, "https://firma.cz/sluzby/") == ["https://firma.cz/kontakty.html"]

    def test_current_page_is_skipped(self):
        html = '<a href="/kontakt">Kontakt</a><a href="/about-us">About</a>'
        assert find_contact_page_urls(html, "https://firma.cz/kontakt") == ["https://firma.cz/about-us"]

    def test_no_links(self):
        assert find_contact_page_urls("", "https://firma.cz") == []
        assert find_contact_page_urls("<p>Bez odkazů</p>", "https://firma.cz") == []


@pytest.mark.unit
def test_is_contact_link():
    assert is_contact_link("/en/contact-us", "")
    assert is_contact_link("/stranka", "Napište nám")
    assert not is_contact_link("/produkty", "Produkty")


@pytest.mark.unit
def test_base_url():
    assert base_url("https://www.firma.cz/sluzby/stavby?x=1") == "https://www.firma.cz"
