"""
Unit tests for CompanyNameExtractor.
"""

import time

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from leadminer.extractor.company_name import CompanyNameExtractor, clean_company_name, is_valid_company_name

JSON_LD_PAGE = """
<html><head>
<title>Úvod | Pekárna Kolář</title>
<script type="application/ld+json">
{"@context": "https://schema.org", "@type": "Organization", "name": "Pekárna Kolář s.r.o."}
</script>
</head><body><p>Čerstvé pečivo každý den.</p></body></html>
"""


@pytest.mark.unit
class TestCompanyNameExtractor:
    """Test cases for CompanyNameExtractor."""

    def setup_method(self):
        self.extractor = CompanyNameExtractor()

    def test_empty_html(self):
        assert self.extractor.extract("") == []
        assert self.extractor.extract_single("") is None

    def test_structured_data_has_highest_priority(self):
        names = self.extractor.extract(JSON_LD_PAGE)
        assert names[0] == "Pekárna Kolář s.r.o."
        assert "Pekárna Kolář" in names
        assert "Úvod" not in names

    def test_json_ld_graph_and_schema_url_type(self):
        html = """<script type="application/ld+json">
        {"@graph": [{"@type": "WebSite", "name": "Web"}, {"@type": "https://schema.org/LocalBusiness", "name": "Autoservis Beneš"}]}
        </script>"""
        assert self.extractor.extract_single(html) == "Autoservis Beneš"

    def test_malformed_json_ld_is_skipped(self):
        html = """
        <script type="application/ld+json">{"@type": "Organization", "name": }</script>
        <meta property="og:site_name" content="Květinářství Lilie">
        """
        assert self.extractor.extract_single(html) == "Květinářství Lilie"

    def test_microdata_name(self):
        html = """
        <div itemscope itemtype="https://schema.org/Organization">
          <span itemprop="name">Zahradnictví Hora</span>
        </div>"""
        assert self.extractor.extract_single(html) == "Zahradnictví Hora"

    def test_site_name_with_content_first(self):
        html = '<meta content="Pekárna Kolář" property="og:site_name">'
        assert self.extractor.extract(html) == ["Pekárna Kolář"]

    def test_legal_form_in_text(self):
        html = "<footer><p>Provozovatel: Truhlářství Dvořák s.r.o., Praha 4</p></footer>"
        assert self.extractor.extract_single(html) == "Truhlářství Dvořák s.r.o."

    def test_legal_form_with_comma(self):
        html = "<p>Novák & Syn, s.r.o.</p>"
        assert self.extractor.extract_single(html) == "Novák & Syn, s.r.o."

    def test_leading_noise_word_is_dropped(self):
        html = "<p>Kontakt Stavby Horák a.s.</p>"
        assert self.extractor.extract_single(html) == "Stavby Horák a.s."

    def test_copyright_notice(self):
        html = "<footer>© 2024 Pekárna Kolář. Všechna práva vyhrazena.</footer>"
        assert self.extractor.extract_single(html) == "Pekárna Kolář"

    def test_title_fragment_is_lowest_priority(self):
        html = "<title>Kontakt - Instalatérství Malý</title><p>© 2023 Instalace Malý s.r.o.</p>"
        assert self.extractor.extract(html) == ["Instalace Malý s.r.o.", "Instalatérství Malý"]

    def test_generic_titles_are_rejected(self):
        assert self.extractor.extract("<title>Home</title>") == []

    def test_case_insensitive_deduplication(self):
        html = '<meta property="og:site_name" content="PEKÁRNA KOLÁŘ"><title>Pekárna Kolář</title>'
        assert self.extractor.extract(html) == ["PEKÁRNA KOLÁŘ"]

    def test_long_unbroken_token_is_fast(self):
        html = "<p>" + "A" * 40000 + "</p><p>Provozovatel: Stavby Horák a.s.</p>"
        start_time = time.time()
        assert self.extractor.extract_single(html) == "Stavby Horák a.s."
        assert time.time() - start_time < 2.0

    @given(st.text(max_size=300))
    @settings(max_examples=50, deadline=None)
    def test_never_raises_and_is_deterministic(self, text):
        names = self.extractor.extract(text)
        assert names == self.extractor.extract(text)
        assert len({n.casefold() for n in names}) == len(names)


@pytest.mark.unit
class TestCompanyNameHelpers:
    """Test cleaning and validation helpers."""

    def test_clean_company_name(self):
        assert clean_company_name("  Pekárna   Kolář s.r.o. | ") == "Pekárna Kolář s.r.o."

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Pekárna Kolář", True),
            ("X", False),
            ("2024", False),
            ("Kontakt", False),
            ("All rights reserved", False),
            ("https://firma.cz", False),
            (None, False),
        ],
    )
    def test_is_valid_company_name(self, name, expected):
        assert is_valid_company_name(name) is expected
