"""
Pytest fixtures and configuration for SEO Content Analyzer tests.
"""

import json
from pathlib import Path

import pytest

from seo_content_analyzer.models import PageLinkData


HOME = "https://example.com/"


def filler(words: int, text: str = "readers value clear practical guidance") -> str:
    """Build a run of ordinary words of roughly the requested length."""
    base = text.split()
    return " ".join(base[i % len(base)] for i in range(words))


@pytest.fixture
def sample_article() -> str:
    """A short markdown article with a heading and a question."""
    return (
        "# Content Marketing Guide\n\n"
        "Content marketing helps brands earn attention. "
        "What makes content marketing work?\n\n"
        "Good content answers real questions and builds trust over time."
    )


@pytest.fixture
def star_graph() -> list[PageLinkData]:
    """Homepage linking to four leaf pages, no back-links."""
    leaves = [f"{HOME}page-{i}" for i in range(1, 5)]
    pages = [PageLinkData(url=HOME, internal_links_to=leaves, internal_links_from=[])]
    pages.extend(
        PageLinkData(url=leaf, internal_links_to=[], internal_links_from=[HOME])
        for leaf in leaves
    )
    return pages


@pytest.fixture
def chain_graph() -> list[PageLinkData]:
    """Homepage -> a -> b -> c -> d, each page linked only from the previous one."""
    urls = [HOME] + [f"{HOME}{name}" for name in ("a", "b", "c", "d")]
    pages = []
    for i, url in enumerate(urls):
        pages.append(PageLinkData(
            url=url,
            internal_links_to=[urls[i + 1]] if i + 1 < len(urls) else [],
            internal_links_from=[urls[i - 1]] if i > 0 else [],
        ))
    return pages


@pytest.fixture
def lsi_terms_csv(tmp_path: Path) -> Path:
    """Create a sample LSI terms CSV file."""
    csv_path = tmp_path / "lsi_terms.csv"
    csv_content = """term,relevance,semantic_score,context_strength
search optimization,0.8,0.9,0.7
keyword research,0.6,0.75,0.4
backlinks,70,50,20
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def lsi_terms_excel(tmp_path: Path) -> Path:
    """Create a sample LSI terms Excel file."""
    import pandas as pd

    xlsx_path = tmp_path / "lsi_terms.xlsx"
    data = {
        "Keyword": ["content strategy", "editorial calendar"],
        "Score": [0.9, 0.6],
    }
    pd.DataFrame(data).to_excel(xlsx_path, index=False)
    return xlsx_path


@pytest.fixture
def page_graph_json(tmp_path: Path) -> Path:
    """Create a page graph JSON file using camelCase keys."""
    json_path = tmp_path / "pages.json"
    pages = [
        {"url": HOME, "internalLinksTo": [f"{HOME}blog", f"{HOME}about"]},
        {"url": f"{HOME}blog", "internalLinksTo": [f"{HOME}blog/post"]},
        {"url": f"{HOME}about", "internalLinksTo": []},
        {"url": f"{HOME}blog/post", "internalLinksTo": [HOME]},
        {"url": f"{HOME}landing", "internalLinksTo": [HOME]},
    ]
    json_path.write_text(json.dumps({"pages": pages}))
    return json_path
