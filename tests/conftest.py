"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
import tempfile

from related_content.catalog.loader import reset_static_pool


@pytest.fixture(autouse=True)
def clean_static_pool():
    """Each test starts with an empty process-wide pool cache."""
    reset_static_pool()
    yield
    reset_static_pool()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_catalog(temp_dir):
    """Create a sample catalog file with blog posts and information articles."""
    catalog_path = temp_dir / "catalog.yaml"
    catalog_path.write_text("""
categories:
  - id: cat-travel
    name_en: "Travel"
    name_ar: "سفر"
  - id: cat-food
    name_en: "Food & Dining"
    name_ar: "طعام"

information_sections:
  - id: sec-practical
    name_en: "Practical Info"
    name_ar: "معلومات عملية"

information_categories:
  - id: cat-travel
    name_en: "Travel Essentials"
    name_ar: "أساسيات السفر"

blog_posts:
  - slug: paris-guide
    title_en: "Paris on a Budget"
    category_id: cat-travel
    tags: ["food", "budget"]
    keywords: ["paris", "itinerary"]
    page_type: guide
    reading_time: 7
    published: true
  - slug: london-food
    title_en: "Where to Eat in London"
    category_id: cat-food
    tags: ["Food"]
    keywords: ["restaurants"]
    page_type: list
    published: true
  - slug: draft-post
    title_en: "Unfinished"
    category_id: cat-travel
    tags: ["food", "budget"]
    published: false

information_articles:
  - slug: getting-around
    title_en: "Getting Around Paris"
    category_id: cat-travel
    section_id: sec-practical
    tags: ["budget"]
    keywords: ["Paris"]
    page_type: guide
    published: true
  - slug: visa-basics
    title_en: "Visa Basics"
    section_id: sec-practical
    tags: null
    published: true
  - slug: hidden-info
    title_en: "Hidden"
    published: false
""")
    return catalog_path


@pytest.fixture
def sample_config(temp_dir, sample_catalog):
    """Create a sample config file pointing at the sample catalog."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(f"""
catalog:
  sources:
    - "{sample_catalog}"
  http_timeout: 5

database:
  path: "{temp_dir / 'posts.db'}"

related:
  default_count: 4
  db_timeout_seconds: 1.5
""")
    return config_path
