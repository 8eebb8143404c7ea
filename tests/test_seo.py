"""Tests for page head metadata."""

import json

from conftest import RECORDS, make_project
from portfolio_site.config import SEOConfig
from portfolio_site.dom import to_html
from portfolio_site.models import Project
from portfolio_site.seo import HeadDocument, SEOWriter

CONFIG = SEOConfig(base_url="https://site.example/", author="Test Author", default_image="/assets/social.jpg")


class TestUpdateMeta:
    def test_updates_in_place(self):
        writer = SEOWriter(CONFIG)
        writer.update_meta("description", "first")
        writer.update_meta("description", "second")
        assert writer.head.count_meta("description") == 1
        assert writer.head.meta_content("description") == "second"

    def test_social_keys_use_property(self):
        writer = SEOWriter(CONFIG)
        writer.update_meta("og:title", "T")
        writer.update_meta("twitter:title", "T")
        writer.update_meta("description", "D")
        assert [m.attr for m in writer.head.meta] == ["property", "property", "name"]

    def test_empty_content_ignored(self):
        writer = SEOWriter(CONFIG)
        writer.update_meta("description", "")
        assert writer.head.get_meta("description") is None


class TestApplyProject:
    def test_applying_twice_is_idempotent(self):
        project = Project.model_validate(RECORDS[0])
        writer = SEOWriter(CONFIG)
        writer.apply(project)
        before = (writer.head.title, [(m.key, m.content) for m in writer.head.meta], writer.head.json_ld)
        writer.apply(project)
        after = (writer.head.title, [(m.key, m.content) for m in writer.head.meta], writer.head.json_ld)
        assert before == after
        assert writer.head.count_meta("description") == 1
        assert writer.head.meta_content("description") == project.overview

    def test_title_canonical_and_images(self):
        writer = SEOWriter(CONFIG)
        writer.apply(Project.model_validate(RECORDS[0]))
        assert writer.head.title == "Atlas Design System - Test Author"
        assert writer.head.canonical == "https://site.example/projects/atlas.html"
        assert writer.head.meta_content("og:image") == "https://site.example/assets/atlas.jpg"
        assert writer.head.meta_content("og:type") == "article"

    def test_default_image_and_description(self):
        writer = SEOWriter(CONFIG)
        writer.apply(make_project(slug="bare", title="Bare"))
        assert writer.head.meta_content("twitter:image") == "https://site.example/assets/social.jpg"
        assert writer.head.meta_content("description") == "A project by Test Author: Bare"

    def test_json_ld(self):
        writer = SEOWriter(CONFIG)
        writer.apply(Project.model_validate(RECORDS[0]))
        data = writer.head.json_ld
        assert data["@type"] == "CreativeWork"
        assert data["dateCreated"] == "2024-01-01"
        assert data["keywords"] == "ui, design-systems"
        assert data["mainEntityOfPage"]["url"] == "https://atlas.example"

    def test_json_ld_drops_missing_year(self):
        writer = SEOWriter(CONFIG)
        writer.apply(make_project())
        assert "dateCreated" not in writer.head.json_ld
        assert "mainEntityOfPage" not in writer.head.json_ld

    def test_missing_title_falls_back_to_slug(self):
        writer = SEOWriter(CONFIG)
        writer.apply(Project.model_validate({"slug": "a", "year": 2020}))
        assert writer.head.title == "a - Test Author"
        assert writer.head.json_ld["name"] == "a"


class TestOtherPages:
    def test_homepage_person(self):
        writer = SEOWriter(CONFIG.model_copy(update={"same_as": ["https://github.com/x"]}))
        writer.apply_homepage()
        assert writer.head.canonical == "https://site.example/"
        assert writer.head.json_ld["@type"] == "Person"
        assert writer.head.json_ld["sameAs"] == ["https://github.com/x"]

    def test_not_found_is_noindex(self):
        writer = SEOWriter(CONFIG)
        writer.init()
        writer.apply_not_found()
        assert writer.head.meta_content("robots") == "noindex"
        assert writer.head.count_meta("robots") == 1


class TestHeadDocument:
    def test_script_close_is_escaped(self):
        head = HeadDocument(title="T", json_ld={"about": "</script><b>"})
        html = "".join(to_html(n) for n in head.nodes())
        assert "</script><b>" not in html
        payload = html.split('id="json-ld">')[1].split("</script>")[0]
        assert json.loads(payload)["about"] == "</script><b>"
