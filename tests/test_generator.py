"""Tests for the static page generator."""

import json
from datetime import datetime

import pytest

from portfolio_site.generator import LISTING_END, LISTING_START, ProjectGenerator, stamp
from portfolio_site.models import ProjectNotFoundError


@pytest.fixture()
def generator(context):
    return ProjectGenerator(context)


def _saved(generator):
    return json.loads(generator.data_path.read_text())["projects"]


class TestStamp:
    def test_replaces_known_tokens(self):
        assert stamp("<h1>{{TITLE}}</h1>{{OTHER}}", {"TITLE": "Hi"}) == "<h1>Hi</h1>{{OTHER}}"

    def test_values_are_not_restamped(self):
        assert stamp("{{A}}{{B}}", {"A": "{{B}}", "B": "b"}) == "{{B}}b"


class TestDataFile:
    def test_load(self, generator):
        assert [p.slug for p in generator.load()] == ["atlas", "weather", "dashboard"]

    def test_load_missing_file(self, generator):
        generator.data_path.unlink()
        with pytest.raises(ValueError, match="does not exist"):
            generator.load()
        assert generator.load(allow_empty=True) == []

    def test_load_empty_list(self, generator):
        generator.data_path.write_text('{"projects": []}')
        with pytest.raises(ValueError, match="No projects found"):
            generator.load()

    def test_add_project_appends_with_unique_slug(self, generator):
        project = generator.add_project("Weather", "Another forecast", technologies=["Python"], features=["Alerts"])
        assert project.slug == "weather-2"
        assert project.year == datetime.now().year
        records = _saved(generator)
        assert [r["slug"] for r in records] == ["atlas", "weather", "dashboard", "weather-2"]
        assert records[-1]["build"] == {"features": ["Alerts"]}
        assert records[0]["heroImage"] == "/assets/atlas.jpg"

    def test_remove_project(self, generator):
        removed = generator.remove_project("weather")
        assert removed.title == "Weather App"
        assert [r["slug"] for r in _saved(generator)] == ["atlas", "dashboard"]

    def test_remove_unknown(self, generator):
        with pytest.raises(ProjectNotFoundError):
            generator.remove_project("nope")

    def test_unknown_keys_survive_add_and_remove(self, generator):
        generator.data_path.write_text(json.dumps({"projects": [
            {"slug": "x", "title": "X", "year": 2021, "featured": True, "date": "2021-03"},
        ]}))
        generator.add_project("New One")
        records = _saved(generator)
        assert records[0] == {"slug": "x", "title": "X", "year": 2021, "featured": True, "date": "2021-03"}
        assert records[1]["slug"] == "new-one"

        generator.remove_project("new-one")
        assert _saved(generator) == [records[0]]


class TestBuild:
    def test_build_writes_pages_and_index(self, generator):
        pages = generator.build()
        out = generator.output_dir
        assert [p.name for p in pages] == ["atlas.html", "weather.html", "dashboard.html", "index.html"]

        atlas = (out / "projects" / "atlas.html").read_text()
        assert "<title>Atlas Design System - Test Author</title>" in atlas
        assert 'id="next-project"' in atlas and 'href="weather.html"' in atlas
        assert 'id="prev-project"' not in atlas
        assert 'href="#research-ux"' in atlas
        assert "{{" not in atlas

        index = (out / "index.html").read_text()
        assert LISTING_START in index and LISTING_END in index
        assert index.count('data-project-slug="') == 3
        assert "Showing 3 of 3 projects" in index
        assert "{{" not in index

    def test_existing_index_keeps_surrounding_markup(self, generator):
        generator.load()
        index = generator.output_dir / "index.html"
        index.parent.mkdir(parents=True)
        index.write_text(f"<p>keep me</p>\n{LISTING_START}\n<p>old listing</p>\n{LISTING_END}\n<footer></footer>\n")

        generator.update_homepage()
        html = index.read_text()
        assert "keep me" in html and "<footer></footer>" in html
        assert "old listing" not in html
        assert 'data-project-slug="dashboard"' in html

    def test_existing_index_without_markers(self, generator):
        generator.load()
        index = generator.output_dir / "index.html"
        index.parent.mkdir(parents=True)
        index.write_text("<html>hand written</html>")

        with pytest.raises(ValueError, match="projects:start"):
            generator.update_homepage()
        assert index.read_text() == "<html>hand written</html>"
