"""Tests for the case-study detail renderer."""

from conftest import RECORDS, make_project
from portfolio_site.models import Project
from portfolio_site.render.detail import render_detail, render_header, render_load_error, render_not_found


def _section_ids(project):
    return [s.id for s in render_detail(project).sections]


class TestSections:
    def test_full_record_section_order(self):
        project = Project.model_validate(RECORDS[0])
        assert _section_ids(project) == [
            "overview", "problem-goals", "research-ux", "design",
            "build", "demo-code", "outcomes", "gallery",
        ]

    def test_absent_sections_omitted(self):
        assert _section_ids(make_project()) == []
        assert _section_ids(make_project(overview="Hi")) == ["overview"]

    def test_empty_values_do_not_make_sections(self):
        project = make_project(
            overview="   ", problem=[], goals=[""], design={"description": ""}, build={}, outcomes=["Prose only"],
        )
        assert _section_ids(project) == []

    def test_problem_list_renders_bullets(self):
        view = render_detail(make_project(problem=["One", "Two"]))
        problem = view.node().find_by_id("problem-content")
        assert [li.text() for li in problem.find_all("li")] == ["One", "Two"]

    def test_problem_string_renders_paragraph(self):
        view = render_detail(make_project(problem="Just one paragraph."))
        problem = view.node().find_by_id("problem-content")
        assert problem.find_all("ul") == []
        assert problem.find_all("p")[0].text() == "Just one paragraph."

    def test_outcome_tiles(self):
        project = make_project(outcomes=[{"label": "UI bugs", "value": "-45%"}, {"label": "Users", "value": 1200}])
        tiles = render_detail(project).node().find_all(class_="outcome-metric")
        assert [(t.find_all(class_="outcome-metric__value")[0].text(),
                 t.find_all(class_="outcome-metric__label")[0].text()) for t in tiles] == [
            ("-45%", "UI bugs"), ("1200", "Users"),
        ]

    def test_section_nodes_carry_anchor_ids(self):
        node = render_detail(Project.model_validate(RECORDS[0])).node()
        assert node.find_by_id("research-ux") is not None
        assert node.find_by_id("gallery").find_all(class_="gallery__caption") == []


class TestHeader:
    def test_meta_and_links(self):
        header = render_header(Project.model_validate(RECORDS[0]))
        assert header.find_by_id("project-title").text() == "Atlas Design System"
        assert header.find_by_id("project-year").text() == "2024"
        labels = [a.text() for a in header.find_by_id("project-links").find_all("a")]
        assert labels == ["Live Demo", "View Code"]

    def test_minimal_header(self):
        header = render_header(make_project(title="Bare"))
        assert header.find_by_id("project-subtitle") is None
        assert header.find_by_id("project-links") is None
        assert header.find_by_id("project-hero-image").text() == "No image available"

    def test_missing_title_shows_slug(self):
        header = render_header(Project.model_validate({"slug": "a", "year": 2020}))
        assert header.find_by_id("project-title").text() == "a"


def test_failure_pages():
    assert render_not_found().find_all("h1")[0].text() == "404"
    assert render_load_error().find_all(class_="error-page__subtitle")[0].text() == "Something went wrong"
