"""Unit tests for the built-in site templates."""

from bucketbase.domain.entities import FieldType
from bucketbase.domain.services import get_site_template, list_site_templates


def test_template_ids():
    assert [t.id for t in list_site_templates()] == ["blank", "blog", "portfolio"]


def test_blank_template_has_no_collections():
    assert get_site_template("blank").collections == ()


def test_blog_template_collections():
    blog = get_site_template("blog")

    assert [c.slug for c in blog.collections] == ["posts", "authors"]


def test_portfolio_template_collections():
    portfolio = get_site_template("portfolio")

    assert [c.slug for c in portfolio.collections] == ["projects", "skills"]


def test_unknown_template():
    assert get_site_template("shop") is None


def test_build_fields_gives_fresh_ids_each_time():
    posts = get_site_template("blog").collections[0]

    first = posts.build_fields()
    second = posts.build_fields()

    assert [f.name for f in first] == [f.name for f in second]
    assert {f.id for f in first}.isdisjoint({f.id for f in second})


def test_select_options_are_reduced_to_values():
    posts = get_site_template("blog").collections[0]
    category = next(f for f in posts.build_fields() if f.name == "category")

    assert category.type is FieldType.SELECT
    assert category.options == ["news", "tutorial", "opinion"]
