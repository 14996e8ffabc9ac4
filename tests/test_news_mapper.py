import pytest

from epress.news.mapper import to_article, to_articles
from epress.news.model import Article, Category, UNKNOWN_SOURCE
from epress.news.source.gnews import GNewsArticle, GNewsSource


def make_raw(**overrides) -> GNewsArticle:
    data = {
        "title": "Budget announced",
        "description": "The chancellor set out plans.",
        "publishedAt": "2024-03-06T12:30:00Z",
        "url": "https://news.example/budget",
        "image": "https://news.example/budget.png",
        "source": {"name": "Example News", "url": "https://news.example"},
    }
    data.update(overrides)
    return GNewsArticle.model_validate(data)


class TestArticleMapper:

    def test_maps_every_field(self):
        article = to_article(make_raw())

        assert article == Article(
            headline="Budget announced",
            summary="The chancellor set out plans.",
            date="2024-03-06T12:30:00Z",
            link="https://news.example/budget",
            image_url="https://news.example/budget.png",
            source="Example News",
        )

    @pytest.mark.parametrize("description, image", [
        (None, None),
        (None, "https://news.example/img.png"),
        ("Some text", None),
    ])
    def test_absent_optional_fields_become_empty_strings(self, description, image):
        article = to_article(make_raw(description=description, image=image))

        assert article.summary == (description or "")
        assert article.image_url == (image or "")
        assert article.has_image is (image is not None)

    @pytest.mark.parametrize("source", [{}, {"name": None, "url": None}, {"name": "  ", "url": "x"}])
    def test_missing_source_name_falls_back(self, source):
        assert to_article(make_raw(source=source)).source == UNKNOWN_SOURCE

    @pytest.mark.parametrize("overrides", [{"source": None}, {}])
    def test_null_or_absent_source_object_falls_back(self, overrides):
        data = {"title": "t", "publishedAt": "d", "url": "u", **overrides}
        assert to_article(GNewsArticle.model_validate(data)).source == UNKNOWN_SOURCE

    def test_record_without_source_object(self):
        raw = make_raw()
        raw.source = GNewsSource()
        assert to_article(raw).source == UNKNOWN_SOURCE

    def test_values_pass_through_unvalidated(self):
        article = to_article(make_raw(url="not a url", publishedAt="yesterday-ish"))

        assert article.link == "not a url"
        assert article.date == "yesterday-ish"

    def test_to_articles_keeps_order(self):
        raws = [make_raw(title=f"Story {i}") for i in range(5)]
        assert [a.headline for a in to_articles(raws)] == [f"Story {i}" for i in range(5)]


class TestArticleModel:

    def test_structural_equality(self):
        first = to_article(make_raw())
        second = to_article(make_raw())

        assert first == second
        assert first is not second
        assert hash(first) == hash(second)

    def test_articles_are_immutable(self):
        article = to_article(make_raw())
        with pytest.raises(AttributeError):
            article.headline = "Changed"  # type: ignore[misc]

    def test_defaults(self):
        article = Article(headline="h", summary="", date="d", link="l")
        assert article.image_url == ""
        assert article.source == "Unknown Source"

    def test_share_text(self):
        article = to_article(make_raw())
        assert article.share_text() == "Budget announced\nhttps://news.example/budget"


class TestCategory:

    def test_fixed_display_order(self):
        assert [c.value for c in Category] == ["General", "Business", "Technology", "Sports", "Health"]

    @pytest.mark.parametrize("value", ["technology", "Technology", "TECHNOLOGY", " Technology "])
    def test_parse_ignores_case(self, value):
        assert Category.parse(value) is Category.TECHNOLOGY

    def test_query_value_is_lower_case(self):
        assert Category.SPORTS.query_value == "sports"

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValueError, match="Available categories"):
            Category.parse("Entertainment")
