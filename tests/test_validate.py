"""Tests for frontmatter schema validation and convention checks."""

from datetime import date, datetime

from postcheck.content import (
    InvalidFieldError,
    MissingFieldError,
    check_conventions,
    parse,
    validate,
)


def _fields(errors, kind):
    return [e.field for e in errors if isinstance(e, kind)]


class TestValidate:
    def test_valid_article_has_no_errors(self, docker_article):
        assert validate(parse(docker_article).metadata) == []

    def test_title_without_category_yields_single_missing_slug(self):
        errors = validate(parse("---\ntitle: 'X'\n---\nBody\n").metadata)
        assert errors == [MissingFieldError("category.slug")]

    def test_missing_title_does_not_stop_other_checks(self):
        errors = validate({"tags": "docker", "date": "last tuesday"})
        assert _fields(errors, MissingFieldError) == ["title", "category.slug"]
        assert _fields(errors, InvalidFieldError) == ["tags", "date"]

    def test_blank_values_count_as_missing(self):
        errors = validate({"title": "   ", "category": {"name": "Docker", "slug": ""}})
        assert errors == [MissingFieldError("title"), MissingFieldError("category.slug")]

    def test_category_that_is_not_a_mapping(self):
        errors = validate({"title": "X", "category": "docker"})
        assert _fields(errors, MissingFieldError) == ["category.slug"]
        assert _fields(errors, InvalidFieldError) == ["category"]

    def test_nested_value_types(self):
        errors = validate(
            {
                "title": "X",
                "category": {"name": 42, "slug": "docker"},
                "author": ["someone"],
                "tags": ["docker", 3, ""],
                "readingTime": 8,
            }
        )
        assert _fields(errors, MissingFieldError) == []
        assert sorted(_fields(errors, InvalidFieldError)) == sorted(
            ["readingTime", "category.name", "author", "tags[1]", "tags[2]"]
        )

    def test_dates_accept_iso_forms(self):
        meta = {
            "title": "X",
            "category": {"slug": "git"},
            "date": date(2024, 1, 1),
            "publishedAt": "2024-01-01T10:00:00Z",
            "updatedAt": "2024-01-02",
        }
        assert validate(meta) == []

    def test_custom_required_fields(self):
        errors = validate({"title": "X"}, required=("title", "author.slug", "excerpt"))
        assert errors == [MissingFieldError("author.slug"), MissingFieldError("excerpt")]


class TestConventions:
    def test_clean_article_has_no_warnings(self, docker_article):
        doc = parse(docker_article)
        assert check_conventions(doc.metadata, doc.body) == []

    def test_slug_not_url_safe(self):
        warnings = check_conventions(
            {"category": {"name": "CI/CD", "slug": "CI CD"}, "author": {"slug": "jane-doe"}}, "Body"
        )
        assert [(w.code, w.field) for w in warnings] == [("slug-format", "category.slug")]

    def test_updated_before_published(self):
        warnings = check_conventions(
            {"publishedAt": "2024-03-10T00:00:00Z", "updatedAt": "2024-03-01"}, "Body"
        )
        assert [w.code for w in warnings] == ["date-order"]

    def test_same_day_update_without_time_is_not_earlier(self):
        meta = {"publishedAt": "2024-03-01T09:00:00Z", "updatedAt": "2024-03-01"}
        assert check_conventions(meta, "Body") == []

    def test_yaml_date_objects_compare_on_calendar_day(self):
        meta = {"publishedAt": datetime(2024, 3, 1, 18, 30), "updatedAt": date(2024, 3, 1)}
        assert check_conventions(meta, "Body") == []
        meta["updatedAt"] = date(2024, 2, 29)
        assert [w.code for w in check_conventions(meta, "Body")] == ["date-order"]

    def test_duplicate_tags_reported_once(self):
        warnings = check_conventions({"tags": ["Docker", "docker", "DOCKER", "k8s"]}, "Body")
        assert [w.message for w in warnings] == ["tag 'docker' appears more than once"]

    def test_empty_body(self):
        warnings = check_conventions({"title": "X"}, "  \n\n")
        assert [w.code for w in warnings] == ["empty-body"]
