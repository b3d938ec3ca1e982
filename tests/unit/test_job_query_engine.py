"""
Tests for the job listing query pipeline.

Covers the text filter, each category predicate on its own, the
OR-combination of the category filter, and pagination boundaries.
"""

import math

import pytest

from jobboard.services.job_query_engine import (
    CATEGORY_PREDICATES,
    DEFAULT_PAGE_SIZE,
    FilterState,
    PaginationInfo,
    employment_type_matches,
    experience_level_matches,
    filter_jobs,
    location_matches,
    matches_category,
    matches_query,
    parse_int,
    posting_date_matches,
    price_ceiling_matches,
    query_jobs,
    salary_type_matches,
    searchable_texts,
)


@pytest.fixture
def fourteen_jobs(make_job):
    return [make_job(job_title=f"Engineer {i}") for i in range(14)]


@pytest.fixture
def mixed_jobs(make_job):
    """A small, varied job set for filter tests."""
    return [
        make_job(
            job_title="Frontend Developer",
            company_name="Acme",
            job_location="Austin",
            max_price="90000",
            salary_type="Yearly",
            employment_type="full-time",
            experience_level="Mid-level",
            posting_date="2024-05-10",
            description="Build dashboards",
            skills=[{"value": "React", "label": "React"}, "CSS"],
        ),
        make_job(
            job_title="Backend Engineer",
            company_name="Globex",
            job_location="Boston",
            max_price="45",
            salary_type="Hourly",
            employment_type="Part-time",
            experience_level="Senior",
            posting_date="2024-03-01",
            description="APIs in Python",
            skills=["Python", "Django"],
        ),
        make_job(
            job_title="Data Intern",
            company_name="Initech",
            job_location="Remote",
            employment_type="Temporary",
            experience_level="Internship",
        ),
    ]


class TestParseInt:
    """Tests for the leading-integer parser used by the price ceiling."""

    @pytest.mark.parametrize("raw,expected", [
        ("120", 120),
        ("  45", 45),
        ("120k", 120),
        ("12.5", 12),
        ("-3", -3),
        ("2024-01-01", 2024),
    ])
    def test_parses_leading_integer(self, raw, expected):
        assert parse_int(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "abc", "$100", "austin"])
    def test_no_leading_integer(self, raw):
        assert parse_int(raw) is None


class TestTextFilter:
    """Tests for stage 1: free-text search."""

    def test_empty_query_matches_everything(self, make_job):
        assert matches_query(make_job(), "") is True

    @pytest.mark.parametrize("query", [
        "frontend",      # title
        "ACME",          # company
        "austin",        # location
        "dashboards",    # description
        "FULL-TIME",     # employment type
        "mid-level",     # experience level
        "react",         # skill mapping value
        "css",           # plain string skill
    ])
    def test_matches_each_searchable_field(self, mixed_jobs, query):
        assert matches_query(mixed_jobs[0], query) is True

    def test_no_field_matches(self, mixed_jobs):
        assert matches_query(mixed_jobs[0], "kubernetes") is False

    def test_salary_and_date_are_not_searchable(self, mixed_jobs):
        assert matches_query(mixed_jobs[0], "90000") is False
        assert matches_query(mixed_jobs[0], "2024-05") is False

    def test_skill_label_used_when_value_missing(self, make_job):
        job = make_job(skills=[{"label": "GraphQL"}])
        assert matches_query(job, "graph") is True

    def test_non_string_skill_elements_are_ignored(self, make_job):
        job = make_job(job_title="Dev", skills=[42, None, {"value": ""}])
        assert searchable_texts(job) == ["Dev"]

    def test_missing_description_matched_through_skills(self, make_job):
        """A job without description is found through its React skill."""
        job = make_job(job_title="UI Developer", skills=[{"value": "React"}])
        other = make_job(job_title="UI Developer", skills=[{"value": "Vue"}])

        result = filter_jobs([job, other], query="react")

        assert result == [job]


class TestCategoryPredicates:
    """Each category axis is tested on its own."""

    def test_location_case_insensitive(self, make_job):
        assert location_matches(make_job(job_location="Austin"), "austin") is True
        assert location_matches(make_job(job_location="Austin"), "Boston") is False
        assert location_matches(make_job(job_location=""), "") is False

    @pytest.mark.parametrize("max_price,selected,expected", [
        ("45", "50", True),
        ("50", "50", True),
        ("60", "50", False),
        ("120k", "150", True),
        ("", "50", False),
        ("45", "austin", False),
        ("abc", "50", False),
    ])
    def test_price_ceiling(self, make_job, max_price, selected, expected):
        assert price_ceiling_matches(make_job(max_price=max_price), selected) is expected

    @pytest.mark.parametrize("posting_date,selected,expected", [
        ("2024-05-10", "2024-05-01", True),
        ("2024-05-01", "2024-05-01", True),
        ("2024-04-30", "2024-05-01", False),
        ("", "2024-05-01", False),
    ])
    def test_posting_date_floor(self, make_job, posting_date, selected, expected):
        assert posting_date_matches(make_job(posting_date=posting_date), selected) is expected

    def test_salary_type(self, make_job):
        assert salary_type_matches(make_job(salary_type="Hourly"), "hourly") is True
        assert salary_type_matches(make_job(salary_type="Yearly"), "hourly") is False

    def test_experience_level(self, make_job):
        assert experience_level_matches(make_job(experience_level="Mid-level"), "mid-level") is True
        assert experience_level_matches(make_job(), "mid-level") is False

    def test_employment_type(self, make_job):
        assert employment_type_matches(make_job(employment_type="full-time"), "Full-Time") is True
        assert employment_type_matches(make_job(employment_type="Part-time"), "full-time") is False

    def test_predicates_are_named_and_complete(self):
        names = [name for name, _ in CATEGORY_PREDICATES]
        assert names == [
            "location",
            "price_ceiling",
            "posting_date",
            "salary_type",
            "experience_level",
            "employment_type",
        ]

    def test_empty_job_fails_every_predicate(self, make_job):
        job = make_job()
        for _, predicate in CATEGORY_PREDICATES:
            assert predicate(job, "anything") is False


class TestCategoryFilter:
    """Tests for stage 2: OR-combination of the category predicates."""

    def test_no_selection_keeps_everything(self, mixed_jobs):
        assert matches_category(mixed_jobs[0], None) is True
        assert matches_category(mixed_jobs[0], "") is True

    def test_location_match_alone_is_enough(self, make_job):
        """Austin job is kept for 'austin' although no other axis matches."""
        austin = make_job(
            job_location="Austin",
            max_price="500000",
            salary_type="Yearly",
            posting_date="2020-01-01",
        )
        boston = make_job(job_location="Boston", max_price="500000")

        assert filter_jobs([austin, boston], selected="austin") == [austin]

    def test_salary_threshold(self, mixed_jobs):
        result = filter_jobs(mixed_jobs, selected="50")
        assert [job.job_title for job in result] == ["Backend Engineer"]

    def test_enum_selection(self, mixed_jobs):
        result = filter_jobs(mixed_jobs, selected="Internship")
        assert [job.job_title for job in result] == ["Data Intern"]

    def test_date_floor(self, make_job):
        recent = make_job(posting_date="2024-05-10")
        older = make_job(posting_date="2024-03-01")

        assert filter_jobs([recent, older], selected="2024-04-01") == [recent]

    def test_date_token_also_acts_as_numeric_threshold(self, make_job):
        """'2024-01-01' parses to 2024, so a max price of 1500 is under it."""
        job = make_job(max_price="1500")
        assert matches_category(job, "2024-01-01") is True

    def test_query_and_category_combine(self, mixed_jobs):
        result = filter_jobs(mixed_jobs, query="engineer", selected="hourly")
        assert [job.job_title for job in result] == ["Backend Engineer"]

        assert filter_jobs(mixed_jobs, query="frontend", selected="hourly") == []


class TestPagination:
    """Tests for stage 3 and the query_jobs entry point."""

    def test_default_page_size_is_six(self):
        assert DEFAULT_PAGE_SIZE == 6

    def test_first_page_of_fourteen(self, fourteen_jobs):
        result = query_jobs(fourteen_jobs, FilterState())

        assert result.jobs == fourteen_jobs[0:6]
        assert result.pagination.total_pages == 3
        assert result.pagination.current_page == 1
        assert result.pagination.total_filtered_count == 14

    def test_last_page_of_fourteen(self, fourteen_jobs):
        result = query_jobs(fourteen_jobs, FilterState(page=3))

        assert result.jobs == fourteen_jobs[12:14]
        assert len(result.jobs) == 2

    def test_pages_reconstruct_filtered_sequence(self, fourteen_jobs):
        first = query_jobs(fourteen_jobs, FilterState())
        pages = [
            query_jobs(fourteen_jobs, FilterState(page=page)).jobs
            for page in range(1, first.pagination.total_pages + 1)
        ]

        flattened = [job for page in pages for job in page]
        assert flattened == fourteen_jobs

    @pytest.mark.parametrize("count,page_size", [(0, 6), (1, 6), (6, 6), (7, 6), (13, 5)])
    def test_total_pages_is_ceiling(self, make_job, count, page_size):
        jobs = [make_job() for _ in range(count)]
        result = query_jobs(jobs, FilterState(), page_size=page_size)
        assert result.pagination.total_pages == math.ceil(count / page_size)

    def test_page_past_the_end_is_empty(self, fourteen_jobs):
        result = query_jobs(fourteen_jobs, FilterState(page=4))

        assert result.jobs == []
        assert result.pagination.current_page == 4
        assert result.pagination.total_pages == 3

    @pytest.mark.parametrize("page", [0, -1, -10])
    def test_page_below_one_is_clamped(self, fourteen_jobs, page):
        result = query_jobs(fourteen_jobs, FilterState(page=page))

        assert result.pagination.current_page == 1
        assert result.jobs == fourteen_jobs[0:6]

    def test_empty_job_set(self):
        result = query_jobs([], FilterState(query="react", selected="austin"))

        assert result.jobs == []
        assert result.pagination.total_pages == 0
        assert result.pagination.total_filtered_count == 0
        assert result.pagination.current_page == 1

    def test_page_one_after_filter_shrinks_results(self, mixed_jobs):
        result = query_jobs(mixed_jobs, FilterState(selected="austin", page=1), page_size=1)

        assert result.pagination.total_pages == 1
        assert [job.job_location for job in result.jobs] == ["Austin"]

    def test_order_is_preserved(self, mixed_jobs):
        result = query_jobs(mixed_jobs, FilterState(query="e"))
        expected = [job for job in mixed_jobs if matches_query(job, "e")]
        assert result.jobs == expected

    def test_invalid_page_size(self, fourteen_jobs):
        with pytest.raises(ValueError, match="page_size"):
            query_jobs(fourteen_jobs, FilterState(), page_size=0)


class TestQueryProperties:
    """Properties that hold for any input."""

    def test_no_filters_is_identity_before_pagination(self, mixed_jobs):
        assert filter_jobs(mixed_jobs, "", None) == mixed_jobs

    @pytest.mark.parametrize("query", ["e", "dev", "python", "REMOTE", "zzz"])
    def test_text_filter_partitions_jobs(self, mixed_jobs, query):
        kept = filter_jobs(mixed_jobs, query=query)
        dropped = [job for job in mixed_jobs if job not in kept]

        needle = query.lower()
        for job in kept:
            assert any(needle in text.lower() for text in searchable_texts(job))
        for job in dropped:
            assert all(needle not in text.lower() for text in searchable_texts(job))

    def test_idempotent(self, mixed_jobs):
        state = FilterState(query="e", selected="2024-01-01", page=1)

        first = query_jobs(mixed_jobs, state, page_size=2)
        second = query_jobs(mixed_jobs, state, page_size=2)

        assert first == second

    def test_input_is_not_modified(self, mixed_jobs):
        before = list(mixed_jobs)
        query_jobs(mixed_jobs, FilterState(query="react", selected="austin"))
        assert mixed_jobs == before


class TestPaginationInfo:
    """Tests for boundary helpers used to disable pagination controls."""

    def test_first_page(self):
        info = PaginationInfo(current_page=1, total_pages=3, total_filtered_count=14, page_size=6)
        assert info.has_prev is False
        assert info.has_next is True

    def test_last_page(self):
        info = PaginationInfo(current_page=3, total_pages=3, total_filtered_count=14, page_size=6)
        assert info.has_prev is True
        assert info.has_next is False

    def test_no_results(self):
        info = PaginationInfo(current_page=1, total_pages=0, total_filtered_count=0, page_size=6)
        assert info.has_prev is False
        assert info.has_next is False

    def test_to_dict(self):
        info = PaginationInfo(current_page=2, total_pages=3, total_filtered_count=14, page_size=6)
        assert info.to_dict() == {
            "current_page": 2,
            "total_pages": 3,
            "total_filtered_count": 14,
            "page_size": 6,
            "has_prev": True,
            "has_next": True,
        }
