import pytest

from matching.filters import (
    DirectoryQuery,
    build_directory_query,
    build_enhanced_query,
    resolve_filter,
)
from models.case_analysis import CaseAnalysis
from server.schemas.requests import SearchRequest

from fakes import SCAFFOLDING_ANALYSIS

ANALYSIS = CaseAnalysis.from_payload(SCAFFOLDING_ANALYSIS)


class TestResolveFilter:
    def test_explicit_value_replaces_suggestions(self):
        resolution = resolve_filter("Construction Safety", ["Structural Engineering", "OSHA"])
        assert resolution.values == ("Construction Safety",)
        assert resolution.source == "explicit"

    def test_suggestions_used_when_no_explicit_value(self):
        resolution = resolve_filter(None, ["Structural Engineering", " ", "OSHA"])
        assert resolution.values == ("Structural Engineering", "OSHA")
        assert resolution.source == "ai"

    def test_single_suggestion_string(self):
        assert resolve_filter("", "Texas").values == ("Texas",)

    @pytest.mark.parametrize("suggested", [None, [], "", ["  "]])
    def test_nothing_to_apply(self, suggested):
        resolution = resolve_filter(None, suggested)
        assert not resolution.active
        assert resolution.source == "none"


class TestEnhancedQuery:
    def test_without_analysis_query_is_unchanged(self):
        assert build_enhanced_query("toxicology", None) == "toxicology"
        assert build_enhanced_query(None, None) is None

    def test_terms_are_appended_to_query(self):
        enhanced = build_enhanced_query("scaffold", ANALYSIS)
        assert enhanced == (
            "scaffold scaffolding failure construction site safety "
            "scaffold load capacity Structural Engineering"
        )

    def test_terms_alone_without_query(self):
        assert build_enhanced_query(None, ANALYSIS).startswith("scaffolding failure")


class TestBuildDirectoryQuery:
    def test_defaults(self):
        query = build_directory_query(SearchRequest(query="toxicology"), None, "toxicology")
        assert query == DirectoryQuery(text="toxicology")
        assert query.active_only
        assert query.limit == 20
        assert query.order_by == "rating" and query.descending

    def test_ai_suggestions_fill_unset_filters(self):
        analysis = CaseAnalysis.from_payload({**SCAFFOLDING_ANALYSIS, "jurisdiction": "Illinois"})
        query = build_directory_query(
            SearchRequest(case_description="scaffold"), analysis, "enhanced"
        )
        assert query.specialties == ("Structural Engineering",)
        assert query.specialty_source == "ai"
        assert query.location == "Illinois"
        assert query.location_source == "ai"

    def test_explicit_filters_win(self):
        analysis = CaseAnalysis.from_payload({**SCAFFOLDING_ANALYSIS, "jurisdiction": "Illinois"})
        request = SearchRequest(
            case_description="scaffold", specialty="Construction Safety", location="Chicago"
        )
        query = build_directory_query(request, analysis, "enhanced")
        assert query.specialties == ("Construction Safety",)
        assert query.location == "Chicago"
        assert query.location_source == "explicit"

    def test_numeric_and_list_filters_pass_through(self):
        request = SearchRequest.model_validate(
            {
                "query": "toxicology",
                "minExperience": "5",
                "maxExperience": 30,
                "minRate": "150",
                "maxRate": "",
                "trialTestimony": "yes",
                "languages": ["English", "Spanish"],
                "certifications": " ABT ",
            }
        )
        query = build_directory_query(request, None, "toxicology", page_size=5)
        assert query.min_experience == 5
        assert query.max_experience == 30
        assert query.min_rate == 150.0
        assert query.max_rate is None
        assert query.trial_testimony_required
        assert query.languages == ("English", "Spanish")
        assert query.certifications == "ABT"
        assert query.limit == 5

    def test_describe_only_lists_populated_filters(self):
        described = DirectoryQuery(text="toxicology", min_rate=100).describe()
        assert described["text"] == "toxicology"
        assert described["min_rate"] == 100
        assert "location" not in described
        assert "specialties" not in described
