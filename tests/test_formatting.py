"""
Tests for embed payload formatting.
"""

import pytest

from shadow_nexus.formatting import (
    MAX_FIELD_VALUE_LENGTH,
    build_comparison_embed,
    build_officer_embed,
    build_search_embed,
    clamp,
    format_stat,
    format_stats,
    not_found_message,
    partial_failure_message,
    portrait_url,
)
from shadow_nexus.models import Officer, OfficerComparison, PartialFailure, SearchResult


def field_map(embed):
    return {field.name: field for field in embed.fields}


class TestOfficerEmbed:
    """Single officer card"""

    def test_full_record(self, retrieval):
        embed = build_officer_embed(retrieval.resolve("kirk"))
        fields = field_map(embed)

        assert embed.title == "Kirk — Epic (Federation Enterprise Fleet)"
        assert embed.thumbnail_url == "https://stfc.space/assets/kirk.png"
        assert embed.footer == "Data from STFC.space • Updated 2025-11-02"
        assert fields["🪐 Captain Ability — Inspirational"].value.startswith("Increases critical hit")
        assert "⚔️ Officer Ability — Unorthodox Tactics" in fields
        assert fields["📊 Stats"].value == "**ATK:** 1,544\n**DEF:** 1,093\n**HP:** 1,316"
        assert fields["📊 Stats"].inline
        assert fields["🏷️ Traits"].value == "Command, Human"
        assert fields["🔗 Synergy"].value == "• **Enterprise Crew**: +10%"

    def test_sparse_record(self):
        embed = build_officer_embed(Officer(name="Ghost"))

        assert embed.title == "Ghost — Unknown (Unknown)"
        assert embed.thumbnail_url is None
        assert embed.footer.endswith("Updated N/A")
        assert [f.name for f in embed.fields] == ["📊 Stats"]
        assert embed.fields[0].value == "**ATK:** ?\n**DEF:** ?\n**HP:** ?"

    def test_ability_without_description(self):
        officer = Officer.model_validate({"name": "Ghost", "captain_ability": {"name": "Boo"}})
        fields = field_map(build_officer_embed(officer))
        assert fields["🪐 Captain Ability — Boo"].value == "No description available."

    def test_ability_without_name_is_hidden(self):
        officer = Officer.model_validate({"name": "Ghost", "officer_ability": {"description": "x"}})
        assert len(build_officer_embed(officer).fields) == 1

    def test_long_description_clamped(self):
        officer = Officer.model_validate(
            {"name": "Ghost", "captain_ability": {"name": "Boo", "description": "x" * 5000}}
        )
        value = build_officer_embed(officer).fields[0].value
        assert len(value) == MAX_FIELD_VALUE_LENGTH
        assert value.endswith("…")


class TestStats:
    """Stat rendering"""

    @pytest.mark.parametrize(
        "value,expected",
        [(None, "?"), (0, "0"), (1544, "1,544"), (12.0, "12"), (12.5, "12.5")],
    )
    def test_format_stat(self, value, expected):
        assert format_stat(value) == expected

    def test_missing_stats_block(self):
        assert format_stats(None).count("?") == 3


class TestPortrait:
    """Portrait URLs"""

    def test_relative_path(self):
        assert portrait_url(Officer(name="K", portrait_path="/a.png")) == "https://stfc.space/a.png"

    def test_path_without_slash(self):
        assert portrait_url(Officer(name="K", portrait_path="a.png"), "https://cdn/") == "https://cdn/a.png"

    def test_absolute_url_kept(self):
        assert portrait_url(Officer(name="K", portrait_path="https://x/a.png")) == "https://x/a.png"

    def test_absent(self):
        assert portrait_url(Officer(name="K")) is None


class TestSearchEmbed:
    """Search result list"""

    def test_lines_and_total(self):
        result = SearchResult(
            query="epic",
            total=2,
            officers=[Officer(name="Kirk", rarity="Epic", group="Enterprise"), Officer(name="Ghost")],
        )
        embed = build_search_embed(result)
        assert embed.title == "Search Results (2)"
        assert embed.description == "• **Kirk** — Epic (Enterprise)\n• **Ghost** — Unknown (Unknown)"
        assert embed.footer is None

    def test_truncation_footer(self):
        result = SearchResult(query="o", total=45, officers=[Officer(name=f"O{i}") for i in range(20)])
        embed = build_search_embed(result)
        assert embed.title == "Search Results (45)"
        assert embed.footer == "Showing the first 20 of 45 matches"


class TestComparisonEmbed:
    """Side-by-side comparison"""

    def test_two_inline_columns(self, retrieval):
        comparison = OfficerComparison(first=retrieval.resolve("kirk"), second=retrieval.resolve("spock"))
        embed = build_comparison_embed(comparison)
        assert embed.title == "Officer Comparison"
        assert [f.name for f in embed.fields] == ["Kirk", "Spock"]
        assert all(f.inline for f in embed.fields)
        assert "**ATK:** 1,544" in embed.fields[0].value
        assert "**ATK:** ?" in embed.fields[1].value


class TestMessages:
    """Plain-text replies"""

    def test_not_found(self):
        assert not_found_message("xyz") == "No officer found matching **xyz**."

    def test_partial_failure_one_side(self):
        failure = PartialFailure(
            first_query="kirk", second_query="nonexistent-xyz", first_missing=False, second_missing=True
        )
        message = partial_failure_message(failure)
        assert "**nonexistent-xyz**" in message
        assert "kirk" not in message

    def test_partial_failure_both_sides(self):
        failure = PartialFailure(first_query="a", second_query="b", first_missing=True, second_missing=True)
        assert "**a** or **b**" in partial_failure_message(failure)

    def test_clamp(self):
        assert clamp("abc", 5) == "abc"
        assert clamp("abcdef", 4) == "abc…"
