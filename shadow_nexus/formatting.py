"""
Presentation of officer data as platform-neutral embed payloads.

The Discord bot converts an EmbedPayload into ``discord.Embed``; the CLI
renders the same payload with rich. Absent values are shown as sentinels
("Unknown", "?", "N/A") rather than raising.
"""

from pydantic import BaseModel, Field

from .config import DEFAULT_PORTRAIT_BASE_URL
from .models import Officer, OfficerComparison, OfficerStats, PartialFailure, SearchResult

EMBED_COLOR = 0x00B3FF
UNKNOWN = "Unknown"
MISSING_STAT = "?"
NO_DESCRIPTION = "No description available."

# Discord embed limits
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024
MAX_FOOTER_LENGTH = 2048


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedPayload(BaseModel):
    """Display payload: title, structured fields, optional image, footer."""

    title: str
    description: str | None = None
    color: int = EMBED_COLOR
    fields: list[EmbedField] = Field(default_factory=list)
    thumbnail_url: str | None = None
    footer: str | None = None

    def add_field(self, name: str, value: str, inline: bool = False) -> None:
        self.fields.append(
            EmbedField(
                name=clamp(name, MAX_FIELD_NAME_LENGTH),
                value=clamp(value, MAX_FIELD_VALUE_LENGTH),
                inline=inline,
            )
        )


def clamp(text: str, limit: int) -> str:
    """Ensure Discord-compatible text length."""
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def format_stat(value: int | float | None) -> str:
    if value is None:
        return MISSING_STAT
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}" if isinstance(value, int) else str(value)


def format_stats(stats: OfficerStats | None) -> str:
    stats = stats or OfficerStats()
    return (
        f"**ATK:** {format_stat(stats.attack)}\n"
        f"**DEF:** {format_stat(stats.defense)}\n"
        f"**HP:** {format_stat(stats.health)}"
    )


def portrait_url(officer: Officer, base_url: str = DEFAULT_PORTRAIT_BASE_URL) -> str | None:
    """Absolute image URL for the officer's portrait, if the export has one."""
    path = officer.portrait_path
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return f"{base_url.rstrip('/')}{path}"


def officer_heading(officer: Officer) -> str:
    return f"{officer.name} — {officer.rarity or UNKNOWN} ({officer.group or UNKNOWN})"


# =============================================================================
# EMBEDS
# =============================================================================


def build_officer_embed(
    officer: Officer,
    portrait_base_url: str = DEFAULT_PORTRAIT_BASE_URL,
) -> EmbedPayload:
    """Full detail card for a single officer."""
    embed = EmbedPayload(
        title=clamp(officer_heading(officer), MAX_TITLE_LENGTH),
        thumbnail_url=portrait_url(officer, portrait_base_url),
        footer=f"Data from STFC.space • Updated {officer.last_updated or 'N/A'}",
    )

    captain = officer.captain_ability
    if captain and captain.name:
        embed.add_field(
            f"🪐 Captain Ability — {captain.name}",
            captain.description or NO_DESCRIPTION,
        )

    ability = officer.officer_ability
    if ability and ability.name:
        embed.add_field(
            f"⚔️ Officer Ability — {ability.name}",
            ability.description or NO_DESCRIPTION,
        )

    embed.add_field("📊 Stats", format_stats(officer.stats), inline=True)

    if officer.traits:
        embed.add_field("🏷️ Traits", ", ".join(officer.traits), inline=True)

    if officer.synergy:
        lines = [
            f"• **{bonus.group or UNKNOWN}**: +{format_stat(bonus.value)}%"
            for bonus in officer.synergy
        ]
        embed.add_field("🔗 Synergy", "\n".join(lines))

    return embed


def build_search_embed(result: SearchResult) -> EmbedPayload:
    """Result list; the title carries the full match count."""
    lines = [
        f"• **{officer.name}** — {officer.rarity or UNKNOWN} ({officer.group or UNKNOWN})"
        for officer in result.officers
    ]
    embed = EmbedPayload(
        title=f"Search Results ({result.total})",
        description=clamp("\n".join(lines), MAX_DESCRIPTION_LENGTH),
    )
    if result.truncated:
        embed.footer = f"Showing the first {len(result.officers)} of {result.total} matches"
    return embed


def _comparison_column(officer: Officer) -> str:
    stats = officer.stats or OfficerStats()
    return (
        f"**Rarity:** {officer.rarity or UNKNOWN}\n"
        f"**Group:** {officer.group or UNKNOWN}\n"
        f"**ATK:** {format_stat(stats.attack)}\n"
        f"**DEF:** {format_stat(stats.defense)}\n"
        f"**HP:** {format_stat(stats.health)}"
    )


def build_comparison_embed(comparison: OfficerComparison) -> EmbedPayload:
    """Side-by-side columns, no diffing."""
    embed = EmbedPayload(title="Officer Comparison")
    for officer in (comparison.first, comparison.second):
        embed.add_field(officer.name, _comparison_column(officer), inline=True)
    return embed


# =============================================================================
# PLAIN MESSAGES
# =============================================================================


def not_found_message(query: str) -> str:
    return f"No officer found matching **{query}**."


def no_search_results_message(query: str) -> str:
    return f"No officers found matching **{query}**."


def partial_failure_message(failure: PartialFailure) -> str:
    """Single combined message for an unresolved comparison."""
    missing = failure.unresolved
    if len(missing) == 1:
        return f"Could not find an officer matching **{missing[0]}**, so there is nothing to compare."
    quoted = " or ".join(f"**{query}**" for query in missing)
    return f"Could not find officers matching {quoted}, so there is nothing to compare."
