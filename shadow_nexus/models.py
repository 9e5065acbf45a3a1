"""
Pydantic models for Star Trek Fleet Command officer data.

Officer records come from a read-only snapshot exported from STFC.space.
Every field is optional at load time because community exports are frequently
partial; consumers render absent values with a sentinel instead of failing.
"""

from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# ENUMS
# =============================================================================


class MatchTier(str, Enum):
    """Which rule of the lookup policy resolved a query."""

    EXACT = "exact"
    ALIAS = "alias"
    PREFIX = "prefix"
    SUBSTRING = "substring"


# =============================================================================
# OFFICER MODELS
# =============================================================================


class _Record(BaseModel):
    """Base for snapshot records: immutable, lenient about extra keys."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class Ability(_Record):
    """Captain or officer ability."""

    name: str | None = None
    description: str | None = None


class OfficerStats(_Record):
    """Base stats. Any of them may be missing from the export."""

    attack: int | float | None = None
    defense: int | float | None = None
    health: int | float | None = None


class SynergyBonus(_Record):
    """Bonus granted when crewed alongside officers of the same group."""

    group: str | None = None
    value: int | float | None = None


class Officer(_Record):
    """
    STFC officer record.

    Field names follow Python conventions; the camelCase keys used by some
    exports (``captainAbility``, ``portraitPath``, ``lastUpdated``) are
    accepted as aliases.
    """

    # Identity
    name: str | None = None
    aliases: list[str] = Field(default_factory=list)  # Nicknames ("Pike", "Chris Pike")
    rarity: str | None = None  # Common, Uncommon, Rare, Epic
    group: str | None = None  # Synergy group / faction

    # Abilities
    captain_ability: Ability | None = Field(
        default=None,
        validation_alias=AliasChoices("captain_ability", "captainAbility"),
    )
    officer_ability: Ability | None = Field(
        default=None,
        validation_alias=AliasChoices("officer_ability", "officerAbility"),
    )

    stats: OfficerStats | None = None
    traits: list[str] = Field(default_factory=list)
    synergy: list[SynergyBonus] = Field(default_factory=list)

    # Presentation metadata
    portrait_path: str | None = Field(
        default=None,
        validation_alias=AliasChoices("portrait_path", "portraitPath", "portrait"),
    )
    last_updated: str | None = Field(
        default=None,
        validation_alias=AliasChoices("last_updated", "lastUpdated"),
    )

    @field_validator("aliases", "traits", "synergy", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def has_name(self) -> bool:
        """True when the record can be indexed."""
        return bool(self.name and self.name.strip())

    @property
    def lookup_key(self) -> str:
        """Case-folded name used by every lookup."""
        return (self.name or "").lower()

    def searchable_text(self) -> list[str]:
        """Lowercased values the search engine matches against."""
        parts = [self.lookup_key, (self.rarity or "").lower(), (self.group or "").lower()]
        parts.extend(trait.lower() for trait in self.traits)
        if self.captain_ability and self.captain_ability.description:
            parts.append(self.captain_ability.description.lower())
        if self.officer_ability and self.officer_ability.description:
            parts.append(self.officer_ability.description.lower())
        return parts


# =============================================================================
# QUERY/OUTPUT MODELS
# =============================================================================


class SearchResult(BaseModel):
    """Search matches truncated for display, with the full match count."""

    model_config = ConfigDict(frozen=True)

    query: str
    total: int
    officers: list[Officer] = Field(default_factory=list)

    @property
    def truncated(self) -> bool:
        return self.total > len(self.officers)


class LookupMatch(BaseModel):
    """A resolved officer and the tier that resolved it."""

    model_config = ConfigDict(frozen=True)

    officer: Officer
    tier: MatchTier


class OfficerComparison(BaseModel):
    """Two officers resolved for side-by-side display."""

    model_config = ConfigDict(frozen=True)

    first: Officer
    second: Officer


class PartialFailure(BaseModel):
    """A comparison where one or both queries did not resolve."""

    model_config = ConfigDict(frozen=True)

    first_query: str
    second_query: str
    first_missing: bool
    second_missing: bool

    @property
    def unresolved(self) -> list[str]:
        """Queries that could not be resolved, in argument order."""
        missing = []
        if self.first_missing:
            missing.append(self.first_query)
        if self.second_missing:
            missing.append(self.second_query)
        return missing
