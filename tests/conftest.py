"""
Shared pytest fixtures.
"""

import json

import pytest

from shadow_nexus.models import Officer
from shadow_nexus.retrieval import RetrievalService


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer configuration out of the tests."""
    for key in (
        "SHADOW_NEXUS_DATA_PATH",
        "SHADOW_NEXUS_PORTRAIT_BASE_URL",
        "SHADOW_NEXUS_LOG_LEVEL",
        "DISCORD_TOKEN",
        "DISCORD_CLIENT_ID",
        "DISCORD_GUILD_ID",
    ):
        monkeypatch.delenv(key, raising=False)


# =============================================================================
# Officer data
# =============================================================================


@pytest.fixture
def raw_officers():
    """Raw snapshot records, as they appear in the export."""
    return [
        {
            "name": "Kirkland",
            "rarity": "Uncommon",
            "group": "Independent",
            "stats": {"attack": 400, "defense": 380, "health": 410},
            "traits": ["Human"],
        },
        {
            "name": "Kirk",
            "rarity": "Epic",
            "group": "Federation Enterprise Fleet",
            "captain_ability": {
                "name": "Inspirational",
                "description": "Increases critical hit chance of all officers.",
            },
            "officer_ability": {
                "name": "Unorthodox Tactics",
                "description": "Increases critical damage.",
            },
            "stats": {"attack": 1544, "defense": 1093, "health": 1316},
            "traits": ["Command", "Human"],
            "synergy": [{"group": "Enterprise Crew", "value": 10}],
            "portrait": "/assets/kirk.png",
            "lastUpdated": "2025-11-02",
        },
        {
            "name": "Spock",
            "rarity": "Epic",
            "group": "Federation Enterprise Fleet",
            "officer_ability": {
                "name": "Logical",
                "description": "Reduces damage taken and boosts shield regeneration.",
            },
            "traits": ["Science", "Vulcan"],
        },
        {
            "name": "Hikaru Sulu",
            "rarity": "Rare",
            "group": "Helm",
            "traits": ["Armada", "Defense"],
        },
        {
            "name": "Christopher Pike",
            "aliases": ["Chris"],
            "rarity": "Epic",
            "group": "Discovery",
        },
        {"rarity": "Common", "group": "Nameless"},
    ]


@pytest.fixture
def officers(raw_officers):
    return [Officer.model_validate(raw) for raw in raw_officers]


@pytest.fixture
def retrieval(officers):
    return RetrievalService.from_officers(officers)


@pytest.fixture
def snapshot_file(tmp_path, raw_officers):
    """Snapshot written the way the STFC.space export ships it."""
    path = tmp_path / "output.json"
    path.write_text(json.dumps({"officers": raw_officers}), encoding="utf-8")
    return path
