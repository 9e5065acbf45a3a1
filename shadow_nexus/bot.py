"""Discord bot exposing the /officer command group."""

import logging

import discord
from discord import app_commands
from discord.ext import commands

from .config import Settings
from .formatting import (
    EmbedPayload,
    build_comparison_embed,
    build_officer_embed,
    build_search_embed,
    no_search_results_message,
    not_found_message,
    partial_failure_message,
)
from .models import PartialFailure
from .retrieval import RetrievalService

logger = logging.getLogger(__name__)


def to_discord_embed(payload: EmbedPayload) -> discord.Embed:
    """Convert a formatter payload into a discord.py embed."""
    embed = discord.Embed(
        title=payload.title,
        description=payload.description,
        color=discord.Color(payload.color),
    )
    for field in payload.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    if payload.thumbnail_url:
        embed.set_thumbnail(url=payload.thumbnail_url)
    if payload.footer:
        embed.set_footer(text=payload.footer)
    return embed


class OfficerCommands(app_commands.Group):
    """Shadow Nexus: Officer intelligence module."""

    def __init__(self, retrieval: RetrievalService, portrait_base_url: str):
        super().__init__(name="officer", description="Shadow Nexus: Officer intelligence module")
        self.retrieval = retrieval
        self.portrait_base_url = portrait_base_url

    async def _suggest(self, current: str) -> list[app_commands.Choice[str]]:
        return [
            app_commands.Choice(name=name[:100], value=name[:100])
            for name in self.retrieval.autocomplete(current)
        ]

    @app_commands.command(name="info", description="Get detailed info about an officer")
    @app_commands.describe(name="Officer name")
    async def info(self, interaction: discord.Interaction, name: str) -> None:
        logger.info(f"/officer info name={name!r} user={interaction.user}")
        officer = self.retrieval.resolve(name)
        if officer is None:
            await interaction.response.send_message(not_found_message(name), ephemeral=True)
            return
        payload = build_officer_embed(officer, self.portrait_base_url)
        await interaction.response.send_message(embed=to_discord_embed(payload))

    @info.autocomplete("name")
    async def name_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return await self._suggest(current)

    @app_commands.command(
        name="search", description="Search officers by name, trait, rarity, or ability"
    )
    @app_commands.describe(query="Search term")
    async def search(self, interaction: discord.Interaction, query: str) -> None:
        logger.info(f"/officer search query={query!r} user={interaction.user}")
        result = self.retrieval.search_page(query)
        if result.total == 0:
            await interaction.response.send_message(
                no_search_results_message(query), ephemeral=True
            )
            return
        await interaction.response.send_message(embed=to_discord_embed(build_search_embed(result)))

    @app_commands.command(name="compare", description="Compare two officers side-by-side")
    @app_commands.describe(first="First officer", second="Second officer")
    async def compare(self, interaction: discord.Interaction, first: str, second: str) -> None:
        logger.info(f"/officer compare first={first!r} second={second!r} user={interaction.user}")
        outcome = self.retrieval.resolve_pair(first, second)
        if isinstance(outcome, PartialFailure):
            await interaction.response.send_message(
                partial_failure_message(outcome), ephemeral=True
            )
            return
        await interaction.response.send_message(
            embed=to_discord_embed(build_comparison_embed(outcome))
        )

    @compare.autocomplete("first")
    async def first_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return await self._suggest(current)

    @compare.autocomplete("second")
    async def second_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return await self._suggest(current)


async def _sync_tree(tree: app_commands.CommandTree, guild_id: int | None) -> list:
    if guild_id is None:
        return await tree.sync()
    guild = discord.Object(id=guild_id)
    tree.copy_global_to(guild=guild)
    return await tree.sync(guild=guild)


def build_bot(
    retrieval: RetrievalService,
    settings: Settings,
    intents: discord.Intents | None = None,
    sync_on_start: bool = True,
) -> commands.Bot:
    """Create the bot with the officer command group registered."""
    intents = intents or discord.Intents.default()
    bot = commands.Bot(
        command_prefix=commands.when_mentioned,
        intents=intents,
        application_id=settings.discord_client_id,
    )
    bot.tree.add_command(OfficerCommands(retrieval, settings.portrait_base_url))

    async def setup_hook() -> None:
        if not sync_on_start:
            return
        synced = await _sync_tree(bot.tree, settings.discord_guild_id)
        logger.info(f"Synced {len(synced)} application commands")

    bot.setup_hook = setup_hook

    @bot.event
    async def on_ready() -> None:
        logger.info(f"Shadow Nexus connected as {bot.user} ({len(retrieval.index)} officers)")

    return bot


def run_bot(retrieval: RetrievalService, settings: Settings) -> None:
    """Connect to Discord and serve commands until interrupted."""
    token = settings.require_token()
    bot = build_bot(retrieval, settings)
    bot.run(token, log_handler=None)


async def sync_commands(retrieval: RetrievalService, settings: Settings) -> int:
    """
    Register the slash commands without connecting to the gateway.

    Returns:
        Number of commands Discord reports as registered.
    """
    token = settings.require_token()
    bot = build_bot(retrieval, settings, sync_on_start=False)
    async with bot:
        await bot.login(token)
        synced = await _sync_tree(bot.tree, settings.discord_guild_id)
    logger.info(f"Registered {len(synced)} application commands")
    return len(synced)
