"""Static help payload for the CLA plugin."""

from typing import List

from pydantic import BaseModel, Field

from clabot.plugin.base import CLA_CONTEXT, PLUGIN_NAME
from clabot.plugin.labels import CLA_NO, CLA_YES


class Command(BaseModel):
    """A comment command understood by the plugin."""

    usage: str
    description: str
    featured: bool = False
    who_can_use: str = ""
    examples: List[str] = Field(default_factory=list)


class PluginHelp(BaseModel):
    """Plugin description and its commands."""

    name: str
    description: str
    config: str = ""
    commands: List[Command] = Field(default_factory=list)


def plugin_help() -> PluginHelp:
    """Help for the CLA plugin. It is not configurable."""
    return PluginHelp(
        name=PLUGIN_NAME,
        description=(
            f"The cla plugin manages the application and removal of the '{CLA_YES}' and "
            f"'{CLA_NO}' labels on pull requests as a reaction to the {CLA_CONTEXT} "
            "github status context."
        ),
        config="This plugin cannot be configured.",
        commands=[
            Command(
                usage="/check-cla",
                description="Forces rechecking of the CLA status.",
                featured=True,
                who_can_use="Anyone",
                examples=["/check-cla"],
            )
        ],
    )
