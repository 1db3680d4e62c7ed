"""CLA plugin: keeps cncf-cla labels in sync with the CLA status context."""

from clabot.plugin.base import CLA_CONTEXT, InvalidEventError
from clabot.plugin.comment import CommentReconciler
from clabot.plugin.help import PluginHelp, plugin_help
from clabot.plugin.labels import CLA_NO, CLA_YES, LabelChanges, label_transition
from clabot.plugin.status import StatusReconciler

__all__ = [
    "CLA_CONTEXT",
    "CLA_NO",
    "CLA_YES",
    "CommentReconciler",
    "InvalidEventError",
    "LabelChanges",
    "PluginHelp",
    "StatusReconciler",
    "label_transition",
    "plugin_help",
]
