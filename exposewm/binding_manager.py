"""
Binding Manager

Maps key presses to layout command events.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
from dataclasses import dataclass


@dataclass
class KeyBinding:
    """Represents a keyboard binding."""

    key: str  # Key name, e.g. 'Return' or 'a'
    event_topic: str  # Event topic to publish (e.g., 'cmd.expose')
    event_data: dict  # Additional event parameters


class BindingManager:
    """Manages keyboard bindings."""

    def __init__(self):
        self.key_bindings: Dict[str, KeyBinding] = {}

    def bind_key(self, key: str, event_topic: str, **event_data):
        """Bind a key to a command event, replacing any earlier binding.

        Args:
            key: The key name
            event_topic: The command event topic to publish (e.g., 'cmd.expose')
            **event_data: Optional data to pass with the event
        """
        self.key_bindings[key] = KeyBinding(key, event_topic, event_data)

    def unbind_key(self, key: str):
        """Remove a key binding if present."""
        self.key_bindings.pop(key, None)

    def press(self, key: str) -> bool:
        """Publish the command bound to a key.

        Returns:
            True if the key was bound, False otherwise
        """
        from pubsub import pub

        binding = self.key_bindings.get(key)
        if binding is None:
            return False
        pub.sendMessage(binding.event_topic, **binding.event_data)
        return True

    def setup_default_bindings(self):
        """Set up the default layout bindings."""
        from . import topics

        self.bind_key("Return", topics.CMD_EXPOSE_STEP)
        self.bind_key("BackSpace", topics.CMD_RESET_STEP)
        self.bind_key("a", topics.CMD_MAXRECTS_PACK)
        self.bind_key("s", topics.CMD_NORMALIZE)
        self.bind_key("e", topics.CMD_EXPOSE)
        self.bind_key("b", topics.CMD_SHELF_PACK)
        self.bind_key("Tab", topics.CMD_CYCLE_LAYOUT)
        self.bind_key("r", topics.CMD_APPLY_LAYOUT)
        self.bind_key("space", topics.CMD_TICK)
        self.bind_key("Escape", topics.CMD_QUIT)

    def setup_custom_bindings(self, bindings: List[Tuple[str, str, dict]]):
        """Set up custom key bindings from configuration.

        Args:
            bindings: List of (key, event_topic, event_data) tuples
        """
        for key, event_topic, event_data in bindings:
            self.bind_key(key, event_topic, **event_data)
