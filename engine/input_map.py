# engine/input_map.py
"""
Maps raw key names to action dictionaries using the keybindings config.
"""
from typing import Any, Dict as PyDict, List

import structlog

log = structlog.get_logger(__name__)

# Names a terminal line can produce for keys that have no printable text.
_KEY_ALIASES = {"": "space", " ": "space"}


class InputMap:
    """Looks up the action bound to a key in the active binding sets."""

    def __init__(self, keybindings_config: PyDict[str, Any]):
        self.keybindings_config = keybindings_config

    def _normalize(self, key: str) -> str:
        if key in _KEY_ALIASES:
            return _KEY_ALIASES[key]
        return key.strip().lower()

    def action_for_key(
        self, key: str, active_sets: List[str] | None = None
    ) -> PyDict[str, Any] | None:
        """Return the action dict bound to ``key`` or None when unbound."""
        key_name = self._normalize(key)
        bindings = self.keybindings_config.get("bindings", {})
        for set_name in active_sets or ["common"]:
            binding_set = bindings.get(set_name)
            if not binding_set or not isinstance(binding_set, dict):
                continue
            for action_name, binding_data in binding_set.items():
                if not isinstance(binding_data, dict):
                    continue
                if str(binding_data.get("key", "")).lower() != key_name:
                    continue
                action_type = binding_data.get("action_type")
                if action_type == "move":
                    return {
                        "type": "move",
                        "dx": binding_data.get("dx", 0),
                        "dy": binding_data.get("dy", 0),
                    }
                elif action_type == "action":
                    return {"type": action_name}
                elif action_type == "ui":
                    return {"type": "ui", "ui_action": action_name}
                else:
                    log.warning(
                        "Unknown action_type in keybinding",
                        action_name=action_name,
                        type=action_type,
                    )
                    return None
        log.debug("Key not bound", key=key_name)
        return None
