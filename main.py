# main.py
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TextIO
from typing import Dict as PyDict

import structlog

from engine.input_map import InputMap
from engine.main_loop import MainLoop
from engine.renderer import render_status, render_text
from game.constants import DEFAULT_MAP_HEIGHT, DEFAULT_MAP_WIDTH, GameRules
from utils.config import load_toml_config, load_yaml_config
from utils.logging_utils import setup_logging
from utils.seed_store import SeedStore

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"

CONFIG_FILE = CONFIG_DIR / "config.yaml"
KEYBINDINGS_FILE = CONFIG_DIR / "keybindings.toml"
# --- End Paths ---

log = structlog.get_logger()

HELP_TEXT = """\
Move: W A S D    Drink Almond Water: Space (empty line)
Minimap: M       Help: H       New level: R       Quit: Q
Lit floor (:) drains sanity slower than darkness (.).
Hounds (h) track you when close. Reach the exit (>) to escape."""


@dataclass
class Configs:
    main: PyDict[str, Any] = field(default_factory=dict)
    keybindings: PyDict[str, Any] = field(default_factory=dict)


def load_configs(
    config_file: Path = CONFIG_FILE, keybindings_file: Path = KEYBINDINGS_FILE
) -> Configs:
    """Load the main YAML config and the TOML keybindings."""
    main_config = load_yaml_config(config_file, "Main")
    keybindings = load_toml_config(keybindings_file, "Keybindings")
    log.info(
        "Configurations loaded",
        keybindings=len(keybindings.get("bindings", {}).get("common", {})),
    )
    return Configs(main=main_config, keybindings=keybindings)


def init_main_loop(configs: Configs) -> MainLoop:
    """Create the session controller from config."""
    main_cfg = configs.main
    map_width: int = main_cfg.get("map_width", DEFAULT_MAP_WIDTH)
    map_height: int = main_cfg.get("map_height", DEFAULT_MAP_HEIGHT)
    rules = GameRules.from_config(main_cfg.get("rules"))
    seed_file = main_cfg.get("seed_file")
    seed_store = SeedStore(SCRIPT_DIR / seed_file) if seed_file else None
    seed_cfg = main_cfg.get("seed")
    seed = int(seed_cfg) if seed_cfg is not None else None
    return MainLoop(
        map_width=map_width,
        map_height=map_height,
        rules=rules,
        seed_store=seed_store,
        seed=seed,
    )


def draw(main_loop: MainLoop, out: TextIO, show_help: bool) -> None:
    snapshot = main_loop.snapshot()
    print(render_text(snapshot, reveal_all=main_loop.reveal_all), file=out)
    print(render_status(snapshot), file=out)
    if snapshot.messages:
        print(snapshot.messages[-1], file=out)
    if show_help:
        print(HELP_TEXT, file=out)
    print(f"Seed: {snapshot.seed}", file=out)


def run_terminal(
    main_loop: MainLoop,
    input_map: InputMap,
    read_key: Callable[[], str] = input,
    out: TextIO = sys.stdout,
) -> None:
    """Read one key per line and feed the resulting intents to the loop."""
    show_help = True
    draw(main_loop, out, show_help)
    while True:
        try:
            key = read_key()
        except EOFError:
            break
        action = input_map.action_for_key(key)
        if action is None:
            continue
        if action["type"] == "ui":
            ui_action = action["ui_action"]
            if ui_action == "quit_game":
                break
            elif ui_action == "toggle_minimap":
                main_loop.toggle_reveal_all()
            elif ui_action == "toggle_help":
                show_help = not show_help
        else:
            main_loop.handle_action(action)
        draw(main_loop, out, show_help)


def main() -> None:
    """Main entry point for the application."""
    try:
        configs = load_configs()
        setup_logging(configs.main.get("log_level", "INFO"))
        log.info("Application starting...", config_dir=str(CONFIG_DIR))
        main_loop = init_main_loop(configs)
        input_map = InputMap(configs.keybindings)
    except FileNotFoundError as e:
        log.critical("Required file not found during init", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed: File not found - {e}")
    except (TypeError, ValueError) as e:
        log.critical("Invalid configuration", error=str(e), exc_info=True)
        sys.exit(f"Configuration failed: {e}")

    run_terminal(main_loop, input_map)
    log.info("Application exiting", seed=main_loop.game_state.seed)


if __name__ == "__main__":
    main()
