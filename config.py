import tomllib
import shutil
import re
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".versetrack"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

DEFAULT_TIMEZONE = "local"
DEFAULT_STREAK_LOOKBACK_DAYS = 365
DEFAULT_LOG_LEVEL = "INFO"


def _as_bool(value: Any) -> bool:
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def load_config() -> Dict[str, Any]:
    """Load config from ~/.versetrack/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()  # Load .env for overrides (e.g., MEMORIZATION_TIMEZONE env var)
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)
    # Support legacy flat keys while preferring nested tables
    legacy_memorization = {
        "system_enabled": config.get("memorization_system_enabled"),
        "timezone": config.get("timezone"),
    }

    memorization_cfg = config.get("memorization", {})
    system_enabled = memorization_cfg.get("system_enabled", legacy_memorization.get("system_enabled"))
    config["memorization"] = {
        "system_enabled": _as_bool(os.getenv(
            "MEMORIZATION_SYSTEM_ENABLED",
            True if system_enabled is None else system_enabled,
        )),
        "timezone": os.getenv(
            "MEMORIZATION_TIMEZONE",
            memorization_cfg.get("timezone", legacy_memorization.get("timezone") or DEFAULT_TIMEZONE),
        ),
        "streak_lookback_days": int(os.getenv(
            "MEMORIZATION_STREAK_LOOKBACK_DAYS",
            memorization_cfg.get("streak_lookback_days", DEFAULT_STREAK_LOOKBACK_DAYS),
        )),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("VERSETRACK_LOG_LEVEL", logging_cfg.get("level", DEFAULT_LOG_LEVEL)).upper(),
    }
    return config

def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('memorization', 'timezone')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value


def set_system_enabled(enabled: bool) -> None:
    """Persist the memorization system switch into config.toml."""
    load_config()
    flag = "true" if enabled else "false"
    text = CONFIG_PATH.read_text()
    if "[memorization]" not in text:
        text = text.rstrip() + f"\n\n[memorization]\nsystem_enabled = {flag}\n"
        CONFIG_PATH.write_text(text)
        return

    def update_section(match: re.Match) -> str:
        section = match.group(1)
        rest = match.group(2)
        if re.search(r"^system_enabled\s*=", section, flags=re.MULTILINE):
            section = re.sub(
                r"^system_enabled\s*=.*$",
                f"system_enabled = {flag}",
                section,
                flags=re.MULTILINE,
            )
        else:
            lines = section.rstrip().splitlines()
            insert_at = 1 if lines else 0
            lines.insert(insert_at, f"system_enabled = {flag}")
            section = "\n".join(lines) + "\n"
        return section + rest

    text = re.sub(r"(?ms)(^\[memorization\].*?)(^\[|\Z)", update_section, text)
    CONFIG_PATH.write_text(text)
