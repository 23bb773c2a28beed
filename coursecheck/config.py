"""
Config file loading for coursecheck.

Reads ~/.config/coursecheck/config.toml and returns structured config.
Never raises — always returns a valid dict with sensible defaults.

    skip = ["wsl_version", "vscode_extensions"]
    shell_profile = "~/.bash_profile"
"""

from pathlib import Path

_CONFIG_PATH = Path.home() / ".config" / "coursecheck" / "config.toml"

DEFAULT_SHELL_PROFILE = "~/.zprofile"


def default_config() -> dict:
    return {"skip": set(), "shell_profile": DEFAULT_SHELL_PROFILE}


def load_config(path: Path | None = None) -> dict:
    """
    Load and return coursecheck config from a TOML file.

    Returns {"skip": set[str], "shell_profile": str} — always valid, never
    raises. Missing file, parse errors, or bad shapes fall back to the
    defaults key by key.
    """
    config_path = path or _CONFIG_PATH
    config = default_config()

    if not config_path.is_file():
        return config

    try:
        raw = config_path.read_bytes()
    except OSError:
        return config

    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            return config

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except Exception:
        return config

    skip = data.get("skip")
    if isinstance(skip, list):
        config["skip"] = {str(item) for item in skip}

    profile = data.get("shell_profile")
    if isinstance(profile, str) and profile.strip():
        config["shell_profile"] = profile.strip()

    return config
