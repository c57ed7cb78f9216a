import json
import os

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import ConfigError

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_HISTORY_LINES = 100
CONFIG_RELATIVE_PATH = os.path.join("llm-exec", "config.json")

PROGRAM_PLACEHOLDER = "{program}"

DEFAULT_SYSTEM_PROMPT = """You are a command-line assistant that outputs ONLY shell commands.

RULES:
1. Output ONLY a single shell command - nothing else
2. NO explanations, NO markdown, NO code blocks, NO backticks, NO formatting
3. If you cannot help, output: echo "Error: <reason>"
4. Never suggest running "{program}" - the user is already running that to talk to you

Your entire response must be a valid shell command that can be executed directly."""


def get_config_path() -> str:
    """Returns the per-user config file path, honoring `XDG_CONFIG_HOME`."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if not config_home:
        config_home = os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(config_home, CONFIG_RELATIVE_PATH)


@dataclass(frozen=True)
class Config:
    """Resolved configuration. Missing fields in the file fall back to defaults."""

    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    history_lines: int = DEFAULT_HISTORY_LINES
    system_prompt_suffix: Optional[str] = None
    system_prompt: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: str = "<config>") -> "Config":
        """
        Builds a `Config` from a parsed JSON object.

        Unknown keys are ignored and `null` values count as absent. A present
        value of the wrong type raises `ConfigError`.
        """
        if not isinstance(data, dict):
            raise ConfigError(path, "top-level value must be a JSON object")

        model = _get(data, "model", str, path)
        if model is not None and not model.strip():
            raise ConfigError(path, "'model' must not be empty")

        max_tokens = _get(data, "max_tokens", int, path)
        if max_tokens is not None and max_tokens <= 0:
            raise ConfigError(path, "'max_tokens' must be a positive integer")

        history_lines = _get(data, "history_lines", int, path)
        if history_lines is not None and history_lines < 0:
            raise ConfigError(path, "'history_lines' must be a non-negative integer")

        return cls(
            model=model if model is not None else DEFAULT_MODEL,
            max_tokens=max_tokens if max_tokens is not None else DEFAULT_MAX_TOKENS,
            history_lines=(
                history_lines if history_lines is not None else DEFAULT_HISTORY_LINES
            ),
            system_prompt_suffix=_get(data, "system_prompt_suffix", str, path),
            system_prompt=_get(data, "system_prompt", str, path),
        )

    def effective_system_prompt(self, program: str = "llm-exec") -> str:
        # An explicit system prompt wins outright, the suffix is ignored.
        if self.system_prompt is not None:
            return self.system_prompt

        prompt = DEFAULT_SYSTEM_PROMPT.replace(PROGRAM_PLACEHOLDER, program)
        if self.system_prompt_suffix:
            prompt = f"{prompt}\n\n{self.system_prompt_suffix}"
        return prompt

    def resolve_history_lines(self, override: Optional[int] = None) -> int:
        return override if override is not None else self.history_lines


def _get(data: Dict[str, Any], key: str, expected: type, path: str):
    value = data.get(key)
    if value is None:
        return None
    # bool is a subclass of int, but `"max_tokens": true` is not a number.
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ConfigError(
            path, f"'{key}' must be of type {expected.__name__}, got {value!r}"
        )
    return value


def load_config(path: Optional[str] = None) -> Config:
    """
    Loads the config file, or returns all defaults if it does not exist.

    Args:
        path: The config file to read. Defaults to `get_config_path()`.

    Raises:
        ConfigError: If the file exists but cannot be read or is not a valid
            config JSON object.
    """
    if path is None:
        path = get_config_path()

    if not os.path.exists(path):
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ConfigError(path, str(e)) from e

    return Config.from_dict(data, path)
