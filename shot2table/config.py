from dataclasses import dataclass, replace

DEFAULT_ENDPOINT = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-3.5-sonnet"
DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class AIConfig:
    endpoint: str = DEFAULT_ENDPOINT
    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


@dataclass(frozen=True)
class ConfigPreset:
    name: str
    endpoint: str
    model: str


CONFIG_PRESETS: dict[str, ConfigPreset] = {
    "OpenRouter": ConfigPreset(
        name="OpenRouter",
        endpoint="https://openrouter.ai/api/v1",
        model="anthropic/claude-3.5-sonnet",
    ),
    "OpenAI": ConfigPreset(
        name="OpenAI",
        endpoint="https://api.openai.com/v1",
        model="gpt-4o",
    ),
}


def apply_preset(config: AIConfig, preset_name: str) -> AIConfig:
    """Switch endpoint and model to a known provider, keeping the API key."""
    preset = CONFIG_PRESETS.get(preset_name)
    if preset is None:
        raise KeyError(f"Unknown config preset: {preset_name}")
    return replace(config, endpoint=preset.endpoint, model=preset.model)
