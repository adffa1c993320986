import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv


class ModelType(Enum):
    """Supported language-model providers for case analysis."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


DEFAULT_MODELS = {
    ModelType.ANTHROPIC.value: "claude-3-5-sonnet-20241022",
    ModelType.OPENAI.value: "gpt-4o-mini",
    ModelType.GEMINI.value: "gemini-1.5-flash",
}

API_KEY_SETTINGS = {
    ModelType.ANTHROPIC.value: "ANTHROPIC_API_KEY",
    ModelType.OPENAI.value: "OPENAI_API_KEY",
    ModelType.GEMINI.value: "GOOGLE_GEMINI_API_KEY",
}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


class Config:
    """Configuration management for the expert search service."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Language model (case analysis)
        self.MODEL_TYPE = os.getenv('MODEL_TYPE', ModelType.ANTHROPIC.value).lower()
        self.ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
        self.OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
        self.GOOGLE_GEMINI_API_KEY = os.getenv('GOOGLE_GEMINI_API_KEY')
        self.DEFAULT_MODEL = os.getenv('DEFAULT_MODEL') or DEFAULT_MODELS.get(self.MODEL_TYPE)

        # Web search provider
        self.EXA_API_KEY = os.getenv('EXA_API_KEY')

        # Expert directory
        # DB_SCHEMA is read by db.tables when the table is defined
        self.DATABASE_URL = os.getenv('DATABASE_URL')

        # Timeouts for every outbound call, in seconds
        self.CASE_ANALYSIS_TIMEOUT_S = _float_env('CASE_ANALYSIS_TIMEOUT_S', 30.0)
        self.DIRECTORY_TIMEOUT_S = _float_env('DIRECTORY_TIMEOUT_S', 10.0)
        self.WEB_SEARCH_TIMEOUT_S = _float_env('WEB_SEARCH_TIMEOUT_S', 30.0)

        self.SEARCH_PAGE_SIZE = int(os.getenv('SEARCH_PAGE_SIZE', '20'))

    @property
    def model_api_key(self) -> str | None:
        """API key of the selected language-model provider."""
        setting = API_KEY_SETTINGS.get(self.MODEL_TYPE)
        return getattr(self, setting) if setting else None

    def validate(self) -> bool:
        """
        Check that MODEL_TYPE names a supported provider.

        Missing credentials are not a validation failure: case analysis
        degrades to "no analysis" and web search reports the missing key
        per request.
        """
        return self.MODEL_TYPE in API_KEY_SETTINGS

    def missing_settings(self) -> list[str]:
        """
        List the environment settings the service needs but does not have.

        Returns:
            list[str]: Names of unset settings, in a stable order
        """
        missing = []
        model_setting = API_KEY_SETTINGS.get(self.MODEL_TYPE)
        if model_setting and not getattr(self, model_setting):
            missing.append(model_setting)
        if not self.EXA_API_KEY:
            missing.append('EXA_API_KEY')
        if not self.DATABASE_URL:
            missing.append('DATABASE_URL')
        return missing

    def get_model_info(self) -> str:
        """
        Get information about the currently selected model.

        Returns:
            str: Formatted string with model information
        """
        if self.MODEL_TYPE == ModelType.ANTHROPIC.value:
            return f"Anthropic ({self.DEFAULT_MODEL})"
        elif self.MODEL_TYPE == ModelType.OPENAI.value:
            return f"OpenAI ({self.DEFAULT_MODEL})"
        elif self.MODEL_TYPE == ModelType.GEMINI.value:
            return f"Google Gemini ({self.DEFAULT_MODEL})"
        return "Unknown"


_config: Config | None = None


def get_config() -> Config:
    """Lazily built process-wide configuration."""
    global _config
    if _config is None:
        _config = Config()
    return _config
