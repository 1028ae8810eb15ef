"""
Shared environment loading rules.

Every settings class reads the process environment first and a local
.env file second, ignores unrelated keys and matches names
case-insensitively. Only the variable prefix differs per component
(POSTGRES_, TAVILY_, GEMINI_, CHAT_, AUTH_).

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import SettingsConfigDict

ENV_FILE = ".env"


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """
    Build the model_config for a settings class.

    Args:
        env_prefix: Prefix shared by the component's variables

    Returns:
        SettingsConfigDict: Config reading ENV_FILE with the given prefix
    """
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )
