from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

# 프레임워크가 주입하는 타입: 문서 파라미터에서 제외
DEFAULT_EXCLUDED_PARAM_TYPES = [
    "HttpServletRequest",
    "HttpServletResponse",
    "HttpSession",
    "ServletRequest",
    "ServletResponse",
    "Model",
    "ModelMap",
    "ModelAndView",
    "BindingResult",
    "Errors",
    "Principal",
    "Authentication",
    "Locale",
    "WebRequest",
    "NativeWebRequest",
    "RedirectAttributes",
    "SessionStatus",
    "UriComponentsBuilder",
]

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    auto_generate: bool = Field(default=False, alias="APIDOCS_AUTO_GENERATE")
    doc_output_dir: Path = Field(default=Path("./out"), alias="APIDOCS_OUTPUT_DIR")
    snapshot_file: str = Field(default="api_snapshot.json", alias="APIDOCS_SNAPSHOT_FILE")
    markdown_file: str = Field(default="api_docs.md", alias="APIDOCS_MARKDOWN_FILE")
    excluded_param_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_PARAM_TYPES),
        alias="APIDOCS_EXCLUDED_PARAM_TYPES",
    )
    log_level: str = Field(default="INFO", alias="APIDOCS_LOG_LEVEL")

settings = Settings()
