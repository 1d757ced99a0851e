"""
Configuration settings for the Text Classifier Runtime.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Token ids travel to the model as int32
INT32_MAX = 2**31 - 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Text Classifier Runtime"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Resources ===
    MODEL_PATH: str = "resources/model.onnx"
    VOCAB_PATH: str = "resources/vocab.json"
    LABEL_MAP_PATH: str = "resources/label_map.json"
    
    # === Tensor Contract ===
    INPUT_TENSOR_NAME: str = "input"
    OUTPUT_TENSOR_NAME: str = "sequential"
    MAX_SEQUENCE_LENGTH: int = 30
    
    # === Tokenization ===
    PAD_TOKEN_ID: int = Field(default=0, ge=0, le=INT32_MAX)  # Also a legal vocabulary id, not reserved
    OOV_TOKEN: str = "<OOV>"
    OOV_FALLBACK_ID: int = Field(default=1, ge=0, le=INT32_MAX)  # Used when the vocabulary has no OOV entry
    
    # === Inference ===
    STRICT_OUTPUT_LENGTH: bool = False  # Raise instead of decoding a short score buffer
    ORT_LOG_SEVERITY: int = 2  # 0=verbose ... 2=warning ... 4=fatal
    ORT_INTRA_OP_THREADS: int = 0  # 0 lets onnxruntime choose
    
    # === Reporting ===
    ENABLE_TIMING: bool = True
    EXCELLENT_LATENCY_MS: float = 50.0
    GOOD_LATENCY_MS: float = 100.0
    SCORE_BAR_WIDTH: int = 20
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
