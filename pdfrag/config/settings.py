from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    chunk_size: int = 1000
    chunk_overlap: int = 200

    similarity_threshold: float = 0.7
    rag_top_k: int = 5

    llm_max_tokens: int = 4000
    llm_temperature: float = 0.1

    embedding_batch_size: int = 10
    embedding_batch_delay: float = 0.1

    # Seconds; a timeout is handled like any other provider failure
    request_timeout: float = 30.0

    max_pages: int = 500
    summary_max_chars: int = 8000

    # Providers (OpenAI-compatible endpoints)
    anthropic_api_key: Optional[str] = None
    anthropic_base_url: str = "https://api.anthropic.com/v1/"
    anthropic_model: str = "claude-3-sonnet-20240229"

    cohere_api_key: Optional[str] = None
    cohere_base_url: str = "https://api.cohere.ai/compatibility/v1"
    cohere_model: str = "command-r"
    cohere_embedding_model: str = "embed-english-v3.0"

    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_embedding_model: str = "text-embedding-3-small"

    ollama_base_url: Optional[str] = None
    ollama_model: str = "qwen2.5:7b"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
