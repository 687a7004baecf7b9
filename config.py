import os

from dotenv import load_dotenv
load_dotenv()


class Config:
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "gemini")
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_IMAGE_MODEL: str = os.getenv("GEMINI_IMAGE_MODEL", "imagen-3.0-generate-002")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-5-mini-2025-08-07")
    OPENAI_IMAGE_MODEL: str = os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1")
    # Only used by the web UI and CLI when the caller does not pass them
    TANDOOR_HOST: str = os.getenv("TANDOOR_HOST", "")
    TANDOOR_API_KEY: str = os.getenv("TANDOOR_API_KEY", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    MAX_UPLOAD_MB: int = int(os.getenv("MAX_UPLOAD_MB", "10"))

    def reload(self) -> None:
        """Re-read every setting from the environment (and .env)."""
        load_dotenv(override=True)
        self.LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini")
        self.GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
        self.GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self.GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "imagen-3.0-generate-002")
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-5-mini-2025-08-07")
        self.OPENAI_IMAGE_MODEL = os.getenv("OPENAI_IMAGE_MODEL", "gpt-image-1")
        self.TANDOOR_HOST = os.getenv("TANDOOR_HOST", "")
        self.TANDOOR_API_KEY = os.getenv("TANDOOR_API_KEY", "")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))


config = Config()
