"""
Environment-driven configuration for the resume matcher.
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def _env_bool(key: str, default: str = "false") -> bool:
    return os.getenv(key, default).strip().lower() in ("1", "true", "yes", "on")


# Logging; LOG_LEVEL unset means the per-environment default
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# MongoDB
MONGO_DETAILS = os.getenv("MONGO_DETAILS", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "resume_matcher")
RESUME_COLLECTION = os.getenv("RESUME_COLLECTION", "resumes")

# Structured extraction (Ollama)
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
LLM_MODEL = os.getenv("LLM_MODEL", "qwen2.5:7b")
LLM_TIMEOUT = int(os.getenv("LLM_TIMEOUT", "120"))
USE_LLM_EXTRACTION = _env_bool("USE_LLM_EXTRACTION", "false")

# Baidu OCR, used for image and scanned PDF uploads
BAIDU_API_KEY = os.getenv("BAIDU_API_KEY")
BAIDU_SECRET_KEY = os.getenv("BAIDU_SECRET_KEY")

# Uploads and reports
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(15 * 1024 * 1024)))
CV_DIR = os.getenv("CV_DIR", "./data/cvs")
REPORT_DIR = os.getenv("REPORT_DIR", "./reports")

# API server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
