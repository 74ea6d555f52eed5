from dotenv import load_dotenv
import os

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

SUPPORTED_MODELS = [
    "gemini-1.5-flash",
    "gemini-1.5-pro",
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]
DEFAULT_MODEL = "gemini-2.0-flash"

# sent unchanged with every request
GENERATION_CONFIG = {
    "temperature": 0.4,
    "topK": 32,
    "topP": 1,
    "maxOutputTokens": 4096,
}

DEFAULT_MIME_TYPE = "image/jpeg"


def setup_environment():
    """Load the .env file and return the Gemini API key."""
    load_dotenv()
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise ValueError("GEMINI_API_KEY environment variable not set")
    return api_key


def get_model_name():
    load_dotenv()
    return os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL


def get_endpoint(model):
    return GEMINI_API_URL.format(model=model)
