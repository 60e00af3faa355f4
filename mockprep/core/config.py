import os

# ✅ Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./mockprep.db")
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "0") == "1"

# ✅ Identity provider tokens
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET")
AUTH_JWT_ALGORITHM = os.getenv("AUTH_JWT_ALGORITHM", "HS256")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE")

# ✅ OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL")
AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "60"))
AI_MAX_RETRIES = int(os.getenv("AI_MAX_RETRIES", "2"))

# ✅ Interview sessions
QUESTION_COUNT = int(os.getenv("QUESTION_COUNT", "10"))

# ✅ HTTP
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:4000")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# ✅ Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
