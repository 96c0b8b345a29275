#config/settings

import os
from dotenv import load_dotenv

# Carregar as variáveis do arquivo .env
load_dotenv()

# Configurações JWT
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./daycare.db")

# Limite rígido de escritas por transação e tamanho do lote usado na gravação
ENTRY_BATCH_WRITE_LIMIT = int(os.getenv("ENTRY_BATCH_WRITE_LIMIT", "500"))
ENTRY_BATCH_CHUNK_SIZE = int(os.getenv("ENTRY_BATCH_CHUNK_SIZE", "450"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:8081,http://localhost:3000"
    ).split(",")
    if origin.strip()
]
