import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./bizhub.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    DEFAULT_HOSTS = data.get("DEFAULT_HOSTS", ["localhost", "127.0.0.1"])
    PLATFORM_DOMAIN = data.get("PLATFORM_DOMAIN", "bizhub.app")
    SUBDOMAIN_MAX_ATTEMPTS = int(data.get("SUBDOMAIN_MAX_ATTEMPTS", 1000))
    TENANT_CREATE_MAX_ATTEMPTS = int(data.get("TENANT_CREATE_MAX_ATTEMPTS", 5))
    DOMAIN_PROBE_TIMEOUT = float(data.get("DOMAIN_PROBE_TIMEOUT", 10))
    CACHE_BACKEND = data.get("CACHE_BACKEND", "memory")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    RATE_LIMIT_REQUESTS = int(data.get("RATE_LIMIT_REQUESTS", 30))
    RATE_LIMIT_WINDOW_SECONDS = int(data.get("RATE_LIMIT_WINDOW_SECONDS", 60))
