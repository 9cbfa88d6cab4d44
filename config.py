import os
from pathlib import Path
from urllib.parse import ParseResult, quote_plus, urlparse, urlunparse

from dotenv import load_dotenv

# =====================================================
# CONFIGURACAO DE AMBIENTE E BANCO
# =====================================================
ROOT_DIR = Path(__file__).resolve().parent

# .env opcional na raiz do projeto
load_dotenv()

DEFAULT_PORT = 4000

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:5500",
    "https://sistema-pedidos-api-front.vercel.app",
    r"https://[a-z0-9-]+\.vercel\.app$",
]
CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization", "Accept"]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return (os.environ.get(name) or "").strip().lower() in _TRUTHY


def _normalize_db_url(url: str | None) -> str | None:
    if not url:
        return None
    # Aceita postgres:// e transforma em postgresql:// para o SQLAlchemy
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _build_postgres_url_from_parts() -> str | None:
    user = os.environ.get("POSTGRES_USER") or os.environ.get("PGUSER")
    password = os.environ.get("POSTGRES_PASSWORD") or os.environ.get("PGPASSWORD")
    db = os.environ.get("POSTGRES_DB") or os.environ.get("PGDATABASE")
    host = os.environ.get("POSTGRES_HOST") or os.environ.get("PGHOST")
    port = os.environ.get("POSTGRES_PORT") or os.environ.get("PGPORT")
    sslmode = os.environ.get("POSTGRES_SSLMODE") or os.environ.get("PGSSLMODE")
    if not (user and password and db and host):
        return None

    netloc = f"{quote_plus(user)}:{quote_plus(password)}@{host}"
    if port:
        netloc = f"{netloc}:{port}"
    query = f"sslmode={sslmode}" if sslmode else ""
    parsed = ParseResult(
        scheme="postgresql", netloc=netloc, path=f"/{db}", params="", query=query, fragment=""
    )
    return urlunparse(parsed)


def _default_sqlite_path() -> Path:
    db_path = Path(os.environ.get("PEDIDOS_DB_PATH") or (ROOT_DIR / "pedidos.db")).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return db_path


def resolve_database_uri() -> str:
    if not _env_flag("PEDIDOS_FORCE_SQLITE"):
        env_url = (
            os.environ.get("DATABASE_URL")
            or os.environ.get("RENDER_DATABASE_URL")
            or os.environ.get("POSTGRES_URL")
        )
        db_url = _normalize_db_url(env_url) or _build_postgres_url_from_parts()
        if db_url:
            return db_url
    return f"sqlite:///{_default_sqlite_path()}"


def engine_options_for(database_uri: str) -> dict:
    # PostgreSQL sem sslmode na query recebe sslmode=require
    scheme = urlparse(database_uri).scheme or ""
    if scheme.startswith("postgres") and "sslmode=" not in (urlparse(database_uri).query or ""):
        return {"connect_args": {"sslmode": "require"}}
    return {}


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS") or ""
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def load_config(overrides: dict | None = None) -> dict:
    config = {
        "SQLALCHEMY_DATABASE_URI": resolve_database_uri(),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "PORT": int(os.environ.get("PORT") or DEFAULT_PORT),
        "DEBUG": _env_flag("FLASK_DEBUG"),
        "LOG_LEVEL": (os.environ.get("LOG_LEVEL") or "INFO").upper(),
        "CORS_ORIGINS": cors_origins(),
    }
    config.update(overrides or {})
    if "SQLALCHEMY_ENGINE_OPTIONS" not in config:
        config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options_for(config["SQLALCHEMY_DATABASE_URI"])
    return config
