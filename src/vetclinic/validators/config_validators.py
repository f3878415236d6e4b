from typing import Any


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def split_csv(value: Any) -> Any:
    """
    Turn a comma-separated env value ("http://a, http://b") into a list of
    stripped, non-empty items. Lists (e.g. from JSON env values or kwargs)
    pass through untouched.
    """
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def normalize_postgres_scheme(url: str, driver: str) -> str:
    """
    Hosted Postgres providers hand out `postgres://` or `postgresql://` URLs.
    SQLAlchemy's async engine needs the driver in the scheme, so rewrite those
    to `postgresql+<driver>://`. Any other URL (sqlite, already-qualified
    postgres) is returned as-is.
    """
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return f"postgresql+{driver}://" + url[len(prefix):]
    return url
