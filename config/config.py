import os


def _int_env(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": _int_env("DB_PORT", 3306),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "school_db"),
    }


def scoring_from_env() -> dict:
    """Scoring knobs shared by every environment; see ScoringSettings."""
    return {
        # "fixed": shift start + ON_TIME_GRACE_MINUTES
        # "flexibility": shift start + employee late flexibility + FLEXIBILITY_EXTRA_MINUTES
        "PUNCTUALITY_MODE": os.getenv("PUNCTUALITY_MODE", "fixed"),
        "ON_TIME_GRACE_MINUTES": _int_env("ON_TIME_GRACE_MINUTES", 15),
        "FLEXIBILITY_EXTRA_MINUTES": _int_env("FLEXIBILITY_EXTRA_MINUTES", 5),
        "RETURN_FLEXIBILITY_DAYS": _int_env("TEST_RETURN_DAY_FLEXIBILITY", 3),
        "MAX_WORKERS": _int_env("SCORING_MAX_WORKERS", 4),
        "TOP_N": _int_env("TOP_PERFORMERS", 3),
    }
