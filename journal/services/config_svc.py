# journal/services/config_svc.py
import logging

from ..db import Store
from ..errors import InvalidInput
from ..logs import LogContext

logger = logging.getLogger(__name__)

DEFAULTS = {
    "recent_answers_days": "7",
    "gratitude_history_days": "7",
    # 1 = insert the default prompt list on first start with an empty pool
    "seed_default_prompts": "1",
    "export_dir": "exports",
}


def _positive_int(v) -> int:
    if isinstance(v, bool):
        raise ValueError("expected an integer")
    n = int(str(v).strip())
    if n < 1:
        raise ValueError("must be >= 1")
    return n


def _flag(v) -> bool:
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off", ""):
        return False
    raise ValueError("expected a boolean")


def _directory(v) -> str:
    s = str(v).strip()
    if not s:
        raise ValueError("must not be empty")
    return s


_PARSERS = {
    "recent_answers_days": _positive_int,
    "gratitude_history_days": _positive_int,
    "seed_default_prompts": _flag,
    "export_dir": _directory,
}


def _stored(key: str, value) -> str:
    """Text form written to the config table; parsers accept it back."""
    parsed = _PARSERS[key](value)
    if isinstance(parsed, bool):
        return "1" if parsed else "0"
    return str(parsed)


def ensure_default_config(store: Store):
    """Insert missing keys without overwriting existing values."""
    for k, v in DEFAULTS.items():
        store.conn.execute(
            "INSERT INTO config(key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO NOTHING",
            (k, v),
        )


def get_config(store: Store) -> dict:
    rows = store.conn.execute("SELECT key, value FROM config").fetchall()
    cfg = {r["key"]: r["value"] for r in rows}

    out = {}
    for k, parse in _PARSERS.items():
        raw = cfg.get(k, DEFAULTS[k])
        try:
            out[k] = parse(raw)
        except (TypeError, ValueError):
            logger.warning("config %s=%r is invalid, using default %r", k, raw, DEFAULTS[k])
            out[k] = parse(DEFAULTS[k])
    return out


def update_config(store: Store, upd: dict, log: LogContext) -> list[str]:
    unknown = sorted(set(upd) - set(DEFAULTS))
    if unknown:
        raise InvalidInput(f"unknown config keys: {', '.join(unknown)}")
    values = {}
    for k, v in upd.items():
        try:
            values[k] = _stored(k, v)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"invalid value for {k}: {v!r} ({e})") from e
    updated = []
    with store.transaction() as conn:
        before = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
        for k, v in values.items():
            conn.execute(
                "INSERT INTO config(key,value) VALUES(?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (k, v)
            )
            updated.append(k)
        after = {r["key"]: r["value"] for r in conn.execute("SELECT key,value FROM config")}
    log.set_before(before); log.set_after(after)
    return updated
