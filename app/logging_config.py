import logging
import json
from datetime import datetime, timezone

logger = logging.getLogger("schemefinder")
logger.setLevel(logging.INFO)

handler = logging.StreamHandler()
formatter = logging.Formatter(
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)
handler.setFormatter(formatter)
logger.addHandler(handler)


def log_event(action: str, message: str, extra: dict | None = None) -> None:
    payload = {"action": action, "message": message}
    if extra:
        payload.update(extra)
    logger.info(json.dumps(payload, default=str))


def log_failure(error_code: str, context: dict | None = None) -> dict:
    """
    Single entry point for failure logging.
    Returns a minimal payload you can also persist into Event.payload.
    """
    payload = {
        "error_code": error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if context:
        payload["context"] = context

    logger.error(json.dumps(payload, default=str))
    return payload


def log_match(profile_key: str | None, shown: int, eligible_count: int, total_count: int) -> dict:
    payload = {
        "profile_key": profile_key,
        "shown": shown,
        "eligible_count": eligible_count,
        "total_count": total_count,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    logger.info(json.dumps({"action": "MATCH_QUERY", **payload}, default=str))
    return payload
