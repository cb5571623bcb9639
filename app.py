import logging
import sys
from datetime import datetime, timezone

from pydantic import ValidationError

from cache import CacheStore
from collectors import claude
from models import OutputResult
from report import render
from settings import Settings

log = logging.getLogger(__name__)


def report_usage(settings: Settings, now: datetime | None = None) -> OutputResult:
    """Resolve the current usage status: fresh cache, then live API, then stale cache."""
    now = now or datetime.now(timezone.utc)
    now_ms = int(now.timestamp() * 1000)
    store = CacheStore(settings.cache_file, settings.cache_ttl_ms, settings.cache_jitter_ms)

    cached = store.read()
    if cached is not None and store.is_fresh(cached, now_ms):
        log.debug("Serving usage from cache (age %d ms)", now_ms - cached.timestamp)
        return render(cached.data, now)

    token = claude.read_token(settings.credentials_file)
    if not token:
        return OutputResult(error="no_token")

    try:
        data = claude.fetch_usage(
            token,
            settings.api_url,
            settings.anthropic_beta,
            settings.user_agent,
            timeout=settings.request_timeout,
        )
    except claude.UsageFetchError as exc:
        log.debug("Usage fetch failed: %s", exc)
        if cached is not None:
            return render(cached.data, now, error="stale")
        return OutputResult(error="fetch_failed")

    store.write(data, now_ms)
    return render(data, now)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    try:
        settings = Settings()
    except ValidationError:
        _configure_logging("WARNING")
        log.exception("Invalid CLAUDE_USAGE_* configuration")
        print(OutputResult(error="fetch_failed").to_json())
        return

    _configure_logging(settings.log_level)
    try:
        result = report_usage(settings)
    except Exception:
        # the caller is usually a prompt renderer; never break it
        log.exception("Unexpected failure while reporting usage")
        result = OutputResult(error="fetch_failed")
    print(result.to_json())


if __name__ == "__main__":
    main()
