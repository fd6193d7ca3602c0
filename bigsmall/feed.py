"""
Feed polling
Fetches the latest draw from the lottery feed and runs one cycle per tick.
"""
import logging
import time
from dataclasses import dataclass

import requests
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from bigsmall.config import settings
from bigsmall.core.validation import is_valid_digit, is_valid_issue
from bigsmall.services import CycleResult, PredictorSession, process_outcome

logger = logging.getLogger(__name__)

JOB_ID = "poll_feed"


class FeedError(Exception):
    """The feed answered, but not with a usable draw."""


@dataclass(frozen=True)
class FeedSample:
    value: int
    issue: str


def parse_latest(payload: dict) -> FeedSample:
    try:
        latest = payload["data"]["list"][0]
        value = int(latest["number"])
        issue = str(latest["issueNumber"])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise FeedError(f"malformed feed payload: {e!r}") from e
    if not is_valid_digit(value) or not is_valid_issue(issue):
        raise FeedError(f"out-of-range draw {issue!r} -> {value!r}")
    return FeedSample(value, issue)


class FeedClient:
    def __init__(self, url: str | None = None, timeout: float | None = None,
                 http: requests.Session | None = None):
        self.url = url or settings.feed_url
        self.timeout = timeout if timeout is not None else settings.feed_timeout
        self.http = http or requests.Session()

    def fetch_latest(self) -> FeedSample:
        # ts defeats intermediate caches
        r = self.http.get(self.url, params={"ts": int(time.time() * 1000)}, timeout=self.timeout)
        r.raise_for_status()
        try:
            payload = r.json()
        except ValueError as e:
            raise FeedError("feed did not return JSON") from e
        return parse_latest(payload)


class FeedPoller:
    """One cycle per scheduler tick; a tick never overlaps the previous one."""

    def __init__(self, session: PredictorSession, client: FeedClient | None = None,
                 interval: float | None = None):
        self.session = session
        self.client = client or FeedClient()
        self.interval = interval if interval is not None else settings.poll_seconds
        self.scheduler: BackgroundScheduler | None = None

    def tick(self) -> CycleResult | None:
        try:
            sample = self.client.fetch_latest()
        except (requests.RequestException, FeedError) as e:
            logger.warning("Feed fetch failed, skipping tick: %s", e)
            return None
        return process_outcome(self.session, sample.value, sample.issue)

    @property
    def running(self) -> bool:
        return self.scheduler is not None and self.scheduler.running

    def start(self):
        if self.running:
            return
        self.scheduler = BackgroundScheduler()
        self.scheduler.add_job(
            func=self.tick,
            trigger=IntervalTrigger(seconds=self.interval),
            id=JOB_ID,
            name=f"Poll feed ({self.interval:g}s)",
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Feed poller started: %s every %gs", self.client.url, self.interval)

    def stop(self):
        # waits for an in-flight cycle (and any retrain inside it) to finish
        if self.running:
            self.scheduler.shutdown(wait=True)
            logger.info("Feed poller stopped")
        self.scheduler = None
