import logging
import os
import time

import requests
import typer

from bigsmall.config import settings


app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8000, poll: bool = typer.Option(True, help="Poll the feed in the background")):
    import uvicorn
    from bigsmall.api.main import create_app
    uvicorn.run(create_app(poll=poll), host=host, port=port, log_level=settings.log_level.lower())


@app.command()
def poll(interval: float = typer.Option(None, help="Seconds between feed polls")):
    """Run the feed poller without the HTTP API."""
    from bigsmall.api.main import build_session
    from bigsmall.feed import FeedPoller
    from bigsmall.services import close_session

    logging.basicConfig(level=settings.log_level)
    session = build_session()
    poller = FeedPoller(session, interval=interval)
    poller.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        typer.echo("stopping...")
    finally:
        poller.stop()
        close_session(session)


@app.command()
def ingest(value: int, issue: str):
    r = requests.post(f"{BASE}/ingest", json={"value": value, "issue": issue}, headers=_headers())
    typer.echo(r.json())


@app.command()
def stats():
    r = requests.get(f"{BASE}/stats", headers=_headers())
    typer.echo(r.json())


@app.command()
def predict():
    r = requests.get(f"{BASE}/prediction", headers=_headers())
    typer.echo(r.json())


@app.command()
def history(limit: int = 20):
    r = requests.get(f"{BASE}/history", params={"limit": limit}, headers=_headers())
    for item in r.json().get("items", []):
        mark = {True: "+", False: "-", None: " "}[item["correct"]]
        typer.echo(f"{mark} {item['issue']}  {item['value']}  {'Big' if item['actual_big'] else 'Small'}")


if __name__ == "__main__":
    app()
