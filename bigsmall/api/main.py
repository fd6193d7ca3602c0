import logging
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from contextlib import asynccontextmanager
from bigsmall.config import settings
from bigsmall.db.base import make_engine, init_db
from bigsmall.db.store import Store
from bigsmall.api.routes import router
from bigsmall.feed import FeedPoller
from bigsmall.services import PredictorSession, open_session, close_session

logger = logging.getLogger(__name__)

PAGE = r"""<!doctype html><html lang="en"><head>
<meta charset="utf-8"/><meta name="viewport" content="width=device-width,initial-scale=1"/>
<title>Big/Small Prediction Tracker</title>
<style>
:root{--line:#293241;--big:#4ade80;--small:#f87171;--muted:#9aa4b2}
*{box-sizing:border-box}body{margin:0;background:#000;color:#e6e6e6;font-family:ui-monospace,Consolas,monospace}
.wrap{max-width:560px;margin:0 auto;padding:16px}
.card{background:#111827;border:1px solid var(--line);border-radius:12px;padding:14px;margin-top:10px;text-align:center}
.pred{font-size:26px;font-weight:800}.big{color:var(--big)}.small{color:var(--small)}.muted{color:var(--muted);font-size:13px}
.grid{display:flex;flex-wrap:wrap;gap:8px;margin-top:10px}
.chip{padding:4px 8px;border-radius:8px;background:#1f2937;font-size:13px}.chip.hit{background:#f3f4f6;color:#000}
</style></head><body>
<div class="wrap">
  <h1 style="font-size:20px">Prediction Tracker</h1>
  <div class="card">
    <div>Next prediction: <span id="pred" class="pred muted">Waiting...</span></div>
    <div id="counts" class="muted"></div>
    <div id="streaks" class="muted"></div>
    <div id="rolling" class="muted" style="color:#facc15"></div>
  </div>
  <div id="history" class="grid"></div>
</div>
<script>
async function j(p){ const r = await fetch(p); return await r.json(); }
async function refresh(){
  const [p, s, h] = await Promise.all([j('/prediction'), j('/stats'), j('/history?limit=100')]);
  const el = document.getElementById('pred');
  if(p.prediction === null){ el.textContent = 'Waiting...'; el.className = 'pred muted'; }
  else { el.textContent = `${p.prediction} - ${p.label === 'BIG' ? 'Big' : 'Small'}`; el.className = 'pred ' + (p.label === 'BIG' ? 'big' : 'small'); }
  const graded = s.correct + s.incorrect;
  document.getElementById('counts').textContent =
    `Correct: ${s.correct} | Incorrect: ${s.incorrect} | Accuracy: ${graded ? Math.floor(s.accuracy*100)+'%' : 'N/A'} | Total: ${s.total_outcomes}`;
  document.getElementById('streaks').textContent =
    `Streak ${s.current_correct_streak}/${s.current_incorrect_streak} | Max ${s.max_correct_streak}/${s.max_incorrect_streak}`;
  document.getElementById('rolling').textContent = `Rolling accuracy (last 32): ${(s.rolling_accuracy*100).toFixed(1)}%`;
  document.getElementById('history').innerHTML = h.items.map(e =>
    `<span class="chip ${e.correct ? 'hit' : ''} ${e.actual_big ? 'big' : 'small'}">${e.value} - ${e.actual_big ? 'Big' : 'Small'}</span>`).join('');
}
refresh(); setInterval(refresh, 4000);
</script></body></html>
"""


def build_session() -> PredictorSession:
    engine = make_engine(settings.db_dsn)
    init_db(engine)
    return open_session(Store(engine, settings.model_path))


def create_app(predictor: PredictorSession | None = None, poll: bool | None = None) -> FastAPI:
    poll = settings.poll_on_startup if poll is None else poll

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.log_level)
        app.state.predictor = predictor or build_session()
        poller = FeedPoller(app.state.predictor) if poll else None
        if poller:
            poller.start()
        yield
        if poller:
            poller.stop()
        close_session(app.state.predictor)

    app = FastAPI(title="Big/Small Predictor", lifespan=lifespan)
    app.include_router(router)

    @app.get("/")
    def home():
        return {"ok": True, "app": "Big/Small Predictor"}

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard():
        return HTMLResponse(PAGE)

    return app
