from fastapi import APIRouter, Depends, HTTPException, Header, Request
from bigsmall.api.schemas import IngestIn, IngestOut, PredictionOut, StatsOut, HistoryOut
from bigsmall.services import PredictorSession, process_outcome, snapshot
from bigsmall.config import settings
from bigsmall.core.digits import label
from bigsmall.core.validation import is_valid_issue

router = APIRouter()


def _auth(api_key_header: str | None = Header(default=None, alias="X-API-Key")):
    if settings.api_key and api_key_header != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")

def get_predictor(request: Request) -> PredictorSession:
    return request.app.state.predictor

@router.post('/ingest', response_model=IngestOut)
def ingest(data: IngestIn, predictor: PredictorSession = Depends(get_predictor), ok=Depends(_auth)):
    if not is_valid_issue(data.issue):
        raise HTTPException(400, detail="issue must be 1..64 chars of [0-9A-Za-z_-]")
    r = process_outcome(predictor, data.value, data.issue)
    if r is None:
        return {'accepted': False, 'prediction': predictor.prediction, 'label': label(predictor.prediction)}
    return {
        'accepted': True,
        'correct': r.correct,
        'prediction': r.prediction,
        'label': label(r.prediction),
        'reason': r.reason,
        'retrained': r.retrained,
    }

@router.get('/prediction', response_model=PredictionOut)
def prediction(predictor: PredictorSession = Depends(get_predictor)):
    return snapshot(predictor, limit=0)

@router.get('/stats', response_model=StatsOut)
def stats(predictor: PredictorSession = Depends(get_predictor)):
    snap = snapshot(predictor, limit=settings.history_limit)
    return {
        **snap['stats'],
        'rolling_accuracy': snap['rolling_accuracy'],
        'neural_bias': snap['neural_bias'],
        'big_share': snap['big_share'],
        'total_outcomes': snap['total_outcomes'],
    }

@router.get('/history', response_model=HistoryOut)
def history(limit: int = 100, predictor: PredictorSession = Depends(get_predictor)):
    if limit < 0:
        raise HTTPException(400, detail="limit must be >= 0")
    return {'items': snapshot(predictor, limit=limit)['history']}
