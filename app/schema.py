"""
Pydantic models defining the structure of the data returned by the API.

They are used by FastAPI to validate responses, generate the interactive
documentation (/docs and /redoc) and serialize results to JSON.
"""

from pydantic import BaseModel
from typing import Dict, List, Optional


class IntentScore(BaseModel):
    name: str
    confidence: float
    extractor: str


class SinglePrediction(BaseModel):
    top_intent: Optional[str]
    intents: List[IntentScore]
    oos: float


class PredictionResponse(BaseModel):
    text: str
    predictions: Dict[str, SinglePrediction]
    timestamp: int
