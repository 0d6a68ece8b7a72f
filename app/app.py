import os
import traceback
from dotenv import load_dotenv
import logging
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from app import services


from contextlib import asynccontextmanager


logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

# Read environment mode (defaults to prod for safety)
ENV = os.getenv("ENV", "prod").lower()
logger.info(f"Running in {ENV} mode")

# Models loaded at startup, by name.
MODELS = {}

def get_model_paths() -> str:
    """
    Reads the comma-separated model paths from the MODEL_PATHS environment variable.
    Isolating this lookup makes it easy to patch in tests.
    """
    paths = os.getenv("MODEL_PATHS")
    assert paths is not None, "Environment variable MODEL_PATHS is not set."
    return paths

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App startup: loads the models listed in MODEL_PATHS.
    """
    global MODELS
    logger.info("Loading models during app startup...")
    try:
        MODELS = services.load_all_classifiers(get_model_paths())
        logger.info("Models loaded successfully.")
    except Exception as e:
        logger.error(f"Critical failure while loading models: {str(e)}")
        logger.error(traceback.format_exc())
        raise Exception(f"Critical failure while loading models: {str(e)}")
    # This is the point where the app is ready to handle requests
    yield
    logger.info("Unloading models...")
    MODELS.clear()


app = FastAPI(
    title="OOS Intent Classifier",
    description="Intent classification with out-of-scope detection",
    version="1.0.0",
    lifespan=lifespan,
)


"""
Routes
"""
@app.get("/")
async def root():
    return {"message": f"OOS Intent Classifier is running in {ENV} mode", "models": sorted(MODELS)}

@app.post("/predict")
async def predict(text: str):
    """
    Prediction endpoint.
    A thin controller: the work is delegated to services.py.
    """
    try:
        results = services.predict_intent(text=text, models=MODELS)
        return JSONResponse(content=results)
    except Exception as e:
        logger.error(f"Error while predicting: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPException(status_code=500, detail=f"Internal error while predicting: {str(e)}")



if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
