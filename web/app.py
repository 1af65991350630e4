import logging
import os
import sys
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rivals_scout import config
from rivals_scout.ocr import OCRError
from rivals_scout.pipeline import ScoutPipeline

logger = logging.getLogger("rivals_scout.web")

app = FastAPI(title="Rivals Scout")
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

_pipeline: Optional[ScoutPipeline] = None


def get_pipeline() -> ScoutPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = ScoutPipeline()
    return _pipeline


def set_pipeline(pipeline: Optional[ScoutPipeline]) -> None:
    global _pipeline
    _pipeline = pipeline


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.get("/test")
async def test_endpoint() -> dict:
    return {"message": "API is working!"}


@app.post("/upload")
async def upload(image: Optional[UploadFile] = File(None)):
    if image is None:
        logger.info("Upload rejected: no file received")
        return _failure(400, "No file uploaded.")

    payload = await image.read()
    if not payload:
        return _failure(400, "No file uploaded.")

    logger.info("Processing upload %s (%d bytes)", image.filename, len(payload))
    try:
        return await get_pipeline().process_image(payload)
    except OCRError as e:
        logger.error("OCR failed for %s: %s", image.filename, e)
        return _failure(500, "Failed to process image")
    except Exception:
        logger.exception("Unexpected failure while processing %s", image.filename)
        return _failure(500, "Failed to process image")


@app.post("/players")
async def players(request: Request) -> dict:
    try:
        payload = await request.json()
    except Exception:
        payload = {}
    if isinstance(payload, list):
        raw = payload
    elif isinstance(payload, dict):
        raw = payload.get("names") or []
    else:
        raise HTTPException(status_code=400, detail="body must be a list of names or {\"names\": [...]}")
    if isinstance(raw, str):
        raw = raw.split("\n")
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="names must be a list of player names")
    names = [str(name).strip() for name in raw if str(name or "").strip()]
    if not names:
        raise HTTPException(status_code=400, detail="at least one player name is required")

    return await get_pipeline().process_handles(names)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    print("Starting Rivals Scout API...")
    print(f"Listening on http://{config.API_HOST}:{config.API_PORT}")
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
