"""
FastAPI application — wires the feed fetcher, scorer and front-end together.

Endpoints:
  POST /api/search     — query arXiv (or the sample feed), score and rank; returns JSON
  GET  /api/presets    — topic presets available for preset searches
  GET  /api/categories — arXiv CS categories for category searches
  GET  /api/mock       — the bundled sample feed, ranked
  GET  /api/download   — nominal PDF link lookup (files are not proxied)
  GET  /health         — liveness check
  GET  /               — serves static/index.html
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from arxiv_explorer.arxiv_search import SearchRequestError, search
from arxiv_explorer.models import (
    CategoryOption,
    ContentContext,
    DownloadResponse,
    PresetSummary,
    ScoredPaper,
    SearchRequest,
    SearchResponse,
)
from arxiv_explorer.presets import (
    COMMON_CATEGORIES,
    CS_CATEGORIES,
    DEFAULT_REGISTRY,
    TopicPresetRegistry,
    UnknownPresetError,
    load_registry,
)
from arxiv_explorer.ranking import rank_feed
from arxiv_explorer.relevance import RelevanceScorer
from arxiv_explorer.sample_feed import SAMPLE_FEED, SAMPLE_TOPIC

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

DOWNLOAD_MESSAGE = "PDF downloads are not served by this app; open the pdfUrl directly."
FRONTEND_DIR = Path(os.environ.get("FRONTEND_DIR", Path(__file__).parent / "static"))


def _registry() -> TopicPresetRegistry:
    path = os.environ.get("PRESETS_FILE", "")
    return load_registry(path) if path else DEFAULT_REGISTRY


scorer = RelevanceScorer(_registry())

app = FastAPI(title="arXiv Explorer", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# API routes (must come BEFORE the static files mount)
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/presets", response_model=list[PresetSummary])
async def list_presets():
    return [
        PresetSummary(
            name=p.name,
            description=p.description,
            search_terms=p.search_terms,
            categories=list(p.categories),
        )
        for p in scorer.registry
    ]


@app.get("/api/categories")
async def list_categories() -> dict[str, list[CategoryOption]]:
    return {"all": list(CS_CATEGORIES), "common": list(COMMON_CATEGORIES)}


@app.post("/api/search", response_model=SearchResponse)
async def search_papers(req: SearchRequest):
    try:
        return await search(req, scorer)
    except (UnknownPresetError, SearchRequestError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/api/mock", response_model=list[ScoredPaper])
async def sample_papers():
    return rank_feed(SAMPLE_FEED, ContentContext(topic=SAMPLE_TOPIC), scorer)


@app.get("/api/download", response_model=DownloadResponse)
@app.post("/api/download", response_model=DownloadResponse)
async def download(arxiv_id: Optional[str] = None):
    if not arxiv_id or not arxiv_id.strip():
        return DownloadResponse(message=DOWNLOAD_MESSAGE)
    arxiv_id = arxiv_id.strip()
    return DownloadResponse(
        arxiv_id=arxiv_id,
        pdf_url=f"http://arxiv.org/pdf/{arxiv_id}.pdf",
        message=DOWNLOAD_MESSAGE,
    )


# ---------------------------------------------------------------------------
# Serve frontend — must be LAST (catches all unmatched paths)
# ---------------------------------------------------------------------------

app.mount("/", StaticFiles(directory=FRONTEND_DIR, html=True), name="frontend")
