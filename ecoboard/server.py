"""
EcoBoard Server - FastAPI backend for the public leaderboard.

Provides:
- GET  /api/leaderboard  ranked leaderboard (demo data when unconfigured)
- POST /api/score        composite score, grade and breakdown for one assessment
- GET  /api/health       liveness probe
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ecoboard.config import LeaderboardConfig, config_from_env
from ecoboard.leaderboard.pipeline import LeaderboardPipeline
from ecoboard.registry import create_source
from ecoboard.scoring.boundaries import IncompleteMeasurement
from ecoboard.scoring.summary import build_score_summary

logger = logging.getLogger(__name__)


# ============================================
# Request Models
# ============================================

class RecommendationIn(BaseModel):
    action: str
    impact: str
    boundary: str
    current_score: float


class ScoreRequest(BaseModel):
    boundary_scores: Dict[str, Any]
    recommendations: List[RecommendationIn] = Field(default_factory=list)
    allow_partial: Optional[bool] = None


# ============================================
# App factory
# ============================================

def create_app(config: Optional[LeaderboardConfig] = None) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        config: Leaderboard configuration; read from the environment when
            omitted
    """
    config = config or config_from_env()

    app = FastAPI(title="EcoBoard API", version="1.0.0")
    app.state.config = config

    # Enable CORS for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        return {"message": "EcoBoard API", "version": "1.0.0"}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api/leaderboard")
    async def get_leaderboard(limit: Optional[int] = Query(default=None, ge=1)):
        logger.info("GET /api/leaderboard?limit=%s", limit)
        try:
            pipeline = LeaderboardPipeline(create_source(config.source), config=config)
            result = await pipeline.run(limit)
        except Exception as e:
            logger.exception("Leaderboard API error")
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Failed to fetch leaderboard",
                    "details": str(e) or type(e).__name__,
                    "leaderboard": [],
                },
            )
        return JSONResponse(status_code=result.status_code, content=result.to_dict())

    @app.post("/api/score")
    async def score(request: ScoreRequest):
        allow_partial = request.allow_partial
        if allow_partial is None:
            allow_partial = config.allow_partial_boundaries
        try:
            summary = build_score_summary(
                request.boundary_scores,
                recommendations=[r.model_dump() for r in request.recommendations],
                direction=config.score_direction,
                allow_partial=allow_partial,
            )
        except IncompleteMeasurement as e:
            raise HTTPException(status_code=422, detail=str(e))
        return summary.to_dict()

    return app


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    import uvicorn

    print(f"""
╔═══════════════════════════════════════════════════════════╗
║              ECOBOARD SERVER                              ║
╠═══════════════════════════════════════════════════════════╣
║  Starting server at http://{host}:{port}
║                                                           ║
║  Endpoints:                                               ║
║    GET  /api/leaderboard?limit=50 - Ranked leaderboard    ║
║    POST /api/score                - Score one assessment  ║
║    GET  /api/health               - Health check          ║
║                                                           ║
║  Configure the data source:                               ║
║    export ECOBOARD_SOURCE_PATH=./data/leaderboard.json    ║
║    export ECOBOARD_SOURCE_URL=http://host/api/leaderboard ║
╚═══════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "ecoboard.server:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="EcoBoard Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()
    run_server(args.host, args.port, args.reload)
