"""FastAPI server — HTTP host for the party consumption simulator.

Run with:
    uvicorn party_simulator.api.server:app --reload --port 8000

Or:
    python -m party_simulator.api.server

Endpoints:
    GET  /health                  — liveness probe
    GET  /schema                  — JSON Schema for Scenario inputs
    GET  /scenario/defaults       — complete default drinks scenario as JSON
    GET  /simulation-count        — recommended trial count for a guest count
    POST /simulate                — run a drinks simulation (partial or full Scenario)
    POST /simulate/food           — run the food special case
    POST /relationships/suggest   — likely complementary pairs for a shopping list
    POST /relationships/check     — secondary items bought below their ratio

Endpoints are plain ``def`` functions, so FastAPI runs each simulation in its
worker threadpool and the event loop stays responsive.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from party_simulator import __version__
from party_simulator.config.catalog import ComplementaryRelationship, PurchasableItem
from party_simulator.config.defaults import default_eater_profiles, default_scenario
from party_simulator.config.profiles import EaterProfile
from party_simulator.config.scenario import Scenario
from party_simulator.engine.food import run_food_simulation
from party_simulator.engine.orchestrator import run_simulation
from party_simulator.engine.planning import recommended_simulation_count, summarize_by_category
from party_simulator.engine.suggestions import (
    auto_suggest_relationships,
    find_ratio_shortfalls,
    suggest_complementary_items,
)
from party_simulator.errors import SimulationError
from party_simulator.models.results import (
    CategoryConsumption,
    ItemSimulationResult,
    RatioShortfall,
    SuggestedRelationship,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Party Consumption Simulator API",
    version=__version__,
    description=(
        "Monte-Carlo purchase planning for parties. Describe your guests, "
        "event and shopping list; get back how many units of each item to buy "
        "at a chosen confidence level, with the demand distribution behind it."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SimulationError)
async def _simulation_error_handler(request: Request, exc: SimulationError) -> JSONResponse:
    logger.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "ValidationError", "detail": exc.errors(include_url=False)},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class SimulateRequest(BaseModel):
    """Request body for /simulate. All fields optional — defaults used for missing."""
    scenario: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full Scenario JSON. Missing fields use defaults. "
                    "Example: {'simulation': {'attendees': 80, 'confidence_level': 95}, "
                    "'event': {'temperature': 'hot'}}",
    )


class SimulateResponse(BaseModel):
    """Response from /simulate."""
    results: dict[str, ItemSimulationResult]
    categories: list[CategoryConsumption]
    total_cost: float


class FoodSimulateRequest(BaseModel):
    """Request body for /simulate/food."""
    attendees: int = Field(default=40)
    eater_profiles: list[EaterProfile] = Field(default_factory=default_eater_profiles)
    items: list[PurchasableItem]
    relationships: list[ComplementaryRelationship] = Field(default_factory=list)
    confidence_level: float = Field(default=90.0)
    simulation_count: int = Field(default=1000)
    random_seed: int | None = None


class SuggestRequest(BaseModel):
    """Request body for /relationships/suggest."""
    items: list[PurchasableItem]
    existing: list[ComplementaryRelationship] = Field(default_factory=list)


class SuggestResponse(BaseModel):
    suggestions: list[SuggestedRelationship]
    new_relationships: list[ComplementaryRelationship]


class CheckRequest(BaseModel):
    """Request body for /relationships/check."""
    items: list[PurchasableItem]
    relationships: list[ComplementaryRelationship]


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def get_default_scenario() -> dict[str, Any]:
    return default_scenario().model_dump()


def _build_scenario(overrides: dict[str, Any]) -> Scenario:
    """Build a Scenario from partial overrides merged onto defaults."""
    defaults = get_default_scenario()
    _deep_merge(defaults, overrides)
    return Scenario.model_validate(defaults)


def _deep_merge(base: dict, overrides: dict) -> dict:
    """Recursively merge overrides into base dict.  Lists are replaced whole."""
    for key, val in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            _deep_merge(base[key], val)
        else:
            base[key] = val
    return base


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Party Consumption Simulator API",
        "version": __version__,
        "start_here": "GET /scenario/defaults, then POST /simulate",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/schema")
def get_schema():
    """Full JSON Schema for Scenario — all inputs with types, defaults, constraints."""
    return Scenario.model_json_schema()


@app.get("/scenario/defaults")
def get_defaults():
    """Complete default Scenario as JSON. Use as a starting point for modifications."""
    return get_default_scenario()


@app.get("/simulation-count")
def get_simulation_count(
    attendees: int = Query(ge=1, description="Number of guests"),
    precision: Literal["low", "medium", "high"] = Query(default="medium"),
):
    return {
        "attendees": attendees,
        "precision": precision,
        "simulation_count": recommended_simulation_count(attendees, precision),
    }


@app.post("/simulate", response_model=SimulateResponse)
def simulate(req: SimulateRequest):
    """Run the drinks simulation.

    Send a partial Scenario (only the fields you want to change); missing
    fields use defaults.  Lists (profiles, items, periods, relationships)
    replace the defaults wholesale.
    """
    scenario = _build_scenario(req.scenario)
    results = run_simulation(scenario)
    return SimulateResponse(
        results=results,
        categories=summarize_by_category(results, scenario.items),
        total_cost=round(sum(r.total_cost for r in results.values()), 2),
    )


@app.post("/simulate/food", response_model=SimulateResponse)
def simulate_food(req: FoodSimulateRequest):
    """Run the food special case (single phase, no environmental effects)."""
    results = run_food_simulation(
        attendees=req.attendees,
        eater_profiles=req.eater_profiles,
        items=req.items,
        relationships=req.relationships,
        confidence_level=req.confidence_level,
        simulation_count=req.simulation_count,
        random_seed=req.random_seed,
    )
    return SimulateResponse(
        results=results,
        categories=summarize_by_category(results, req.items),
        total_cost=round(sum(r.total_cost for r in results.values()), 2),
    )


@app.post("/relationships/suggest", response_model=SuggestResponse)
def suggest_relationships(req: SuggestRequest):
    return SuggestResponse(
        suggestions=suggest_complementary_items(req.items),
        new_relationships=auto_suggest_relationships(req.items, req.existing),
    )


@app.post("/relationships/check", response_model=list[RatioShortfall])
def check_relationships(req: CheckRequest):
    """Secondary items whose shopping-list units fall below ``primary units × ratio``."""
    return find_ratio_shortfalls(req.items, req.relationships)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(
        "party_simulator.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
