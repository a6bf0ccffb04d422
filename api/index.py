from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field, field_validator
from typing import List
import logging
import os
import sys

from solver import RequirementGroup, StockGroup, Segment, default_stock, expand_demand, pack

# Configure logging to stdout so we can see it in the terminal
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

INDEX_HTML = os.path.join(os.path.dirname(__file__), "..", "public", "index.html")

app = FastAPI()

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SolverRequest(BaseModel):
    required: List[RequirementGroup] = Field(..., description="Required beam lengths and quantities")
    stock: List[StockGroup] = Field(default_factory=default_stock, description="Available stock beams")

    @field_validator('required')
    @classmethod
    def validate_required(cls, v):
        if not v:
            raise ValueError("Must specify at least one required beam size")
        return v

    @field_validator('stock')
    @classmethod
    def validate_stock(cls, v):
        if not v:
            raise ValueError("Must specify at least one stock beam size")
        return v


class BarPlan(BaseModel):
    bar_number: int
    stock_group: int
    capacity: int
    cuts: list[int]
    used_mm: int
    waste_mm: int
    used_percent: int
    segments: list[Segment]


class SolverResponse(BaseModel):
    bars_needed: int
    bar_plans: list[BarPlan]
    expanded_demand: list[int]
    total_capacity: int
    total_used: int
    total_waste: int
    efficiency_percent: int


def solve_cutting_plan(request: SolverRequest) -> SolverResponse:
    """
    Build a cutting plan for the requested beams.

    Args:
        request: Validated required and stock beam groups

    Returns:
        SolverResponse describing every stock beam in the plan

    Raises:
        HTTPException: 400 carrying the packing failure when the beams cannot be cut
    """
    demand = expand_demand(request.required)
    logger.info(f"📏 Stock: {[(g.length, g.quantity) for g in request.stock]}")
    logger.info(f"📊 Total pieces to cut: {len(demand)}")

    result = pack(demand, request.stock)
    if not result.is_success:
        logger.warning(f"⚠️ {result.message}")
        raise HTTPException(status_code=400, detail=result.model_dump())

    bar_plans = [
        BarPlan(
            bar_number=b.index,
            stock_group=b.group_index,
            capacity=b.capacity,
            cuts=b.cuts,
            used_mm=b.used,
            waste_mm=b.remaining,
            used_percent=b.used_percent,
            segments=b.segments(),
        )
        for b in result.bins
    ]

    logger.info(f"📋 Results:")
    logger.info(f"   - Bars needed: {result.bins_used}")
    logger.info(f"   - Total waste: {result.total_waste}mm")
    logger.info(f"   - Efficiency: {result.efficiency_percent}%")

    return SolverResponse(
        bars_needed=result.bins_used,
        bar_plans=bar_plans,
        expanded_demand=demand,
        total_capacity=result.total_capacity,
        total_used=result.total_used,
        total_waste=result.total_waste,
        efficiency_percent=result.efficiency_percent,
    )


@app.get("/", response_class=HTMLResponse)
async def home():
    with open(INDEX_HTML, "r", encoding="utf-8") as f:
        return HTMLResponse(content=f.read())


@app.get("/api")
async def api_root():
    return {"message": "Beam Cutting Optimizer API"}


@app.post("/api/solve", response_model=SolverResponse)
async def solve(request: SolverRequest):
    """
    Compute the cutting plan for the requested beams.
    """
    try:
        logger.info("📥 Received solve request")
        result = solve_cutting_plan(request)
        logger.info("📤 Sending response to client")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Unexpected error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Error solving problem: {str(e)}")
