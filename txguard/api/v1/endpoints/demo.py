"""
Demo scenario endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, HTTPException, status

from txguard.core.enums import ScenarioCategory
from txguard.core.models import DemoScenario
from txguard.services.demo_scenarios import (
    DEMO_SCENARIOS,
    get_demo_scenario_by_id,
    get_demo_scenarios_by_category,
    get_presentation_scenarios,
    get_random_demo_scenario,
)

router = APIRouter()


@router.get("/demo/scenarios", response_model=List[DemoScenario])
async def list_scenarios(category: Optional[ScenarioCategory] = None):
    if category is None:
        return DEMO_SCENARIOS
    return get_demo_scenarios_by_category(category.value)


@router.get("/demo/scenarios:presentation", response_model=List[DemoScenario])
async def presentation_scenarios():
    """Curated walkthrough order: safe, risky, complex."""
    return get_presentation_scenarios()


@router.get("/demo/scenarios:random", response_model=DemoScenario)
async def random_scenario():
    return get_random_demo_scenario()


@router.get("/demo/scenarios/{scenario_id}", response_model=DemoScenario)
async def get_scenario(scenario_id: str):
    scenario = get_demo_scenario_by_id(scenario_id)
    if scenario is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown scenario: {scenario_id}")
    return scenario
