"""
Economic Domain Objects
=======================
Configuration and result objects for the economic impact calculator.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from cropscout.constants import EconomicDefaults


@dataclass(frozen=True)
class EconomicConfig:
    """
    Crop, disease and intervention assumptions.

    Attributes:
        total_area_hectares: Field area (must match the grid extents)
        cell_area_hectares: Area represented by one grid cell
        yield_per_hectare: Healthy yield in kg/ha
        price_per_kg: Farm gate price in ``currency_code``
        loss_percentage_untreated: Yield lost on infected area when left untreated
        loss_percentage_treated: Yield lost on infected area with prompt treatment
        cost_per_hectare: Chemical + drone + labour cost per sprayed hectare
        fixed_cost_per_mission: Setup cost per spray mission
        applications_per_season: Spray missions per season
        chemical_per_hectare: Litres of chemical per sprayed hectare
    """

    total_area_hectares: float = EconomicDefaults.TOTAL_AREA_HECTARES
    cell_area_hectares: float = EconomicDefaults.CELL_AREA_HECTARES
    crop_type: str = EconomicDefaults.CROP_TYPE
    yield_per_hectare: float = EconomicDefaults.YIELD_PER_HECTARE
    price_per_kg: float = EconomicDefaults.PRICE_PER_KG
    currency_symbol: str = EconomicDefaults.CURRENCY_SYMBOL
    currency_code: str = EconomicDefaults.CURRENCY_CODE
    loss_percentage_untreated: float = EconomicDefaults.LOSS_PERCENTAGE_UNTREATED
    loss_percentage_treated: float = EconomicDefaults.LOSS_PERCENTAGE_TREATED
    spread_rate_per_week: float = EconomicDefaults.SPREAD_RATE_PER_WEEK
    cost_per_hectare: float = EconomicDefaults.COST_PER_HECTARE
    fixed_cost_per_mission: float = EconomicDefaults.FIXED_COST_PER_MISSION
    efficacy: float = EconomicDefaults.EFFICACY
    applications_per_season: int = EconomicDefaults.APPLICATIONS_PER_SEASON
    chemical_per_hectare: float = EconomicDefaults.CHEMICAL_PER_HECTARE
    environmental_cost_per_liter: float = EconomicDefaults.ENVIRONMENTAL_COST_PER_LITER
    irrigation_cost_factor: float = EconomicDefaults.IRRIGATION_COST_FACTOR

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EconomicImpact:
    """
    Financial view of the current infection state.

    ``potential_loss`` is the revenue lost if the infection goes untreated and
    ``roi["per_application"]["roi_ratio"]`` the benefit/cost multiplier of one
    precision spray mission; both are zero / None when the field is healthy.
    """

    has_infection: bool
    message: str
    potential_loss: float = 0.0
    areas: dict[str, Any] | None = None
    yield_data: dict[str, Any] | None = None
    financial_data: dict[str, Any] | None = None
    intervention_costs: dict[str, Any] | None = None
    roi: dict[str, Any] | None = None
    timestamp: str | None = None
    fusion: dict[str, Any] = field(default_factory=dict)

    @property
    def roi_ratio(self) -> float:
        if not self.roi:
            return 0.0
        return float((self.roi.get("per_application") or {}).get("roi_ratio") or 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_infection": self.has_infection,
            "message": self.message,
            "potential_loss": self.potential_loss,
            "areas": self.areas,
            "yield_data": self.yield_data,
            "financial_data": self.financial_data,
            "intervention_costs": self.intervention_costs,
            "roi": self.roi,
            "timestamp": self.timestamp,
            "fusion": dict(self.fusion),
        }
