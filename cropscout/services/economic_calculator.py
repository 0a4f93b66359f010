"""
Economic Impact Calculator
==========================
Turns grid statistics into money: areas -> yield -> revenue -> intervention
costs -> ROI.

All ratios guard against a zero denominator and fall back to 0.0, so a
degenerate grid or a zero-cost configuration never raises.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from cropscout.domain.economics import EconomicConfig, EconomicImpact
from cropscout.domain.field_grid import GridStats
from cropscout.domain.fusion import FusionResult
from cropscout.utils.time import iso_now

logger = logging.getLogger(__name__)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def calculate_areas(grid_stats: GridStats, config: EconomicConfig) -> dict[str, Any]:
    infected_area = grid_stats.infected_count * config.cell_area_hectares
    return {
        "total_area": config.total_area_hectares,
        "infected_area": infected_area,
        "healthy_area": config.total_area_hectares - infected_area,
        "infection_percentage": _ratio(grid_stats.infected_count, grid_stats.total_cells) * 100,
        "infected_cells": grid_stats.infected_count,
        "total_cells": grid_stats.total_cells,
    }


def calculate_yield_loss(areas: dict[str, Any], config: EconomicConfig) -> dict[str, Any]:
    """Yield (kg) for the untreated, treated and perfect scenarios."""
    healthy_yield = areas["healthy_area"] * config.yield_per_hectare
    potential_infected_yield = areas["infected_area"] * config.yield_per_hectare

    loss_untreated = potential_infected_yield * config.loss_percentage_untreated / 100
    loss_treated = potential_infected_yield * config.loss_percentage_treated / 100
    total_untreated = healthy_yield + potential_infected_yield - loss_untreated
    total_treated = healthy_yield + potential_infected_yield - loss_treated

    return {
        "perfect_yield": areas["total_area"] * config.yield_per_hectare,
        "yield_loss_untreated": loss_untreated,
        "total_yield_untreated": total_untreated,
        "yield_loss_treated": loss_treated,
        "total_yield_treated": total_treated,
        "yield_saved_by_treatment": total_treated - total_untreated,
        "healthy_yield": healthy_yield,
        "potential_infected_yield": potential_infected_yield,
    }


def calculate_financial_loss(yield_data: dict[str, Any], config: EconomicConfig) -> dict[str, Any]:
    perfect_revenue = yield_data["perfect_yield"] * config.price_per_kg
    revenue_untreated = yield_data["total_yield_untreated"] * config.price_per_kg
    revenue_treated = yield_data["total_yield_treated"] * config.price_per_kg
    return {
        "perfect_revenue": perfect_revenue,
        "revenue_untreated": revenue_untreated,
        "revenue_treated": revenue_treated,
        "financial_loss_untreated": perfect_revenue - revenue_untreated,
        "financial_loss_treated": perfect_revenue - revenue_treated,
        "money_saved_by_treatment": revenue_treated - revenue_untreated,
    }


def calculate_intervention_costs(areas: dict[str, Any], config: EconomicConfig) -> dict[str, Any]:
    """Precision (infected cells only) vs blanket (whole field) spraying."""
    fixed = config.fixed_cost_per_mission
    precision_variable = areas["infected_area"] * config.cost_per_hectare
    blanket_variable = areas["total_area"] * config.cost_per_hectare
    precision_total = fixed + precision_variable
    blanket_total = fixed + blanket_variable

    precision_chemical = areas["infected_area"] * config.chemical_per_hectare
    blanket_chemical = areas["total_area"] * config.chemical_per_hectare
    cost_savings = blanket_total - precision_total
    chemical_saved = blanket_chemical - precision_chemical

    return {
        "precision": {
            "fixed_cost": fixed,
            "variable_cost": precision_variable,
            "total_cost": precision_total,
            "chemical_usage": precision_chemical,
        },
        "blanket": {
            "fixed_cost": fixed,
            "variable_cost": blanket_variable,
            "total_cost": blanket_total,
            "chemical_usage": blanket_chemical,
        },
        "savings": {
            "cost_savings": cost_savings,
            "savings_percentage": _ratio(cost_savings, blanket_total) * 100,
            "chemical_saved": chemical_saved,
            "chemical_savings_percentage": _ratio(chemical_saved, blanket_chemical) * 100,
            "environmental_value": chemical_saved * config.environmental_cost_per_liter,
        },
    }


def calculate_roi(
    financial_data: dict[str, Any],
    intervention_costs: dict[str, Any],
    yield_data: dict[str, Any],
    config: EconomicConfig,
) -> dict[str, Any]:
    """
    Return on one precision mission and over the season.

    ``roi_ratio`` is total benefit divided by mission cost. The "Low ROI"
    alert fires when it drops below 2; economic risk keys on potential loss.
    """
    system_cost = intervention_costs["precision"]["total_cost"]
    yield_protection_value = yield_data["yield_saved_by_treatment"] * config.price_per_kg
    chemical_cost_savings = intervention_costs["savings"]["cost_savings"]
    total_benefit = yield_protection_value + chemical_cost_savings
    roi_ratio = _ratio(total_benefit, system_cost)

    applications = config.applications_per_season
    seasonal_cost = system_cost * applications
    seasonal_benefit = total_benefit * applications

    break_even = _ratio(system_cost, total_benefit)
    break_even_applications = math.ceil(break_even)
    if total_benefit <= 0:
        break_even_message = "No break-even: treatment benefit does not cover its cost"
    elif break_even < 1:
        break_even_message = "Profitable from first application"
    else:
        break_even_message = f"Break-even after {break_even_applications} applications"

    return {
        "per_application": {
            "system_cost": system_cost,
            "yield_protection_value": yield_protection_value,
            "chemical_cost_savings": chemical_cost_savings,
            "total_benefit": total_benefit,
            "net_profit": total_benefit - system_cost,
            "roi_ratio": roi_ratio,
            "roi_percentage": _ratio(total_benefit - system_cost, system_cost) * 100,
        },
        "seasonal": {
            "applications": applications,
            "total_cost": seasonal_cost,
            "total_benefit": seasonal_benefit,
            "net_profit": seasonal_benefit - seasonal_cost,
            "roi_ratio": _ratio(seasonal_benefit, seasonal_cost),
            "roi_percentage": _ratio(seasonal_benefit - seasonal_cost, seasonal_cost) * 100,
        },
        "break_even": {
            "applications": break_even_applications,
            "message": break_even_message,
        },
        "money_saved_by_treatment": financial_data["money_saved_by_treatment"],
    }


def calculate_economic_impact(
    grid_stats: GridStats | None,
    config: EconomicConfig | None = None,
) -> EconomicImpact:
    """Full economic picture for the current grid; a healthy field yields an empty impact."""
    config = config or EconomicConfig()

    if grid_stats is None or grid_stats.infected_count == 0:
        return EconomicImpact(
            has_infection=False,
            message="No disease detected - field is healthy!",
            timestamp=iso_now(),
        )

    if grid_stats.infected_count == grid_stats.total_cells:
        logger.warning("Entire field is infected (%d cells) - immediate action required", grid_stats.total_cells)

    areas = calculate_areas(grid_stats, config)
    yield_data = calculate_yield_loss(areas, config)
    financial_data = calculate_financial_loss(yield_data, config)
    intervention_costs = calculate_intervention_costs(areas, config)
    roi = calculate_roi(financial_data, intervention_costs, yield_data, config)

    return EconomicImpact(
        has_infection=True,
        message=f"{areas['infected_cells']} zones infected ({areas['infection_percentage']:.1f}% of field)",
        potential_loss=financial_data["financial_loss_untreated"],
        areas=areas,
        yield_data=yield_data,
        financial_data=financial_data,
        intervention_costs=intervention_costs,
        roi=roi,
        timestamp=iso_now(),
    )


def _diagnosis_bucket(result: FusionResult) -> str | None:
    diagnosis = ((result.diagnosis.refined_diagnosis if result.diagnosis else None) or "").lower()
    if "fungal" in diagnosis or "infection" in diagnosis:
        return "disease"
    if "drought" in diagnosis or "heat" in diagnosis or "cold" in diagnosis:
        return "environmental"
    if "risk" in diagnosis:
        return "preventive"
    if "healthy" in diagnosis:
        return "healthy"
    return None


def calculate_fusion_enhanced_impact(
    grid_stats: GridStats | None,
    fusion_results: Sequence[FusionResult] | None,
    config: EconomicConfig | None = None,
) -> EconomicImpact:
    """
    Economic impact refined by fused diagnoses.

    Only disease zones get chemical spray, environmental stress zones get the
    cheaper irrigation treatment; the remaining vision positives count as
    avoided false positives.
    """
    config = config or EconomicConfig()
    impact = calculate_economic_impact(grid_stats, config)
    if not fusion_results or not impact.has_infection:
        return impact

    counts = {"disease": 0, "environmental": 0, "preventive": 0, "healthy": 0}
    for result in fusion_results:
        bucket = _diagnosis_bucket(result)
        if bucket:
            counts[bucket] += 1

    cell_cost = config.cell_area_hectares * config.cost_per_hectare
    chemical_cost = counts["disease"] * cell_cost
    irrigation_cost = counts["environmental"] * cell_cost * config.irrigation_cost_factor
    total_cost = chemical_cost + irrigation_cost + config.fixed_cost_per_mission

    vision_only_cost = impact.intervention_costs["precision"]["total_cost"]
    vision_positives = grid_stats.infected_count
    avoided = max(0, vision_positives - counts["disease"])
    false_positive_savings = avoided * cell_cost

    impact.fusion = {
        "enhanced": True,
        "diagnosis_counts": counts,
        "costs": {
            "chemical_spray": chemical_cost,
            "irrigation": irrigation_cost,
            "total": total_cost,
            "vision_only": vision_only_cost,
            "fusion_savings": vision_only_cost - total_cost,
        },
        "false_positives": {
            "avoided": avoided,
            "savings": false_positive_savings,
            "percentage": round(_ratio(avoided, vision_positives) * 100, 1),
        },
        "enhanced_roi": _ratio(impact.roi["per_application"]["net_profit"] + false_positive_savings, total_cost),
    }
    return impact


class EconomicCalculator:
    """Config-bound calculator; satisfies ``EconomicImpactProvider``."""

    def __init__(self, config: EconomicConfig | None = None) -> None:
        self.config = config or EconomicConfig()

    def calculate(self, grid_stats: GridStats | None) -> EconomicImpact:
        return calculate_economic_impact(grid_stats, self.config)

    def calculate_with_fusion(
        self,
        grid_stats: GridStats | None,
        fusion_results: Sequence[FusionResult] | None,
    ) -> EconomicImpact:
        return calculate_fusion_enhanced_impact(grid_stats, fusion_results, self.config)


# ------------------------------------------------------------------
# Formatting
# ------------------------------------------------------------------


def _group_indian(digits: str) -> str:
    """12345678 -> 1,23,45,678 (lakh/crore grouping)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float | None, config: EconomicConfig | None = None) -> str:
    config = config or EconomicConfig()
    value = round(amount or 0.0)
    sign = "-" if value < 0 else ""
    return f"{sign}{config.currency_symbol}{_group_indian(str(abs(value)))}"


def format_percentage(value: float | None, decimals: int = 1) -> str:
    return f"{(value or 0.0):.{decimals}f}%"


def format_weight(kg: float | None) -> str:
    kg = kg or 0.0
    if kg >= 1000:
        return f"{kg / 1000:.2f} tonnes"
    return f"{kg:.0f} kg"
