"""
Aggregates for the dashboard and reports views.

These operate on records already fetched for one vehicle (ORM rows or
response schemas alike) and never touch the database.
"""

from collections import OrderedDict
from datetime import date, datetime, time
from typing import Dict, Optional, Sequence

from carhub.schemas.fueling import FuelingRecordResponse
from carhub.schemas.maintenance import MaintenanceRecordResponse
from carhub.schemas.statistics import (
    CategorySpending,
    DailyCost,
    DashboardSummary,
    FuelPricePoint,
    ReportData,
    SeriesPoint,
)


def _within(record_date: datetime, start: Optional[date], end: Optional[date]) -> bool:
    if start and record_date < datetime.combine(start, time.min):
        return False
    if end and record_date > datetime.combine(end, time.max):
        return False
    return True


def _in_period(record_date: datetime, month: Optional[int], year: Optional[int]) -> bool:
    if month is not None and record_date.month != month:
        return False
    if year is not None and record_date.year != year:
        return False
    return True


def _naive(value: datetime) -> datetime:
    return value.replace(tzinfo=None) if value.tzinfo else value


def dashboard_summary(
    fueling_records: Sequence,
    maintenance_records: Sequence,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> DashboardSummary:
    """
    Totals and averages for the records dated between ``start`` and ``end``
    (whole days, both inclusive; either bound may be omitted).
    """
    fueling = [r for r in fueling_records if _within(_naive(r.date), start, end)]
    maintenance = [r for r in maintenance_records if _within(_naive(r.date), start, end)]

    total_fuel = sum(r.cost for r in fueling)
    total_maintenance = sum(r.cost for r in maintenance)
    total = total_fuel + total_maintenance

    last_fueling = max(fueling, key=lambda r: r.date) if fueling else None
    last_maintenance = max(maintenance, key=lambda r: r.date) if maintenance else None

    measured = [r.kmPerLiter for r in fueling if r.kmPerLiter and r.kmPerLiter > 0]
    avg_km_per_liter = sum(measured) / len(measured) if measured else 0.0

    costs_by_day: Dict[date, float] = {}
    for r in list(fueling) + list(maintenance):
        day = _naive(r.date).date()
        costs_by_day[day] = costs_by_day.get(day, 0.0) + r.cost
    daily_costs = [
        DailyCost(date=day, cost=round(cost, 2))
        for day, cost in sorted(costs_by_day.items())
    ]

    active_months = {(r.date.year, r.date.month) for r in list(fueling) + list(maintenance)}
    avg_monthly_cost = total / len(active_months) if active_months else 0.0

    avg_monthly_mileage = 0.0
    if len(fueling) >= 2:
        lowest = min(fueling, key=lambda r: r.mileage)
        highest = max(fueling, key=lambda r: r.mileage)
        if highest.mileage > lowest.mileage:
            first, last = sorted([lowest.date, highest.date])
            months_spanned = (last.year - first.year) * 12 + (last.month - first.month) + 1
            avg_monthly_mileage = (highest.mileage - lowest.mileage) / max(months_spanned, 1)

    return DashboardSummary(
        totalFuelCost=round(total_fuel, 2),
        totalMaintenanceCost=round(total_maintenance, 2),
        totalOverallCost=round(total, 2),
        lastFueling=FuelingRecordResponse.model_validate(last_fueling) if last_fueling else None,
        lastMaintenance=MaintenanceRecordResponse.model_validate(last_maintenance) if last_maintenance else None,
        avgKmPerLiter=round(avg_km_per_liter, 2),
        dailyCosts=daily_costs,
        averageMonthlyCost=round(avg_monthly_cost, 2),
        averageMonthlyMileage=round(avg_monthly_mileage, 2),
    )


def report_data(
    fueling_records: Sequence,
    maintenance_records: Sequence,
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> ReportData:
    """
    Chart series for the reports view. ``month`` is 1-12; None means every
    month (likewise for ``year``).
    """
    years = {r.date.year for r in fueling_records} | {r.date.year for r in maintenance_records}

    fueling = sorted(
        (r for r in fueling_records if _in_period(r.date, month, year)),
        key=lambda r: r.date,
    )
    maintenance = sorted(
        (r for r in maintenance_records if _in_period(r.date, month, year)),
        key=lambda r: r.date,
    )

    fuel_prices = [
        FuelPricePoint(date=_naive(r.date).date(), value=round(r.cost / r.liters, 2), fuelType=r.fuelType)
        for r in fueling
        if r.liters
    ]
    km_per_liter = [
        SeriesPoint(date=_naive(r.date).date(), value=round(r.kmPerLiter, 2))
        for r in fueling
        if r.kmPerLiter and r.kmPerLiter > 0
    ]

    spending: "OrderedDict[str, float]" = OrderedDict()
    for r in maintenance:
        spending[r.category] = spending.get(r.category, 0.0) + r.cost

    return ReportData(
        availableYears=sorted(years, reverse=True),
        fuelPrices=fuel_prices,
        kmPerLiter=km_per_liter,
        spendingByCategory=[
            CategorySpending(name=category, value=round(total, 2))
            for category, total in spending.items()
        ],
    )
