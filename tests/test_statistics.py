"""Tests for the dashboard and report aggregates."""

from datetime import date, datetime

import pytest

from carhub.models.enums import FuelType, MaintenanceCategory, MaintenanceType
from carhub.schemas.fueling import FuelingRecordResponse
from carhub.schemas.maintenance import MaintenanceRecordResponse
from carhub.services.statistics import dashboard_summary, report_data


def fueling(record_id, when, mileage, cost, liters=40.0, km_per_liter=None, fuel_type=FuelType.GASOLINE):
    return FuelingRecordResponse(
        id=record_id,
        vehicleId="v1",
        date=when,
        mileage=mileage,
        fuelType=fuel_type,
        liters=liters,
        cost=cost,
        isFullTank=True,
        kmPerLiter=km_per_liter,
        createdAt=when,
        updatedAt=when,
    )


def maintenance(record_id, when, cost, category=MaintenanceCategory.BRAKES):
    return MaintenanceRecordResponse(
        id=record_id,
        vehicleId="v1",
        date=when,
        description="Serviço",
        cost=cost,
        type=MaintenanceType.CORRECTIVE,
        category=category,
        createdAt=when,
        updatedAt=when,
    )


@pytest.fixture
def records():
    fuel = [
        fueling("f1", datetime(2023, 12, 20), 9500, 190.0, liters=38.0),
        fueling("f2", datetime(2024, 1, 10), 10000, 100.0, liters=20.0),
        fueling("f3", datetime(2024, 2, 10), 10600, 150.0, liters=30.0, km_per_liter=12.0,
                fuel_type=FuelType.ETHANOL),
    ]
    service = [
        maintenance("m1", datetime(2024, 2, 10), 50.0),
        maintenance("m2", datetime(2024, 2, 15), 200.0, category=MaintenanceCategory.ENGINE),
        maintenance("m3", datetime(2024, 2, 20), 30.0),
    ]
    return fuel, service


class TestDashboardSummary:
    def test_empty(self):
        summary = dashboard_summary([], [])

        assert summary.totalOverallCost == 0.0
        assert summary.lastFueling is None
        assert summary.lastMaintenance is None
        assert summary.dailyCosts == []

    def test_date_range(self, records):
        fuel, service = records
        summary = dashboard_summary(fuel, service, start=date(2024, 1, 1), end=date(2024, 2, 29))

        assert summary.totalFuelCost == 250.0
        assert summary.totalMaintenanceCost == 280.0
        assert summary.totalOverallCost == 530.0
        assert summary.lastFueling.id == "f3"
        assert summary.lastMaintenance.id == "m3"
        assert summary.avgKmPerLiter == 12.0
        assert summary.averageMonthlyCost == 265.0
        # 600 km between January and February
        assert summary.averageMonthlyMileage == 300.0

    def test_daily_costs_are_summed_per_day(self, records):
        fuel, service = records
        summary = dashboard_summary(fuel, service, start=date(2024, 2, 1))

        assert [(d.date, d.cost) for d in summary.dailyCosts] == [
            (date(2024, 2, 10), 200.0),
            (date(2024, 2, 15), 200.0),
            (date(2024, 2, 20), 30.0),
        ]

    def test_end_day_is_inclusive(self, records):
        fuel, service = records
        summary = dashboard_summary(fuel, service, start=date(2024, 2, 20), end=date(2024, 2, 20))

        assert summary.totalMaintenanceCost == 30.0
        assert summary.totalFuelCost == 0.0


class TestReportData:
    def test_available_years(self, records):
        fuel, service = records
        assert report_data(fuel, service).availableYears == [2024, 2023]

    def test_filtered_by_year(self, records):
        fuel, service = records
        report = report_data(fuel, service, year=2024)

        assert [(p.date, p.value, p.fuelType) for p in report.fuelPrices] == [
            (date(2024, 1, 10), 5.0, FuelType.GASOLINE),
            (date(2024, 2, 10), 5.0, FuelType.ETHANOL),
        ]
        assert [(p.date, p.value) for p in report.kmPerLiter] == [(date(2024, 2, 10), 12.0)]

    def test_spending_by_category(self, records):
        fuel, service = records
        report = report_data(fuel, service, month=2, year=2024)

        spending = {s.name: s.value for s in report.spendingByCategory}
        assert spending == {MaintenanceCategory.BRAKES: 80.0, MaintenanceCategory.ENGINE: 200.0}

    def test_month_without_records(self, records):
        fuel, service = records
        report = report_data(fuel, service, month=6, year=2024)

        assert report.fuelPrices == []
        assert report.spendingByCategory == []
        assert report.availableYears == [2024, 2023]
