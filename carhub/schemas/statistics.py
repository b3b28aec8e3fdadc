from typing import List, Optional
import datetime
from pydantic import BaseModel, Field

from carhub.models.enums import FuelType, MaintenanceCategory
from carhub.schemas.fueling import FuelingRecordResponse
from carhub.schemas.maintenance import MaintenanceRecordResponse

class DailyCost(BaseModel):
    date: datetime.date
    cost: float

class DashboardSummary(BaseModel):
    """Figures shown on the home dashboard for one vehicle."""
    totalFuelCost: float = Field(0.0, description="Sum of fueling costs")
    totalMaintenanceCost: float = Field(0.0, description="Sum of maintenance costs")
    totalOverallCost: float = Field(0.0, description="Fueling plus maintenance")
    lastFueling: Optional[FuelingRecordResponse] = None
    lastMaintenance: Optional[MaintenanceRecordResponse] = None
    avgKmPerLiter: float = Field(0.0, description="Mean over fill-ups with a computed kmPerLiter")
    dailyCosts: List[DailyCost] = Field(default=[], description="Cost per day, oldest first")
    averageMonthlyCost: float = Field(0.0, description="Overall cost per month with activity")
    averageMonthlyMileage: float = Field(0.0, description="Km per month between lowest and highest odometer")

class FuelPricePoint(BaseModel):
    date: datetime.date
    value: float
    fuelType: FuelType

class SeriesPoint(BaseModel):
    date: datetime.date
    value: float

class CategorySpending(BaseModel):
    name: MaintenanceCategory
    value: float

class ReportData(BaseModel):
    """Series behind the reports charts, filtered by month and year."""
    availableYears: List[int] = []
    fuelPrices: List[FuelPricePoint] = []
    kmPerLiter: List[SeriesPoint] = []
    spendingByCategory: List[CategorySpending] = []
