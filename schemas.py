"""
Schemas for Arrear Calculation

Each Pydantic model is either an input record handed to the engine by the
form layer or part of the statement it hands back.
"""
from datetime import date
from typing import Optional, List, Literal
from pydantic import BaseModel, Field, field_validator, model_validator

Cpc = Literal["6th", "7th"]


class AllowanceConfig(BaseModel):
    applicable: bool = False
    from_date: Optional[date] = Field(None, description="Allowance window start (defaults to arrear start)")
    to_date: Optional[date] = Field(None, description="Allowance window end (defaults to arrear end)")
    fixed_rate: Optional[float] = Field(None, ge=0, description="Rate used instead of the rate table")
    fixed_rate_from: Optional[date] = None
    fixed_rate_to: Optional[date] = None


class TravelAllowanceConfig(AllowanceConfig):
    double_ta: bool = Field(False, description="Double TA (e.g. for orthopedically handicapped)")


class OtherAllowance(BaseModel):
    name: Optional[str] = Field(None, description="Display name, e.g. Special Duty Allowance")
    amount: float = Field(0.0, ge=0)
    from_date: Optional[date] = None
    to_date: Optional[date] = None


class SalaryComponentSide(BaseModel):
    cpc: Cpc = Field(..., description="Pay commission: 6th/7th")
    basic_pay: float = Field(..., ge=0, description="Basic pay at the start of the arrear period")
    pay_level: str = Field(..., description="Pay level key, e.g. 10 or PB-2/4200")
    increment_month: int = Field(7, description="Annual increment month: 1 (January) or 7 (July)")
    increment_date: Optional[date] = Field(None, description="Exact date of the first increment")

    fixed_basic_pay: Optional[float] = Field(None, ge=0)
    fixed_basic_pay_from: Optional[date] = None
    fixed_basic_pay_to: Optional[date] = None

    da: AllowanceConfig = AllowanceConfig()
    hra: AllowanceConfig = AllowanceConfig()
    npa: AllowanceConfig = AllowanceConfig()
    ta: TravelAllowanceConfig = TravelAllowanceConfig()
    other: OtherAllowance = OtherAllowance()

    # Due side only
    refixed_basic_pay: Optional[float] = Field(None, ge=0)
    refixed_basic_pay_date: Optional[date] = None

    @field_validator("increment_month")
    @classmethod
    def check_increment_month(cls, v: int) -> int:
        if v not in (1, 7):
            raise ValueError("Increment month must be 1 (January) or 7 (July)")
        return v

    @model_validator(mode="after")
    def check_refixation(self):
        if self.refixed_basic_pay is not None and self.refixed_basic_pay_date is None:
            raise ValueError("Refixation date is required when refixed basic pay is set")
        return self


class ArrearRequest(BaseModel):
    employee_id: str = Field(..., description="Employee ID")
    employee_name: str = Field(..., description="Full name")
    designation: Optional[str] = None
    department: Optional[str] = None
    pay_fixation_ref: Optional[str] = Field(None, description="Pay fixation order reference")
    from_date: date
    to_date: date
    paid: SalaryComponentSide
    to_be_paid: SalaryComponentSide

    @model_validator(mode="after")
    def check_period(self):
        if self.to_date < self.from_date:
            raise ValueError("To Date cannot be before From Date.")
        return self


class RateEntry(BaseModel):
    from_date: date
    to_date: Optional[date] = Field(None, description="Open ended when absent")
    rate: float = Field(..., ge=0, description="Percentage (DA/HRA/NPA) or flat amount (TA)")
    basic_from: Optional[float] = None
    basic_to: Optional[float] = None
    pay_level_from: Optional[str] = None
    pay_level_to: Optional[str] = None
    da_rate_from: Optional[float] = None
    da_rate_to: Optional[float] = None
    min_amount: Optional[float] = Field(None, description="Minimum HRA amount")

    @model_validator(mode="after")
    def check_dates(self):
        if self.to_date is not None and self.to_date < self.from_date:
            raise ValueError("To Date cannot be before From Date.")
        return self


class RateTables(BaseModel):
    da: List[RateEntry] = []
    hra: List[RateEntry] = []
    npa: List[RateEntry] = []
    ta: List[RateEntry] = []


class ArrearCalculationRun(BaseModel):
    request: ArrearRequest
    rates: Optional[RateTables] = Field(None, description="Falls back to the configured rate tables")


class ComponentBreakdown(BaseModel):
    basic: int = 0
    da: int = 0
    hra: int = 0
    npa: int = 0
    ta: int = 0
    other: int = 0
    total: int = 0


class MonthlyRow(BaseModel):
    month: str = Field(..., description="e.g. Jan 2023")
    month_start: date
    days: int = Field(..., description="Days of the month inside the arrear period")
    drawn: ComponentBreakdown
    due: ComponentBreakdown
    difference: int


class StatementTotals(BaseModel):
    drawn_total: int = 0
    due_total: int = 0
    difference_total: int = 0


class EmployeeInfo(BaseModel):
    employee_id: str
    employee_name: str
    designation: Optional[str] = None
    department: Optional[str] = None
    pay_fixation_ref: Optional[str] = None


class Statement(BaseModel):
    employee: EmployeeInfo
    from_date: date
    to_date: date
    rows: List[MonthlyRow]
    totals: StatementTotals


class PayLevelOption(BaseModel):
    level: str
    label: str
