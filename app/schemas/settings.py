from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, Union

from app.models.system_setting import SettingDataType


class SystemSettingCreate(BaseModel):
    key: str = Field(..., min_length=1, max_length=128)
    value: str
    category: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    description: Optional[str] = None
    data_type: SettingDataType = SettingDataType.STRING
    is_editable: bool = True


class SystemSettingUpdate(BaseModel):
    # Accept numbers/booleans from JSON clients; stored as text
    value: Union[str, int, float, bool]


class SystemSettingResponse(BaseModel):
    id: int
    key: str
    value: str
    category: str
    label: str
    description: Optional[str] = None
    data_type: str
    is_editable: bool
    updated_by: Optional[str] = None
    updated_by_name: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Typed configuration assembled from the key/value store ---

class InsuranceRates(BaseModel):
    social_rate: float = 9.0
    medical_rate: float = 0.0
    employer_contribution: float = 12.0


class TaxRates(BaseModel):
    vat_rate: float = 15.0
    withholding_rate: float = 0.0


class LeavePolicySettings(BaseModel):
    annual_days: float = 21.0
    sick_days: float = 30.0
    settlement_rate: float = 1.0
    max_accumulation_days: float = 60.0


class DeductionSettings(BaseModel):
    late_penalty: float = 100.0
    absence_penalty: float = 300.0


class GeneralSettings(BaseModel):
    company_name: str = "Sabq Newspaper"
    company_name_en: str = "Sabq Newspaper"
    commercial_register: str = ""
    tax_number: str = ""
    fiscal_year_start: int = Field(default=1, ge=1, le=12)
    currency: str = "SAR"
    working_days_per_month: int = Field(default=30, ge=1, le=31)


class SystemConfiguration(BaseModel):
    insurance: InsuranceRates = InsuranceRates()
    tax: TaxRates = TaxRates()
    leave: LeavePolicySettings = LeavePolicySettings()
    deduction: DeductionSettings = DeductionSettings()
    general: GeneralSettings = GeneralSettings()
