"""
System Settings Service

Key/value store for administrator-tunable values. Every value is stored as
text; ``data_type`` tells readers (and the write-time check) how to parse it.
``SystemConfiguration`` gives typed, validated access to the well-known keys.
"""
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    DuplicateSettingError,
    NotFoundError,
    SettingNotEditableError,
    ValidationError,
)
from app.models.audit_log import AuditAction, AuditEntity
from app.models.system_setting import SettingDataType, SystemSetting
from app.schemas.settings import SystemConfiguration, SystemSettingCreate
from app.services.audit import snapshot
from app.services.base import BaseService

TRUE_VALUES = ("true", "1")
BOOLEAN_VALUES = ("true", "false", "1", "0")

# (key, value, category, label, data_type)
DEFAULT_SETTINGS = [
    ("insurance.social_rate", "9", "insurance", "Social insurance rate (%)", SettingDataType.NUMBER),
    ("insurance.medical_rate", "0", "insurance", "Medical insurance rate (%)", SettingDataType.NUMBER),
    ("insurance.employer_contribution", "12", "insurance", "Employer contribution (%)", SettingDataType.NUMBER),
    ("tax.vat_rate", "15", "tax", "VAT rate (%)", SettingDataType.NUMBER),
    ("tax.withholding_rate", "0", "tax", "Withholding tax rate (%)", SettingDataType.NUMBER),
    ("leave.annual_days", "21", "leave", "Annual leave days", SettingDataType.NUMBER),
    ("leave.sick_days", "30", "leave", "Sick leave days", SettingDataType.NUMBER),
    ("leave.settlement_rate", "1", "leave", "Leave settlement rate", SettingDataType.NUMBER),
    ("leave.max_accumulation_days", "60", "leave", "Maximum accumulated leave days", SettingDataType.NUMBER),
    ("deduction.late_penalty", "100", "deduction", "Late arrival penalty", SettingDataType.NUMBER),
    ("deduction.absence_penalty", "300", "deduction", "Absence penalty", SettingDataType.NUMBER),
    ("general.company_name", "Sabq Newspaper", "general", "Company name", SettingDataType.STRING),
    ("general.company_name_en", "Sabq Newspaper", "general", "Company name (English)", SettingDataType.STRING),
    ("general.commercial_register", "", "general", "Commercial register", SettingDataType.STRING),
    ("general.tax_number", "", "general", "Tax number", SettingDataType.STRING),
    ("general.fiscal_year_start", "1", "general", "Fiscal year start month", SettingDataType.NUMBER),
    ("general.currency", "SAR", "general", "Currency", SettingDataType.STRING),
    ("general.working_days_per_month", "30", "general", "Working days per month", SettingDataType.NUMBER),
]


def _parse_number(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def normalize_value(value: Union[str, int, float, bool]) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def check_value_type(key: str, value: str, data_type: str) -> None:
    if data_type == SettingDataType.NUMBER.value and _parse_number(value) is None:
        raise ValidationError(f"Setting '{key}' expects a number, got '{value}'")
    if data_type == SettingDataType.BOOLEAN.value and value.strip().lower() not in BOOLEAN_VALUES:
        raise ValidationError(f"Setting '{key}' expects a boolean, got '{value}'")


class SettingsService(BaseService):

    # --- Reads ---

    def _get_row(self, key: str, for_update: bool = False) -> Optional[SystemSetting]:
        query = self.db.query(SystemSetting).filter(SystemSetting.key == key)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_setting(self, key: str) -> Optional[str]:
        row = self._get_row(key)
        return row.value if row else None

    def get_setting_as_number(self, key: str, default: float = 0) -> float:
        number = _parse_number(self.get_setting(key))
        return default if number is None else number

    def get_setting_as_boolean(self, key: str, default: bool = False) -> bool:
        value = self.get_setting(key)
        if not value:
            return default
        return value.strip().lower() in TRUE_VALUES

    def get_all_settings(self) -> List[SystemSetting]:
        return self.db.query(SystemSetting).order_by(SystemSetting.category, SystemSetting.key).all()

    def get_settings_by_category(self, category: str) -> List[SystemSetting]:
        return (
            self.db.query(SystemSetting)
            .filter(SystemSetting.category == category)
            .order_by(SystemSetting.key)
            .all()
        )

    def load_system_configuration(self) -> SystemConfiguration:
        """
        Build the typed configuration from stored ``<section>.<field>`` keys.
        Values that fail validation fall back to the field default and are
        reported in the log.
        """
        raw: Dict[str, Dict[str, Any]] = {}
        for row in self.db.query(SystemSetting).all():
            section, _, field = row.key.partition(".")
            if field:
                raw.setdefault(section, {})[field] = row.value

        sections = {}
        for section, model_field in SystemConfiguration.model_fields.items():
            section_cls = model_field.annotation
            values = {
                k: v for k, v in raw.get(section, {}).items()
                if k in section_cls.model_fields
            }
            try:
                sections[section] = section_cls(**values)
            except PydanticValidationError as exc:
                for error in exc.errors():
                    field = str(error["loc"][0])
                    self.log_warning(
                        f"Invalid value for setting '{section}.{field}': {error['msg']}; using default",
                        setting_key=f"{section}.{field}",
                    )
                    values.pop(field, None)
                sections[section] = section_cls(**values)
        return SystemConfiguration(**sections)

    # --- Writes ---

    def create_setting(self, data: SystemSettingCreate) -> SystemSetting:
        if self._get_row(data.key) is not None:
            raise DuplicateSettingError(data.key)
        check_value_type(data.key, data.value, data.data_type.value)

        setting = SystemSetting(
            key=data.key,
            value=data.value,
            category=data.category,
            label=data.label,
            description=data.description,
            data_type=data.data_type.value,
            is_editable=data.is_editable,
            updated_by=self.actor.user_id,
            updated_by_name=self.actor.user_name,
        )
        self.db.add(setting)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same key
            self.db.rollback()
            raise DuplicateSettingError(data.key)
        self.db.refresh(setting)

        self.audit(AuditEntity.SYSTEM_SETTING, setting.id, AuditAction.CREATE, new_data=setting)
        return setting

    def update_setting(self, key: str, value: Union[str, int, float, bool]) -> SystemSetting:
        setting = self._get_row(key, for_update=True)
        if setting is None:
            raise NotFoundError(f"Setting '{key}' not found")
        if not setting.is_editable:
            raise SettingNotEditableError(key)

        value = normalize_value(value)
        check_value_type(key, value, setting.data_type)

        old_data = snapshot(setting)
        setting.value = value
        setting.updated_by = self.actor.user_id
        setting.updated_by_name = self.actor.user_name
        self.commit()
        self.db.refresh(setting)
        self.log_info(f"Setting '{key}' updated", setting_key=key)

        self.audit(AuditEntity.SYSTEM_SETTING, setting.id, AuditAction.UPDATE, old_data=old_data, new_data=setting)
        return setting

    def delete_setting(self, key: str) -> None:
        setting = self._get_row(key, for_update=True)
        if setting is None:
            raise NotFoundError(f"Setting '{key}' not found")
        if not setting.is_editable:
            raise SettingNotEditableError(key)

        old_data = snapshot(setting)
        setting_id = setting.id
        self.db.delete(setting)
        self.commit()
        self.log_info(f"Setting '{key}' deleted", setting_key=key)

        self.audit(AuditEntity.SYSTEM_SETTING, setting_id, AuditAction.DELETE, old_data=old_data)

    def seed_defaults(self) -> int:
        """Insert any missing well-known settings. Returns the number created."""
        existing = {key for (key,) in self.db.query(SystemSetting.key).all()}
        created = 0
        for key, value, category, label, data_type in DEFAULT_SETTINGS:
            if key in existing:
                continue
            self.db.add(SystemSetting(
                key=key,
                value=value,
                category=category,
                label=label,
                data_type=data_type.value,
                is_editable=True,
            ))
            created += 1
        if created:
            self.commit()
        return created
