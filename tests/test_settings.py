import pytest

from app.core.exceptions import (
    DuplicateSettingError,
    NotFoundError,
    SettingNotEditableError,
    ValidationError,
)
from app.models.system_setting import SettingDataType, SystemSetting
from app.schemas.settings import SystemSettingCreate
from app.services.settings_service import DEFAULT_SETTINGS, SettingsService


@pytest.fixture
def seeded(db_session, actor):
    service = SettingsService(db_session, actor)
    service.seed_defaults()
    return service


def test_seed_is_idempotent(db_session):
    service = SettingsService(db_session)
    assert service.seed_defaults() == len(DEFAULT_SETTINGS)
    assert service.seed_defaults() == 0


def test_typed_reads(seeded):
    assert seeded.get_setting("general.currency") == "SAR"
    assert seeded.get_setting_as_number("leave.annual_days") == 21
    assert seeded.get_setting_as_number("missing.key", default=7) == 7
    assert seeded.get_setting_as_boolean("missing.key", default=True) is True


def test_non_numeric_value_falls_back_to_default(db_session, seeded):
    row = db_session.query(SystemSetting).filter(SystemSetting.key == "general.company_name").one()
    assert seeded.get_setting_as_number(row.key, default=3) == 3


def test_update_validates_type(seeded):
    with pytest.raises(ValidationError):
        seeded.update_setting("tax.vat_rate", "fifteen")
    updated = seeded.update_setting("tax.vat_rate", 5)
    assert updated.value == "5"
    assert updated.updated_by == "u-1"


def test_boolean_values_are_normalized(seeded):
    seeded.create_setting(SystemSettingCreate(
        key="general.show_logo", value="true", category="general",
        label="Show logo", data_type=SettingDataType.BOOLEAN,
    ))
    assert seeded.update_setting("general.show_logo", False).value == "false"
    assert seeded.get_setting_as_boolean("general.show_logo") is False


def test_duplicate_key_rejected(seeded):
    with pytest.raises(DuplicateSettingError):
        seeded.create_setting(SystemSettingCreate(
            key="general.currency", value="USD", category="general", label="Currency",
        ))


def test_locked_setting_cannot_change(seeded):
    seeded.create_setting(SystemSettingCreate(
        key="general.install_id", value="abc", category="general",
        label="Install id", is_editable=False,
    ))
    with pytest.raises(SettingNotEditableError):
        seeded.update_setting("general.install_id", "xyz")
    with pytest.raises(SettingNotEditableError):
        seeded.delete_setting("general.install_id")
    assert seeded.get_setting("general.install_id") == "abc"


def test_missing_setting(seeded):
    with pytest.raises(NotFoundError):
        seeded.update_setting("nope", "1")
    with pytest.raises(NotFoundError):
        seeded.delete_setting("nope")


def test_typed_configuration(seeded):
    config = seeded.load_system_configuration()
    assert config.insurance.social_rate == 9
    assert config.leave.annual_days == 21
    assert config.general.currency == "SAR"


def test_invalid_stored_value_uses_default(db_session, seeded):
    row = db_session.query(SystemSetting).filter(SystemSetting.key == "leave.annual_days").one()
    row.value = "many"
    db_session.commit()

    config = seeded.load_system_configuration()
    assert config.leave.annual_days == 21


def test_settings_api(client, db_session):
    SettingsService(db_session).seed_defaults()

    leave = client.get("/api/settings?category=leave").json()
    assert {s["key"] for s in leave} >= {"leave.annual_days", "leave.sick_days"}

    response = client.put("/api/settings?key=leave.annual_days", json={"value": 25})
    assert response.status_code == 200
    assert response.json()["value"] == "25"
    assert client.get("/api/settings/typed").json()["leave"]["annual_days"] == 25

    bad = client.put("/api/settings?key=leave.annual_days", json={"value": "lots"})
    assert bad.status_code == 400

    assert client.delete("/api/settings?key=general.tax_number").json() == {"success": True}
    assert client.delete("/api/settings?key=general.tax_number").status_code == 404
