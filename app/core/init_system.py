import logging
from app.database import SessionLocal
from app.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

def init_system_data():
    """
    Seeds any missing well-known settings and checks that the stored values
    parse into the typed configuration. Invalid values are logged and fall
    back to their defaults.
    """
    db = SessionLocal()
    try:
        service = SettingsService(db)
        created = service.seed_defaults()
        if created:
            logger.info(f"✓ Seeded {created} default setting(s)")
        else:
            logger.info("System initialization check: settings already present.")

        config = service.load_system_configuration()
        logger.info(
            "✓ System configuration loaded",
            extra={"currency": config.general.currency, "annual_leave_days": config.leave.annual_days},
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Error during system initialization check: {str(e)}", exc_info=True)
    finally:
        db.close()
