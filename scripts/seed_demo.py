from app.database import SessionLocal, init_db
from app.models.contractor import Contractor
from app.models.employee import Employee
from app.services.settings_service import SettingsService

EMPLOYEES = [
    ("Ahmed Mohammed", "Editor-in-Chief", 15000, 1350),
    ("Fatima Ali", "Senior Editor", 12000, 1080),
    ("Khalid Saeed", "Graphic Designer", 10000, 900),
    ("Noura Abdullah", "Editor", 9000, 810),
    ("Mohammed Hassan", "Photojournalist", 8500, 765),
]

CONTRACTORS = [
    ("Sara Ibrahim", "Freelance Writer", 5000),
    ("Omar Youssef", "Photographer", 4500),
    ("Layla Ahmed", "Translator", 4000),
]

def seed():
    init_db()
    db = SessionLocal()
    try:
        created = SettingsService(db).seed_defaults()
        print(f"Seeded {created} default setting(s)")

        count = db.query(Employee).count()
        if count:
            print(f"{count} employee(s) already present, skipping demo staff")
            return

        for order, (name, position, salary, insurance) in enumerate(EMPLOYEES):
            db.add(Employee(
                name=name,
                position=position,
                base_salary=salary,
                social_insurance=insurance,
                sort_order=order,
                is_active=True,
            ))
        for order, (name, position, salary) in enumerate(CONTRACTORS):
            db.add(Contractor(name=name, position=position, salary=salary, sort_order=order, is_active=True))
        db.commit()
        print(f"Added {len(EMPLOYEES)} employees and {len(CONTRACTORS)} contractors")
    except Exception as e:
        db.rollback()
        print(f"Error seeding demo data: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    seed()
