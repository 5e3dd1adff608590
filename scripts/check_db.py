from sqlalchemy import inspect

from app.database import engine

def check_db():
    inspector = inspect(engine)
    tables = inspector.get_table_names()
    if not tables:
        print(f"No tables found at {engine.url}")
        return

    print("Tables in DB:")
    for table in tables:
        print(f" - {table}")
        for col in inspector.get_columns(table):
            print(f"   * {col['name']} ({col['type']})")

if __name__ == "__main__":
    check_db()
