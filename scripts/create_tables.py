# scripts/create_tables.py
from sqlalchemy import inspect
from toronto_time.config import Config
from toronto_time.db import build_engine
from toronto_time.models import Base


def create_tables(database_url: str = Config.DATABASE_URL):
    engine = build_engine(database_url)
    existed = inspect(engine).has_table("time_log")
    Base.metadata.create_all(engine)
    engine.dispose()

    print(f"✅ time_log {'already present' if existed else 'created'}")
    return not existed


if __name__ == "__main__":
    create_tables()
