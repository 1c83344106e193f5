# db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import config

_engine_opts = {"pool_pre_ping": True}
if not config.DATABASE_URL.startswith("sqlite"):
    _engine_opts.update(
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_recycle=1800,
    )

engine = create_engine(config.DATABASE_URL, **_engine_opts)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
