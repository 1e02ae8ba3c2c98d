import logging

from sqlalchemy import text

from dancey_portal.database import Base, engine
from dancey_portal.models import *

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("recreate_db")


def recreate_database():
    """Drop every portal table with CASCADE and create the schema again. Development only."""
    logger.info("Dropping all portal tables (CASCADE)...")
    table_names = [table.name for table in reversed(Base.metadata.sorted_tables)]

    with engine.connect() as connection:
        for table_name in table_names:
            logger.info("Dropping table: %s", table_name)
            connection.execute(text(f'DROP TABLE IF EXISTS "{table_name}" CASCADE;'))
            connection.commit()

    logger.info("Creating all tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database recreated.")


if __name__ == "__main__":
    recreate_database()
