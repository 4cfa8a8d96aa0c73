from __future__ import annotations

import snowflake.connector

from app.config import settings


# MODULE-LEVEL CONNECTION (USED BY REPOSITORIES)


def get_snowflake_connection():
    """
    Snowflake connection factory.
    Used by SnowflakeCelebrityRepository; credentials come from settings/.env.
    """
    password = settings.SNOWFLAKE_PASSWORD
    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=password.get_secret_value() if password else None,
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
