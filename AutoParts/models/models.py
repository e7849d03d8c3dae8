"""
Core Models Module

Minimal models.py containing database engine configuration.
Domain-specific models live in separate files.
"""

from sqlalchemy import create_engine

# Import all domain models to ensure they're registered with SQLModel metadata
from .category_models import *
from .supplier_models import *
from .item_models import *
from .vehicle_models import *
from .fitment_models import *

from AutoParts.utils.config import load_settings

settings = load_settings()

if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        echo=settings.sql_echo,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        settings.database_url,
        echo=settings.sql_echo,
        pool_size=20,
        max_overflow=30,
        pool_timeout=30,
        pool_recycle=3600,
    )
