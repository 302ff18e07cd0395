"""ORM Models — SQLAlchemy declarative models for the sake catalog.

Invariants:
    - All models inherit from Base (db/base.py)
    - Foreign keys carry the RESTRICT / CASCADE rules of the migration

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.sake_type import SakeType  # noqa: F401
from app.models.brewery import Brewery  # noqa: F401
from app.models.drink_style import DrinkStyle, sake_drink_styles  # noqa: F401
from app.models.sake import Sake  # noqa: F401
