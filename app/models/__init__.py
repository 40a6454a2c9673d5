# Auto-parts shop: database models
# Import all models here for SQLAlchemy discovery

from app.models.customer import CustomerRecord   # noqa
from app.models.product import ProductRecord     # noqa
from app.models.order import OrderRecord         # noqa
