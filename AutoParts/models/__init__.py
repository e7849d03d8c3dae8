# Model imports - organized by domain
# Core models (database engine and shared components)
from .models import *

# Domain-specific models
from .category_models import *
from .supplier_models import *
from .item_models import *
from .vehicle_models import *
from .fitment_models import *
