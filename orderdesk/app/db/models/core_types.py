import enum

class OrderChannel(str, enum.Enum):
    admin = "admin"
    sales_rep = "sales-rep"
    customer_portal = "customer-portal"

class StockOperationKind(str, enum.Enum):
    create = "create"
    edit = "edit"
    delete = "delete"
    restore = "restore"

class OrderNumberErrorCode(str, enum.Enum):
    invalid_channel = "INVALID_CHANNEL"
    missing_actor = "MISSING_ACTOR"

class CounterBackend(str, enum.Enum):
    memory = "memory"
    database = "database"
