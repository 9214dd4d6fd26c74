from enum import Enum

class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"

class SortKey(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
