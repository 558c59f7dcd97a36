"""
Records feature.

Comparing results, computing best and average, and keeping the record
tags of a category consistent when results are added, changed or removed.
"""

from .models import RecordConfig
from .repository import RecordConfigRepository, get_record_configs, ensure_record_configs
from .comparison import compare_singles, compare_averages
from .calculator import get_best_and_average, is_average_record_eligible
from .lookup import get_record_result
from .assigner import set_result_records, set_result_records_and_regions
from .invalidator import cancel_future_records
from .restorer import ResultSnapshot, set_future_records

__all__ = [
    "RecordConfig",
    "RecordConfigRepository",
    "get_record_configs",
    "ensure_record_configs",
    "compare_singles",
    "compare_averages",
    "get_best_and_average",
    "is_average_record_eligible",
    "get_record_result",
    "set_result_records",
    "set_result_records_and_regions",
    "cancel_future_records",
    "ResultSnapshot",
    "set_future_records",
]
