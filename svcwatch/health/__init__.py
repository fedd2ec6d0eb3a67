"""Health subsystem — result model, platform strategies, dispatcher."""

from .engine import STRATEGIES, ServiceChecker, execute_check
from .models import CheckOutcome, CheckRequest, Status
