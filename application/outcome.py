# application/outcome.py
from dataclasses import dataclass, field
from typing import List, Optional

from domain.checkout import CheckoutWorkflowError
from domain.routes import NavigationTarget


@dataclass(frozen=True)
class CheckoutHandlerResult:
    success: bool
    skip_page: bool = False
    action_result: Optional[NavigationTarget] = None
    errors: List[CheckoutWorkflowError] = field(default_factory=list)
