"""Validation checks base interface.

This module defines the protocol (interface) that all validation checks must implement.
Each check is responsible for one validation pass over the trip collection (e.g.,
record fields, odometer continuity, time plausibility).

To implement a new validation check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class that implements the ValidationCheck protocol
3. Implement `validate()` and give the class a `check_id`
4. Add the check to the ALL_CHECKS list in registry.py
5. Add its rules and their severities to config.py

Example:
    ```python
    # checks/my_check.py
    from typing import List
    from ..grouping import ValidationContext
    from ..models import CheckResult

    class MyCheck:
        check_id = "my_check"

        def validate(self, context: ValidationContext) -> List[CheckResult]:
            messages = [...]
            return [CheckResult.for_rule(self.check_id, "my_rule", messages)]
    ```

Checks must be pure: they never mutate the context, never raise for
malformed trip data and keep all accumulators local to ``validate``.
"""

from __future__ import annotations

from typing import List, Protocol

from ..grouping import ValidationContext
from ..models import CheckResult


class ValidationCheck(Protocol):
    """Protocol defining the interface for validation checks.

    Use duck typing (Protocol) for flexibility - no need to inherit from a base class.

    Attributes:
        check_id: Identifier reported on every CheckResult the check produces.
    """

    check_id: str

    def validate(self, context: ValidationContext) -> List[CheckResult]:
        """Run the validation check.

        Args:
            context: Trips, per-vehicle ordered trips, vehicles and thresholds.

        Returns:
            One CheckResult per rule of the check, passed or failed, in a
            fixed order.
        """
        ...


__all__ = ["ValidationCheck"]
