"""Partial update payload for issues"""

from dataclasses import dataclass
from typing import Any, Optional, Union


class _Missing:
    """Marker for a patch field that was not supplied"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING: Any = _Missing()


def is_present(value) -> bool:
    return value is not MISSING


@dataclass(frozen=True)
class IssuePatch:
    """Optional-field update for an issue.

    Each field is either ``MISSING`` (leave unchanged) or the new value.
    ``assignee_id`` is nullable within the option: ``None`` is the explicit
    request to clear the assignee, distinct from leaving the field out.
    ``status`` carries the raw requested value; it is validated while the
    update rules run so that failures surface in rule order.
    """

    title: Union[str, _Missing] = MISSING
    description: Union[str, _Missing] = MISSING
    status: Union[str, _Missing] = MISSING
    assignee_id: Union[Optional[int], _Missing] = MISSING

    @property
    def assigns_user(self) -> bool:
        """True when the patch names a user to assign"""
        return is_present(self.assignee_id) and self.assignee_id is not None

    @property
    def clears_assignee(self) -> bool:
        return is_present(self.assignee_id) and self.assignee_id is None
